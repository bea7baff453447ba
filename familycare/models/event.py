"""
event.py

행사(Event) / 행사 출석(EventAttendance) 모델 정의 파일.

행사는 주일(일요일) 날짜로만 등록되며,
행사가 생성되면 모든 가족 구성원에 대해 pending 출석 행이 만들어진다.

"""

import uuid
import datetime as dt
from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from familycare.db.base import Base, utcnow


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    PENDING = "pending"


class Event(Base):
    __tablename__ = "events"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    # "HH:MM"
    time: Mapped[str] = mapped_column(String(10), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_by: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    creator: Mapped["Staff"] = relationship()
    attendance: Mapped[list["EventAttendance"]] = relationship(back_populates="event", cascade="all, delete")


class EventAttendance(Base):
    __tablename__ = "event_attendance"
    __table_args__ = (
        UniqueConstraint("event_id", "family_member_id", name="uq_event_attendance_event_member"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    event_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("events.id", ondelete="CASCADE"), index=True, nullable=False
    )
    family_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("families.id", ondelete="CASCADE"), nullable=False
    )
    family_member_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("family_members.id", ondelete="CASCADE"), nullable=True
    )

    attendance_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AttendanceStatus.PENDING.value
    )
    updated_by: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False
    )

    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    event: Mapped[Event] = relationship(back_populates="attendance")
    family: Mapped["Family"] = relationship(back_populates="attendance")
    family_member: Mapped[Optional["FamilyMember"]] = relationship(back_populates="attendance")
