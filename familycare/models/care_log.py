"""
care_log.py

심방/돌봄 기록(CareLog) 모델 정의 파일.

스태프가 가정을 방문하거나 연락한 내역을 남긴다.
가정 또는 작성 스태프가 삭제되면 기록도 함께 삭제된다.

"""

import uuid
import datetime as dt
from enum import Enum

from sqlalchemy import Date, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from familycare.db.base import Base, utcnow


class CareLogType(str, Enum):
    VISIT = "visit"
    CALL = "call"
    EMAIL = "email"
    TEXT = "text"
    OTHER = "other"


class CareLogStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class CareLog(Base):
    __tablename__ = "care_logs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    family_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("families.id", ondelete="CASCADE"), index=True, nullable=False
    )
    staff_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False
    )

    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    type: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default=CareLogStatus.PENDING.value)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    family: Mapped["Family"] = relationship(back_populates="care_logs")
    staff: Mapped["Staff"] = relationship()
