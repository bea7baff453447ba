"""
staff.py

스태프(Staff) 및 그룹(StaffGroup), 로그인 기록 모델 정의 파일.

시스템에 로그인하는 사용자는 모두 스태프이며,
닉네임 + 4자리 PIN으로 로그인한다.
그룹(group)에 따라 접근 가능한 관리 기능이 달라진다.

"""

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from familycare.db.base import Base, utcnow


"""
스태프 그룹 정의

- ADM     : 관리자 (스태프 관리 포함 전체 권한)
- MGM     : 매니저 (가정/부서/행사/공지 관리)
- TEAM-A  : 일반 팀 스태프
- TEAM-B  : 일반 팀 스태프

"""

class StaffGroup(str, Enum):
    ADM = "ADM"
    MGM = "MGM"
    TEAM_A = "TEAM-A"
    TEAM_B = "TEAM-B"


class Staff(Base):
    __tablename__ = "staff"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    nick_name: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    pin_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    group: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    last_login: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    login_logs: Mapped[list["StaffLoginLog"]] = relationship(
        back_populates="staff", cascade="all, delete-orphan"
    )


"""
스태프 로그인 시도 기록

- 성공/실패 모두 기록 (존재하는 닉네임에 한함)
- failure_reason : 실패 사유 (예: "Invalid PIN", "Inactive account")
- 로그는 수정/삭제하지 않는 것을 전제로 설계

"""

class StaffLoginLog(Base):
    __tablename__ = "staff_login_logs"
    __table_args__ = (
        Index("ix_staff_login_logs_login_time", "login_time"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    staff_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("staff.id", ondelete="CASCADE"), index=True, nullable=False
    )

    login_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(500), nullable=True)
    success: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    failure_reason: Mapped[str | None] = mapped_column(String(255), nullable=True)

    staff: Mapped[Staff] = relationship(back_populates="login_logs")
