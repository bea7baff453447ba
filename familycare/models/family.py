"""
family.py

가정(Family) / 가족 구성원(FamilyMember) 모델 정의 파일.

교회에 방문하거나 등록한 가정 단위의 기본 정보와
구성원(남편, 아내, 자녀 등)의 개인 정보를 관리한다.
심방 기록, 헌금, 행사 출석 등 대부분의 기능이 이 모델을 기준으로 한다.

설계 원칙:
- family_code는 FM0001 형태의 순번 코드 (서비스 계층에서 생성)
- 가정 삭제 시 구성원 / 심방 기록 / 헌금 / 출석 기록도 함께 삭제
- 팀(Team) 삭제 시 가정은 삭제되지 않고 미배정(team_id=NULL) 상태가 됨

"""

import uuid
from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from familycare.db.base import Base, JSONList, utcnow


"""
가정 상태

- visit   : 방문
- member  : 등록 교인
- pending : 미정

"""

class MemberStatus(str, Enum):
    VISIT = "visit"
    MEMBER = "member"
    PENDING = "pending"


class Relationship(str, Enum):
    HUSBAND = "husband"
    WIFE = "wife"
    CHILD = "child"
    OTHER = "other"


class Family(Base):
    __tablename__ = "families"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    family_code: Mapped[str | None] = mapped_column(String(20), unique=True, nullable=True)

    family_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    visited_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    registration_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    member_status: Mapped[str] = mapped_column(String(50), nullable=False, default=MemberStatus.VISIT.value)

    phone_number: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    address: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    city: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    state: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    zip_code: Mapped[str] = mapped_column(String(10), nullable=False, default="")
    full_address: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    family_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    family_picture: Mapped[str | None] = mapped_column(String(500), nullable=True)
    life_group: Mapped[str | None] = mapped_column(String(255), nullable=True)
    support_team_member: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # 사업체 정보 (CSV 일괄 등록 시 채워짐)
    biz: Mapped[str | None] = mapped_column(String(255), nullable=True)
    biz_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    biz_category: Mapped[str | None] = mapped_column(String(255), nullable=True)
    biz_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    biz_intro: Mapped[str | None] = mapped_column(Text, nullable=True)

    team_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True
    )
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    members: Mapped[list["FamilyMember"]] = relationship(
        back_populates="family",
        cascade="all, delete-orphan",
        order_by=lambda: [FamilyMember.display_order, FamilyMember.created_at],
    )
    team: Mapped[Optional["Team"]] = relationship(back_populates="families")

    care_logs: Mapped[list["CareLog"]] = relationship(back_populates="family", cascade="all, delete")
    donations: Mapped[list["Donation"]] = relationship(back_populates="family", cascade="all, delete")
    attendance: Mapped[list["EventAttendance"]] = relationship(back_populates="family", cascade="all, delete")


class FamilyMember(Base):
    """가족 구성원.

    grade_level / grade_group / school 은 자녀(child)에게만 사용.
    courses: 수료한 양육 과정 코드 목록 (예: ["101", "201"])
    """

    __tablename__ = "family_members"
    __table_args__ = (
        Index("ix_family_members_family_display_order", "family_id", "display_order"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    family_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("families.id", ondelete="CASCADE"), nullable=False
    )

    # 아래 relationship 컬럼이 클래스 본문에서 relationship() 이름을 가리므로 관계를 먼저 정의
    family: Mapped[Family] = relationship(back_populates="members")
    attendance: Mapped[list["EventAttendance"]] = relationship(
        back_populates="family_member", cascade="all, delete"
    )

    korean_name: Mapped[str] = mapped_column(String(255), nullable=False)
    english_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    relationship: Mapped[str] = mapped_column(String(50), nullable=False)
    courses: Mapped[list[str]] = mapped_column(JSONList, nullable=False, default=list)

    grade_level: Mapped[str | None] = mapped_column(String(10), nullable=True)
    grade_group: Mapped[str | None] = mapped_column(String(50), nullable=True)
    school: Mapped[str | None] = mapped_column(String(255), nullable=True)

    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )
