"""
donation.py

헌금(Donation) 모델 정의 파일.

가정 단위로 헌금 내역을 기록한다.
금액은 소수점 둘째 자리까지 정확히 다루기 위해 Numeric(10, 2)로 저장한다.

- type              : Regular(정기) / Special(특별)
- received          : 수령 확인 여부
- email_for_thank   : 감사 메일 발송 여부
- email_for_tax     : 기부금 영수증 메일 발송 여부

"""

import uuid
import datetime as dt
from decimal import Decimal
from enum import Enum

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Index, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from familycare.db.base import Base, utcnow


class DonationType(str, Enum):
    REGULAR = "Regular"
    SPECIAL = "Special"


class Donation(Base):
    __tablename__ = "donations"
    __table_args__ = (
        Index("ix_donations_date", "date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    family_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("families.id", ondelete="CASCADE"), index=True, nullable=False
    )

    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False, default=DonationType.REGULAR.value)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)

    received: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    email_for_thank: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    email_for_tax: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_by: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    family: Mapped["Family"] = relationship(back_populates="donations")
