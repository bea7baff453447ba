"""
services/donations.py

헌금(Donation) 도메인의 비즈니스 로직 모음.

주요 기능:
- 헌금 목록 검색 (가정 이름, 유형, 날짜 범위, 처리 상태 플래그)
- 헌금 생성 / 수정 / 삭제
- 목록 / 엑셀 내보내기용 행 데이터 생성

설계 원칙:
- 금액은 Decimal 로만 계산 (float 사용 금지)
- 헌금은 반드시 존재하는 가정에 속함
- 목록 조회와 내보내기는 같은 검색 조건 함수를 공유

관련 파일:
- familycare.models.donation   : Donation 모델
- familycare.routers.donations : 헌금 API / CSV, XLSX 내보내기

"""

import uuid
from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy import select, desc
from sqlalchemy.orm import Session, joinedload

from familycare.models.donation import Donation, DonationType
from familycare.models.family import Family


"""
헌금 목록 검색

- family_name : 가정 이름 부분 일치 (대소문자 무시)
- type        : Regular / Special
- received / email_for_thank / email_for_tax : True / False / None(조건 없음)

정렬: 헌금 날짜 최신순

"""

def list_donations(
    db: Session,
    *,
    family_name: str | None = None,
    family_id: uuid.UUID | None = None,
    type: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    received: bool | None = None,
    email_for_thank: bool | None = None,
    email_for_tax: bool | None = None,
) -> list[Donation]:
    stmt = select(Donation).join(Donation.family).options(joinedload(Donation.family))

    if family_name:
        stmt = stmt.where(Family.family_name.ilike(f"%{family_name.strip()}%"))
    if family_id:
        stmt = stmt.where(Donation.family_id == family_id)
    if type and type.lower() != "all":
        stmt = stmt.where(Donation.type == type)
    if date_from:
        stmt = stmt.where(Donation.date >= date_from)
    if date_to:
        stmt = stmt.where(Donation.date <= date_to)
    if received is not None:
        stmt = stmt.where(Donation.received.is_(received))
    if email_for_thank is not None:
        stmt = stmt.where(Donation.email_for_thank.is_(email_for_thank))
    if email_for_tax is not None:
        stmt = stmt.where(Donation.email_for_tax.is_(email_for_tax))

    return db.scalars(stmt.order_by(desc(Donation.date), desc(Donation.created_at))).all()


def total_amount(donations: list[Donation]) -> Decimal:
    return sum((d.amount for d in donations), Decimal("0.00"))


def get_donation(db: Session, donation_id: uuid.UUID) -> Donation | None:
    return db.scalar(
        select(Donation).options(joinedload(Donation.family)).where(Donation.id == donation_id)
    )


def create_donation(db: Session, values: dict[str, Any], *, created_by: uuid.UUID) -> Donation:
    values = dict(values)
    if not db.get(Family, values["family_id"]):
        raise ValueError("Family not found")
    if values["amount"] <= 0:
        raise ValueError("amount must be greater than 0")
    values["type"] = DonationType(values.get("type") or DonationType.REGULAR).value

    donation = Donation(**values, created_by=created_by)
    db.add(donation)
    db.flush()
    return donation


def update_donation(db: Session, donation: Donation, changes: dict[str, Any]) -> Donation:
    changes = dict(changes)

    if changes.get("family_id") is not None and not db.get(Family, changes["family_id"]):
        raise ValueError("Family not found")
    if changes.get("amount") is not None and changes["amount"] <= 0:
        raise ValueError("amount must be greater than 0")
    if changes.get("type") is not None:
        changes["type"] = DonationType(changes["type"]).value

    for field, value in changes.items():
        # comment 외에는 null 로 지울 수 없음
        if value is None and field != "comment":
            continue
        setattr(donation, field, value)
    db.flush()
    return donation


def delete_donation(db: Session, donation: Donation) -> None:
    db.delete(donation)
    db.flush()


EXPORT_HEADER = [
    "date",
    "family_code",
    "family_name",
    "type",
    "amount",
    "received",
    "email_for_thank",
    "email_for_tax",
    "comment",
]


def export_rows(donations: list[Donation]) -> list[list[Any]]:
    """CSV / XLSX 공통 행 데이터 (헤더 제외)"""
    return [
        [
            d.date.isoformat(),
            d.family.family_code or "",
            d.family.family_name,
            d.type,
            d.amount,
            d.received,
            d.email_for_thank,
            d.email_for_tax,
            d.comment or "",
        ]
        for d in donations
    ]
