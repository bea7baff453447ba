"""
services/care_logs.py

심방/돌봄 기록 비즈니스 로직.

- 작성 스태프를 지정하지 않으면 현재 로그인한 스태프로 기록
- 가정 / 스태프 존재 여부 검증

"""

import uuid
from typing import Any

from sqlalchemy import select, desc
from sqlalchemy.orm import Session, selectinload

from familycare.models.care_log import CareLog, CareLogStatus, CareLogType
from familycare.models.family import Family
from familycare.models.staff import Staff


def list_family_care_logs(db: Session, family_id: uuid.UUID) -> list[CareLog]:
    return db.scalars(
        select(CareLog)
        .options(selectinload(CareLog.staff))
        .where(CareLog.family_id == family_id)
        .order_by(desc(CareLog.date), desc(CareLog.created_at))
    ).all()


def get_care_log(db: Session, care_log_id: uuid.UUID) -> CareLog | None:
    return db.scalar(select(CareLog).where(CareLog.id == care_log_id))


def _enum_values(values: dict[str, Any]) -> dict[str, Any]:
    for key, enum_cls in (("type", CareLogType), ("status", CareLogStatus)):
        if values.get(key) is not None:
            values[key] = enum_cls(values[key]).value
    return values


def create_care_log(db: Session, values: dict[str, Any], *, current_staff_id: uuid.UUID) -> CareLog:
    values = _enum_values(dict(values))
    if not db.get(Family, values["family_id"]):
        raise ValueError("Family not found")

    values["staff_id"] = values.get("staff_id") or current_staff_id
    if not db.get(Staff, values["staff_id"]):
        raise ValueError("Staff not found")

    log = CareLog(**values)
    db.add(log)
    db.flush()
    return log


def update_care_log(db: Session, log: CareLog, changes: dict[str, Any]) -> CareLog:
    changes = _enum_values(dict(changes))
    for field, value in changes.items():
        if value is None:
            continue
        setattr(log, field, value)
    db.flush()
    return log


def delete_care_log(db: Session, log: CareLog) -> None:
    db.delete(log)
    db.flush()
