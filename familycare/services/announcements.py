"""
services/announcements.py

공지사항 비즈니스 로직.

"활성" 공지: is_active 이고 start_date <= 현재 <= end_date
- 로그인 화면용 : 활성 + is_login_required = False
- 대시보드용    : 활성 + is_login_required = True

"""

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import select, desc
from sqlalchemy.orm import Session, selectinload

from familycare.core.utils import as_utc
from familycare.db.base import utcnow
from familycare.models.announcement import Announcement, AnnouncementType


def _base_query():
    return select(Announcement).options(selectinload(Announcement.author))


def list_announcements(db: Session) -> list[Announcement]:
    return db.scalars(_base_query().order_by(desc(Announcement.created_at))).all()


def list_active_announcements(
    db: Session, *, login_required: bool | None = None, now: datetime | None = None
) -> list[Announcement]:
    now = as_utc(now) or utcnow()
    stmt = _base_query().where(
        Announcement.is_active.is_(True),
        Announcement.start_date <= now,
        Announcement.end_date >= now,
    )
    if login_required is not None:
        stmt = stmt.where(Announcement.is_login_required.is_(login_required))
    return db.scalars(stmt.order_by(desc(Announcement.start_date))).all()


def get_announcement(db: Session, announcement_id: uuid.UUID) -> Announcement | None:
    return db.scalar(_base_query().where(Announcement.id == announcement_id))


def get_public_announcement(db: Session, announcement_id: uuid.UUID) -> Announcement | None:
    """로그인 없이 볼 수 있는 공지만 반환 (활성 + 기간 내 + 로그인 불필요)"""
    announcement = get_announcement(db, announcement_id)
    if not announcement or not announcement.is_active or announcement.is_login_required:
        return None
    now = utcnow()
    if not (as_utc(announcement.start_date) <= now <= as_utc(announcement.end_date)):
        return None
    return announcement


def create_announcement(db: Session, values: dict[str, Any], *, created_by: uuid.UUID) -> Announcement:
    values = dict(values)
    values["type"] = AnnouncementType(values.get("type") or AnnouncementType.MEDIUM).value
    if values["end_date"] < values["start_date"]:
        raise ValueError("endDate must be on or after startDate")

    announcement = Announcement(**values, created_by=created_by)
    db.add(announcement)
    db.flush()
    return announcement


def update_announcement(db: Session, announcement: Announcement, changes: dict[str, Any]) -> Announcement:
    changes = {k: v for k, v in changes.items() if v is not None}
    if "type" in changes:
        changes["type"] = AnnouncementType(changes["type"]).value

    start = as_utc(changes.get("start_date", announcement.start_date))
    end = as_utc(changes.get("end_date", announcement.end_date))
    if end < start:
        raise ValueError("endDate must be on or after startDate")

    for field, value in changes.items():
        setattr(announcement, field, value)
    db.flush()
    return announcement


def delete_announcement(db: Session, announcement: Announcement) -> None:
    db.delete(announcement)
    db.flush()
