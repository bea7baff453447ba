"""
services/events.py

행사(Event) / 출석(EventAttendance) 도메인의 비즈니스 로직 모음.

주요 기능:
- 행사 생성 시 전체 가족 구성원에 대한 pending 출석 행 생성
- 행사 날짜는 항상 주일(일요일)로 보정
- 출석 상태 변경 및 출석 통계 계산

설계 원칙:
- 출석 행은 (행사, 구성원) 당 하나
- 출석 상태를 바꾼 스태프를 updated_by 로 기록

관련 파일:
- familycare.models.event     : Event / EventAttendance 모델
- familycare.core.utils       : next_sunday
- familycare.routers.events   : 행사 / 출석 API

"""

import logging
import uuid
from collections import Counter
from typing import Any

from sqlalchemy import select, desc
from sqlalchemy.orm import Session, selectinload

from familycare.core.utils import next_sunday
from familycare.models.event import AttendanceStatus, Event, EventAttendance
from familycare.models.family import Family, FamilyMember

logger = logging.getLogger(__name__)

# 학년 그룹이 없는 구성원(성인)의 통계 키
ADULT_GROUP = "Adult"


def list_events(db: Session, *, active: bool | None = None) -> list[Event]:
    stmt = select(Event).options(selectinload(Event.creator))
    if active:
        stmt = stmt.where(Event.is_active.is_(True))
    return db.scalars(stmt.order_by(desc(Event.date), Event.time)).all()


def get_event(db: Session, event_id: uuid.UUID) -> Event | None:
    return db.scalar(select(Event).options(selectinload(Event.creator)).where(Event.id == event_id))


"""
행사 생성

- date 가 일요일이 아니면 다음 일요일로 이동
- 모든 가정의 모든 구성원에 대해 pending 출석 행 생성

"""

def create_event(db: Session, values: dict[str, Any], *, created_by: uuid.UUID) -> Event:
    values = dict(values)
    values["date"] = next_sunday(values["date"])

    event = Event(**values, created_by=created_by)
    db.add(event)
    db.flush()

    members = db.execute(select(FamilyMember.id, FamilyMember.family_id)).all()
    db.add_all(
        EventAttendance(
            event_id=event.id,
            family_id=family_id,
            family_member_id=member_id,
            attendance_status=AttendanceStatus.PENDING.value,
            updated_by=created_by,
        )
        for member_id, family_id in members
    )
    db.flush()

    logger.info("event %s created for %s with %d attendance rows", event.title, event.date, len(members))
    return event


def update_event(db: Session, event: Event, changes: dict[str, Any]) -> Event:
    changes = dict(changes)
    if changes.get("date") is not None:
        changes["date"] = next_sunday(changes["date"])

    for field, value in changes.items():
        if value is None:
            continue
        setattr(event, field, value)
    db.flush()
    return event


def delete_event(db: Session, event: Event) -> None:
    db.delete(event)
    db.flush()


def list_attendance(db: Session, event_id: uuid.UUID) -> list[EventAttendance]:
    return db.scalars(
        select(EventAttendance)
        .join(EventAttendance.family)
        .outerjoin(EventAttendance.family_member)
        .options(
            selectinload(EventAttendance.family),
            selectinload(EventAttendance.family_member),
        )
        .where(EventAttendance.event_id == event_id)
        .order_by(Family.family_name, FamilyMember.display_order)
    ).all()


def get_attendance(db: Session, attendance_id: uuid.UUID) -> EventAttendance | None:
    return db.scalar(select(EventAttendance).where(EventAttendance.id == attendance_id))


def update_attendance(
    db: Session, attendance: EventAttendance, *, status: AttendanceStatus | str, updated_by: uuid.UUID
) -> EventAttendance:
    attendance.attendance_status = AttendanceStatus(status).value
    attendance.updated_by = updated_by
    db.flush()
    return attendance


"""
행사 출석 통계

- 상태별 인원 (present / absent / pending)
- 한 명 이상 출석한 가정 수
- 출석 인원의 학년 그룹별 분포 (그룹 없으면 Adult)

"""

def attendance_stats(db: Session, event_id: uuid.UUID) -> dict[str, Any]:
    rows = list_attendance(db, event_id)

    by_status = Counter(r.attendance_status for r in rows)
    present = [r for r in rows if r.attendance_status == AttendanceStatus.PRESENT.value]
    by_group = Counter(
        (r.family_member.grade_group if r.family_member and r.family_member.grade_group else ADULT_GROUP)
        for r in present
    )

    return {
        "total": len(rows),
        "present": by_status.get(AttendanceStatus.PRESENT.value, 0),
        "absent": by_status.get(AttendanceStatus.ABSENT.value, 0),
        "pending": by_status.get(AttendanceStatus.PENDING.value, 0),
        "present_families": len({r.family_id for r in present}),
        "present_by_grade_group": dict(by_group),
    }
