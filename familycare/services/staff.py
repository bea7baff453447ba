"""
services/staff.py

스태프 계정 / 로그인 도메인의 비즈니스 로직 모음.

라우터(auth, staff)는 이 파일의 함수를 호출하고
ValueError 를 400 응답으로 변환하기만 한다.

설계 원칙:
- PIN 은 항상 4자리 숫자, 저장 시 bcrypt 해시
- 닉네임은 로그인 ID 이므로 전체 스태프(비활성 포함) 기준 유일
- 스태프 삭제는 Soft Delete (is_active=False)
- 존재하는 닉네임에 대한 로그인 시도는 성공/실패 모두 기록

관련 파일:
- familycare.models.staff     : Staff / StaffLoginLog 모델
- familycare.core.security    : PIN 해시 / 검증
- familycare.routers.auth     : 로그인 API
- familycare.routers.staff    : 스태프 관리 API

"""

import logging
import uuid
from typing import Any

from sqlalchemy import select, desc
from sqlalchemy.orm import Session

from familycare.core.security import get_pin_hash, validate_pin, verify_pin
from familycare.db.base import utcnow
from familycare.models.staff import Staff, StaffGroup, StaffLoginLog

logger = logging.getLogger(__name__)

LOGIN_LOG_MAX_LIMIT = 200


def get_staff_by_nickname(db: Session, nickname: str) -> Staff | None:
    return db.scalar(select(Staff).where(Staff.nick_name == nickname))


def list_active_staff(db: Session) -> list[Staff]:
    return db.scalars(
        select(Staff)
        .where(Staff.is_active.is_(True))
        .order_by(Staff.display_order, Staff.full_name)
    ).all()


def list_all_staff(db: Session) -> list[Staff]:
    return db.scalars(select(Staff).order_by(Staff.display_order, Staff.full_name)).all()


"""
로그인 처리

- 닉네임이 없으면 기록 없이 None
- 비활성 계정 / PIN 불일치는 실패 사유와 함께 기록 후 None
- 성공 시 last_login 갱신 후 Staff 반환

NOTE:
- db.commit()은 호출 측(라우터)에서 수행 (실패 기록도 커밋해야 함)

"""

def authenticate(
    db: Session,
    *,
    nickname: str,
    pin: str,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> Staff | None:
    staff = get_staff_by_nickname(db, nickname)
    if not staff:
        logger.info("login failed: unknown nickname %r", nickname)
        return None

    failure = None
    if not staff.is_active:
        failure = "Inactive account"
    elif not verify_pin(pin, staff.pin_hash):
        failure = "Invalid PIN"

    db.add(
        StaffLoginLog(
            staff_id=staff.id,
            ip_address=ip_address,
            user_agent=(user_agent or "")[:500] or None,
            success=failure is None,
            failure_reason=failure,
        )
    )

    if failure:
        logger.info("login failed for %s: %s", staff.nick_name, failure)
        return None

    staff.last_login = utcnow()
    logger.info("login succeeded for %s (%s)", staff.nick_name, staff.group)
    return staff


def _ensure_unique_nickname(db: Session, nick_name: str, *, exclude_id: uuid.UUID | None = None) -> None:
    stmt = select(Staff).where(Staff.nick_name == nick_name)
    if exclude_id is not None:
        stmt = stmt.where(Staff.id != exclude_id)
    if db.scalar(stmt):
        raise ValueError("Nickname already in use")


def create_staff(
    db: Session,
    *,
    full_name: str,
    nick_name: str,
    pin: str,
    group: StaffGroup,
    email: str | None = None,
    display_order: int = 0,
) -> Staff:
    validate_pin(pin)
    nick_name = nick_name.strip()
    _ensure_unique_nickname(db, nick_name)

    staff = Staff(
        full_name=full_name.strip(),
        nick_name=nick_name,
        pin_hash=get_pin_hash(pin),
        group=StaffGroup(group).value,
        email=email,
        display_order=display_order,
        is_active=True,
    )
    db.add(staff)
    db.flush()
    return staff


"""
스태프 정보 부분 수정 (관리자)

- changes: 요청 스키마의 exclude_unset 결과 (snake_case 키)
- pin 이 있으면 재해시, group 은 문자열 값으로 저장

"""

def update_staff(db: Session, staff: Staff, changes: dict[str, Any]) -> Staff:
    changes = dict(changes)

    if "nick_name" in changes and changes["nick_name"] is not None:
        changes["nick_name"] = changes["nick_name"].strip()
        _ensure_unique_nickname(db, changes["nick_name"], exclude_id=staff.id)

    pin = changes.pop("pin", None)
    if pin is not None:
        validate_pin(pin)
        staff.pin_hash = get_pin_hash(pin)

    if changes.get("group") is not None:
        changes["group"] = StaffGroup(changes["group"]).value

    for field, value in changes.items():
        # 필수 컬럼에 null 이 들어오면 무시
        if value is None and field in ("full_name", "nick_name", "group", "display_order", "is_active"):
            continue
        setattr(staff, field, value)

    db.flush()
    return staff


def deactivate_staff(db: Session, staff: Staff, *, actor: Staff) -> Staff:
    if staff.id == actor.id:
        raise ValueError("Cannot deactivate yourself")
    staff.is_active = False
    db.flush()
    return staff


def update_profile(
    db: Session,
    staff: Staff,
    *,
    current_pin: str,
    full_name: str | None = None,
    email: str | None = None,
    new_pin: str | None = None,
) -> Staff:
    if not verify_pin(current_pin, staff.pin_hash):
        raise ValueError("Current PIN is incorrect")

    if full_name is not None:
        staff.full_name = full_name.strip()
    if email is not None:
        staff.email = email
    if new_pin:
        validate_pin(new_pin)
        staff.pin_hash = get_pin_hash(new_pin)

    db.flush()
    return staff


def list_login_logs(db: Session, *, staff_id: uuid.UUID, limit: int = 20) -> list[StaffLoginLog]:
    limit = max(1, min(limit, LOGIN_LOG_MAX_LIMIT))
    return db.scalars(
        select(StaffLoginLog)
        .where(StaffLoginLog.staff_id == staff_id)
        .order_by(desc(StaffLoginLog.login_time))
        .limit(limit)
    ).all()
