"""
staff.py

스태프 조회 / 관리 API 모음.

- GET  /staff                  : 활성 스태프 목록 (로그인한 스태프 누구나)
- /staff/manage/*              : 관리자(ADM) 전용 스태프 계정 관리
- GET  /staff/{id}/login-logs  : 관리자(ADM) 전용 로그인 기록 조회

설계 원칙:
- PIN 해시는 어떤 응답에도 포함하지 않음
- 삭제는 Soft Delete (is_active=False), 본인 계정은 비활성화 불가

관련 파일:
- familycare.services.staff  : 스태프 생성 / 수정 / 로그인 기록
- familycare.schemas.staff   : 요청 / 응답 스키마

"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from familycare.core.deps import get_db, get_current_staff, get_current_admin
from familycare.models.staff import Staff
from familycare.schemas.common import StaffSummary
from familycare.schemas.staff import (
    LoginLogResponse,
    StaffCreateRequest,
    StaffManageResponse,
    StaffUpdateRequest,
)
from familycare.services.staff import (
    create_staff,
    deactivate_staff,
    list_active_staff,
    list_all_staff,
    list_login_logs,
    update_staff,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/staff", tags=["staff"])


@router.get("", response_model=list[StaffSummary])
def list_staff(
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    return list_active_staff(db)


@router.get("/manage", response_model=list[StaffManageResponse])
def list_staff_for_management(
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_admin),
):
    return list_all_staff(db)


"""
스태프 계정 생성 API (ADM)

- 닉네임 중복 불가
- PIN 은 정확히 4자리 숫자

"""

@router.post("/manage", response_model=StaffManageResponse, status_code=201)
def create_staff_account(
    body: StaffCreateRequest,
    db: Session = Depends(get_db),
    admin: Staff = Depends(get_current_admin),
):
    try:
        staff = create_staff(
            db,
            full_name=body.full_name,
            nick_name=body.nick_name,
            pin=body.pin,
            group=body.group,
            email=body.email,
            display_order=body.display_order,
        )
        db.commit()
        db.refresh(staff)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    logger.info("staff %s created by %s", staff.nick_name, admin.nick_name)
    return staff


def _get_staff_or_404(db: Session, staff_id: uuid.UUID) -> Staff:
    staff = db.get(Staff, staff_id)
    if not staff:
        raise HTTPException(status_code=404, detail="Staff not found")
    return staff


@router.put("/manage/{staff_id}", response_model=StaffManageResponse)
def update_staff_account(
    staff_id: uuid.UUID,
    body: StaffUpdateRequest,
    db: Session = Depends(get_db),
    admin: Staff = Depends(get_current_admin),
):
    staff = _get_staff_or_404(db, staff_id)

    changes = body.model_dump(exclude_unset=True)
    # 본인 계정을 비활성화하는 것은 DELETE 와 동일하게 금지
    if staff.id == admin.id and changes.get("is_active") is False:
        raise HTTPException(status_code=400, detail="Cannot deactivate yourself")

    try:
        update_staff(db, staff, changes)
        db.commit()
        db.refresh(staff)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return staff


@router.delete("/manage/{staff_id}")
def delete_staff_account(
    staff_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin: Staff = Depends(get_current_admin),
):
    staff = _get_staff_or_404(db, staff_id)

    try:
        deactivate_staff(db, staff, actor=admin)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    logger.info("staff %s deactivated by %s", staff.nick_name, admin.nick_name)
    return {"message": "Staff deactivated", "data": {"id": str(staff.id), "is_active": False}}


"""
스태프 로그인 기록 조회 API (ADM)

- 최신순, limit 은 1 ~ 200 범위로 보정 (기본 20)

"""

@router.get("/{staff_id}/login-logs", response_model=list[LoginLogResponse])
def staff_login_logs(
    staff_id: uuid.UUID,
    limit: int = Query(20),
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_admin),
):
    _get_staff_or_404(db, staff_id)
    return list_login_logs(db, staff_id=staff_id, limit=limit)
