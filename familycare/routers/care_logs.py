"""
care_logs.py

심방/돌봄 기록 API.

- 가정별 목록 조회는 /families/{id}/care-logs (families.py)
- 작성자(staffId)를 비우면 현재 로그인한 스태프로 기록

"""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from familycare.core.deps import get_db, get_current_staff
from familycare.models.care_log import CareLog
from familycare.models.staff import Staff
from familycare.schemas.care_log import CareLogCreateRequest, CareLogResponse, CareLogUpdateRequest
from familycare.services.care_logs import create_care_log, delete_care_log, get_care_log, update_care_log

router = APIRouter(prefix="/care-logs", tags=["care-logs"])


def _get_care_log_or_404(db: Session, care_log_id: uuid.UUID) -> CareLog:
    log = get_care_log(db, care_log_id)
    if not log:
        raise HTTPException(status_code=404, detail="Care log not found")
    return log


@router.post("", response_model=CareLogResponse, status_code=201)
def create_log(
    body: CareLogCreateRequest,
    db: Session = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff),
):
    try:
        log = create_care_log(db, body.model_dump(), current_staff_id=current_staff.id)
        db.commit()
        db.refresh(log)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
    return log


@router.put("/{care_log_id}", response_model=CareLogResponse)
def update_log(
    care_log_id: uuid.UUID,
    body: CareLogUpdateRequest,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    log = _get_care_log_or_404(db, care_log_id)
    try:
        update_care_log(db, log, body.model_dump(exclude_unset=True))
        db.commit()
        db.refresh(log)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
    return log


@router.delete("/{care_log_id}")
def delete_log(
    care_log_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    log = _get_care_log_or_404(db, care_log_id)
    try:
        delete_care_log(db, log)
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
    return {"message": "Care log deleted"}
