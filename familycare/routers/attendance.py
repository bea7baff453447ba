"""
attendance.py

행사 출석 상태 변경 API.

- 로그인한 스태프 누구나 출석 체크 가능
- 변경한 스태프를 updated_by 로 기록

"""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from familycare.core.deps import get_db, get_current_staff
from familycare.models.staff import Staff
from familycare.schemas.event import AttendanceResponse, AttendanceUpdateRequest
from familycare.services.events import get_attendance, update_attendance

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.put("/{attendance_id}", response_model=AttendanceResponse)
def update_attendance_status(
    attendance_id: uuid.UUID,
    body: AttendanceUpdateRequest,
    db: Session = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff),
):
    attendance = get_attendance(db, attendance_id)
    if not attendance:
        raise HTTPException(status_code=404, detail="Attendance not found")

    try:
        update_attendance(db, attendance, status=body.attendance_status, updated_by=current_staff.id)
        db.commit()
        db.refresh(attendance)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
    return attendance
