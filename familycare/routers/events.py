"""
events.py

행사(Event) API 모음.

주요 기능:
- 행사 목록 / 상세 조회
- 행사 생성 / 수정 / 삭제 (ADM, MGM)
- 행사별 출석 목록 및 출석 통계 조회

설계 원칙:
- 행사 날짜는 항상 주일, 일요일이 아니면 다음 일요일로 저장
- 행사 생성 시 모든 가족 구성원의 출석 행(pending)을 함께 생성
- 출석 상태 변경은 /attendance/{id} (attendance.py)

관련 파일:
- familycare.services.events : 행사 / 출석 로직
- familycare.schemas.event   : 요청 / 응답 스키마

"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from familycare.core.deps import get_db, get_current_staff, get_current_manager
from familycare.models.event import Event
from familycare.models.staff import Staff
from familycare.schemas.event import (
    AttendanceResponse,
    AttendanceStats,
    EventCreateRequest,
    EventResponse,
    EventUpdateRequest,
)
from familycare.services.events import (
    attendance_stats,
    create_event,
    delete_event,
    get_event,
    list_attendance,
    list_events,
    update_event,
)

router = APIRouter(prefix="/events", tags=["events"])


# active=true 면 활성 행사만, 그 외에는 전체
@router.get("", response_model=list[EventResponse])
def event_list(
    active: bool | None = Query(None),
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    return list_events(db, active=active)


def _get_event_or_404(db: Session, event_id: uuid.UUID) -> Event:
    event = get_event(db, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.get("/{event_id}", response_model=EventResponse)
def event_detail(
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    return _get_event_or_404(db, event_id)


@router.post("", response_model=EventResponse, status_code=201)
def create_event_entry(
    body: EventCreateRequest,
    db: Session = Depends(get_db),
    manager: Staff = Depends(get_current_manager),
):
    try:
        event = create_event(db, body.model_dump(), created_by=manager.id)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
    return _get_event_or_404(db, event.id)


@router.put("/{event_id}", response_model=EventResponse)
def update_event_entry(
    event_id: uuid.UUID,
    body: EventUpdateRequest,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_manager),
):
    event = _get_event_or_404(db, event_id)
    try:
        update_event(db, event, body.model_dump(exclude_unset=True))
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
    return _get_event_or_404(db, event_id)


@router.delete("/{event_id}")
def delete_event_entry(
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_manager),
):
    event = _get_event_or_404(db, event_id)
    try:
        delete_event(db, event)
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
    return {"message": "Event deleted"}


"""
행사 출석 목록 API

- 가정 이름순, 같은 가정 안에서는 구성원 표시 순서대로 정렬
- 가정 / 구성원 요약 정보 포함

"""

@router.get("/{event_id}/attendance", response_model=list[AttendanceResponse])
def event_attendance(
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    _get_event_or_404(db, event_id)
    return list_attendance(db, event_id)


@router.get("/{event_id}/attendance/stats", response_model=AttendanceStats)
def event_attendance_stats(
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    _get_event_or_404(db, event_id)
    return attendance_stats(db, event_id)
