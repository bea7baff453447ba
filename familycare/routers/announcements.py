"""
announcements.py

공지사항(Announcement) API 모음.

- GET /announcements              : 전체 공지 (로그인 필요)
- GET /announcements/active       : 현재 게시 기간인 활성 공지 (로그인 필요)
- GET /announcements/login        : 로그인 화면용 공지 (공개, 로그인 불필요 공지만)
- GET /announcements/dashboard    : 대시보드용 공지 (로그인 필요 공지만)
- GET /announcements/public/{id}  : 공개 공지 상세 (공유 링크용)
- 생성 / 수정 / 삭제는 ADM, MGM

관련 파일:
- familycare.services.announcements : 활성 기간 / 공개 여부 판단

"""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from familycare.core.deps import get_db, get_current_staff, get_current_manager
from familycare.models.announcement import Announcement
from familycare.models.staff import Staff
from familycare.schemas.announcement import (
    AnnouncementCreateRequest,
    AnnouncementResponse,
    AnnouncementUpdateRequest,
)
from familycare.services.announcements import (
    create_announcement,
    delete_announcement,
    get_announcement,
    get_public_announcement,
    list_active_announcements,
    list_announcements,
    update_announcement,
)

router = APIRouter(prefix="/announcements", tags=["announcements"])


@router.get("", response_model=list[AnnouncementResponse])
def announcement_list(
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    return list_announcements(db)


@router.get("/active", response_model=list[AnnouncementResponse])
def active_announcements(
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    return list_active_announcements(db)


# 로그인 화면에서 호출하므로 인증 없음
@router.get("/login", response_model=list[AnnouncementResponse])
def login_page_announcements(db: Session = Depends(get_db)):
    return list_active_announcements(db, login_required=False)


@router.get("/dashboard", response_model=list[AnnouncementResponse])
def dashboard_announcements(
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    return list_active_announcements(db, login_required=True)


@router.get("/public/{announcement_id}", response_model=AnnouncementResponse)
def public_announcement(announcement_id: uuid.UUID, db: Session = Depends(get_db)):
    announcement = get_public_announcement(db, announcement_id)
    if not announcement:
        raise HTTPException(status_code=404, detail="Announcement not found")
    return announcement


def _get_announcement_or_404(db: Session, announcement_id: uuid.UUID) -> Announcement:
    announcement = get_announcement(db, announcement_id)
    if not announcement:
        raise HTTPException(status_code=404, detail="Announcement not found")
    return announcement


@router.get("/{announcement_id}", response_model=AnnouncementResponse)
def announcement_detail(
    announcement_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    return _get_announcement_or_404(db, announcement_id)


@router.post("", response_model=AnnouncementResponse, status_code=201)
def create_announcement_entry(
    body: AnnouncementCreateRequest,
    db: Session = Depends(get_db),
    manager: Staff = Depends(get_current_manager),
):
    try:
        announcement = create_announcement(db, body.model_dump(), created_by=manager.id)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
    return _get_announcement_or_404(db, announcement.id)


@router.put("/{announcement_id}", response_model=AnnouncementResponse)
def update_announcement_entry(
    announcement_id: uuid.UUID,
    body: AnnouncementUpdateRequest,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_manager),
):
    announcement = _get_announcement_or_404(db, announcement_id)
    try:
        update_announcement(db, announcement, body.model_dump(exclude_unset=True))
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
    return _get_announcement_or_404(db, announcement_id)


@router.delete("/{announcement_id}")
def delete_announcement_entry(
    announcement_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_manager),
):
    announcement = _get_announcement_or_404(db, announcement_id)
    try:
        delete_announcement(db, announcement)
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
    return {"message": "Announcement deleted"}
