"""
auth.py

스태프 인증(Authentication) API 모음.

스태프는 닉네임 + 4자리 PIN 으로 로그인하며,
로그인 성공 시 JWT Access Token 을 응답 바디로 받는다.
이후 요청은 Authorization: Bearer <token> 헤더로 인증한다.

주요 기능:
- 로그인 (성공 / 실패 로그인 기록)
- 로그아웃
- 내 정보 조회 / 수정 (PIN 확인 필요)

설계 원칙:
- 토큰은 상태를 저장하지 않으므로 로그아웃은 클라이언트가 토큰을 폐기
- 실패 사유(닉네임 없음 / PIN 불일치 / 비활성)는 응답에서 구분하지 않음

관련 파일:
- familycare.core.security   : PIN 검증 / JWT 생성
- familycare.core.deps       : get_current_staff
- familycare.services.staff  : 로그인 처리 / 로그인 기록

"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from familycare.core.deps import get_db, get_current_staff
from familycare.core.security import create_access_token
from familycare.models.staff import Staff
from familycare.schemas.auth import LoginRequest, ProfileUpdateRequest
from familycare.schemas.common import StaffSummary, dump
from familycare.schemas.staff import StaffManageResponse
from familycare.services.staff import authenticate, update_profile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


"""
로그인 API

- 닉네임 / PIN 누락 시 400
- 인증 실패 시 401 (실패 기록은 커밋)
- 성공 시 Access Token + 스태프 요약 정보 반환

"""

@router.post("/login")
def login(data: LoginRequest, request: Request, db: Session = Depends(get_db)):
    nickname = data.nickname.strip()
    if not nickname or not data.pin:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Nickname and PIN are required")

    try:
        staff = authenticate(
            db,
            nickname=nickname,
            pin=data.pin,
            ip_address=request.client.host if request.client else None,
            user_agent=request.headers.get("user-agent"),
        )
        db.commit()
    except Exception as e:
        db.rollback()
        logger.exception("login failed with database error")
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    if not staff:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    access = create_access_token(subject=str(staff.id), group=staff.group)
    return {
        "data": {
            "access_token": access,
            "token_type": "bearer",
            "staff": dump(StaffSummary, staff),
        }
    }


# 토큰은 서버에 저장하지 않으므로 클라이언트가 폐기하면 로그아웃 완료
@router.post("/logout")
def logout(_: Staff = Depends(get_current_staff)):
    return {"message": "Logged out"}


@router.get("/me", response_model=StaffSummary)
def me(current_staff: Staff = Depends(get_current_staff)):
    return current_staff


"""
내 정보 수정 API

- 현재 PIN 확인 필수 (불일치 시 400)
- 이름 / 이메일 / 새 PIN 중 보낸 값만 수정

"""

@router.patch("/profile", response_model=StaffManageResponse)
def edit_profile(
    data: ProfileUpdateRequest,
    db: Session = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff),
):
    try:
        update_profile(
            db,
            current_staff,
            current_pin=data.current_pin,
            full_name=data.full_name,
            email=data.email,
            new_pin=data.new_pin,
        )
        db.commit()
        db.refresh(current_staff)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return current_staff
