"""
deps.py

FastAPI 의존성(Depends) 모음.

- get_db             : 요청 단위 DB 세션
- get_current_staff  : Bearer 토큰 검증 후 활성 스태프 로드
- require_groups     : 스태프 그룹 기반 접근 제어 팩토리

"""

from typing import Generator
import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session
from sqlalchemy import select

from familycare.core.security import decode_access_token
from familycare.db.session import SessionLocal
from familycare.models.staff import Staff, StaffGroup

# Swagger Authorize에서 "Bearer 토큰" 입력받는 스키마
bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_staff(
    cred: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Staff:
    if cred is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        sub = decode_access_token(cred.credentials)
        # Staff.id가 UUID라서 변환
        staff_id = uuid.UUID(sub)
    except (JWTError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # 비활성화(soft delete)된 스태프의 토큰은 더 이상 유효하지 않음
    staff = db.scalar(select(Staff).where(Staff.id == staff_id, Staff.is_active.is_(True)))
    if not staff:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Staff not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return staff


def require_groups(*groups: StaffGroup):
    allowed = {g.value for g in groups}

    def _checker(current_staff: Staff = Depends(get_current_staff)) -> Staff:
        if current_staff.group not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires group in {sorted(allowed)}",
            )
        return current_staff
    return _checker

get_current_manager = require_groups(StaffGroup.ADM, StaffGroup.MGM)
get_current_admin = require_groups(StaffGroup.ADM)
