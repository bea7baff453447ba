"""
security.py

스태프 PIN 해싱 및 JWT 토큰 생성/검증을 담당하는 보안 유틸리티 모음.

이 파일은 인증(auth) 로직에서 사용하는
저수준(low-level) 보안 기능만을 제공하며,
라우터나 비즈니스 로직은 포함하지 않는다.

주요 기능:
- 4자리 PIN 해싱 및 검증 (bcrypt)
- JWT Access Token 생성 / 디코딩

설계 원칙:
- PIN 평문은 DB에 저장하지 않음
- 토큰에는 staff id(sub)와 그룹(grp)만 포함
- 시간 기반(exp) 만료는 UTC 기준으로 처리

관련 파일:
- familycare.core.config        : JWT 시크릿 키 및 만료 설정
- familycare.core.deps          : 토큰을 실제로 검증하는 인증 의존성
- familycare.routers.auth       : 로그인 API

"""

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from familycare.core.config import settings


# bcrypt 기반 PIN 해싱 컨텍스트
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

_PIN_RE = re.compile(r"^\d{4}$")


def validate_pin(pin: str) -> None:
    if not _PIN_RE.match(pin or ""):
        raise ValueError("PIN must be exactly 4 digits")


def get_pin_hash(pin: str) -> str:
    return pwd_context.hash(pin)


def verify_pin(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


"""
Access Token 생성 함수

- subject(sub): staff id
- grp: 스태프 그룹(ADM/MGM/TEAM-A/TEAM-B), 프론트 메뉴 분기용
- exp: 만료 시각 (UTC timestamp)

"""

def create_access_token(subject: str, group: str, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {
        "sub": subject,
        "type": "access",
        "grp": group,
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> str:
    """토큰을 검증하고 subject(staff id)를 반환. 실패 시 JWTError"""
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    if payload.get("type") != "access":
        raise JWTError("Not an access token")
    sub = payload.get("sub")
    if not sub:
        raise JWTError("Missing subject")
    return sub
