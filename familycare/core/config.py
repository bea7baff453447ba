"""
config.py

애플리케이션 전역 설정(Configuration) 관리 파일.

이 파일은 .env 환경 변수들을 Pydantic BaseSettings를 통해 로드하여
애플리케이션 전반에서 공통으로 사용하는 설정 값을 제공한다.

주요 설정 항목:
- 데이터베이스 연결 정보
- JWT 인증 관련 시크릿 및 만료 정책
- CORS 허용 도메인 목록
- 이미지 업로드 저장 위치 / 용량 제한
- 초기 샘플 스태프 생성 여부, 로그 레벨

관련 파일:
- familycare.main            : CORS / 업로드 경로 / 로깅 초기화
- familycare.core.security   : JWT 시크릿 / 만료 설정 사용
- familycare.db.session      : DATABASE_URL 사용
- familycare.services.uploads: 업로드 제한 사용

"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


# .env 파일에 정의된 환경 변수를 로드하는 설정 클래스
# extra="ignore" 옵션으로 정의되지 않은 환경 변수는 무시
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str
    TEST_DATABASE_URL: str | None = None

    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    # 스태프 로그인 세션 유지 시간 (기본 12시간)
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 720

    # CORS 허용 도메인 (프론트엔드 주소)
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    # 업로드 옵션
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024
    ALLOWED_IMAGE_TYPES: List[str] = ["image/jpeg", "image/png", "image/gif", "image/webp"]

    # 스태프 테이블이 비어 있으면 샘플 계정 4개를 생성
    SEED_SAMPLE_STAFF: bool = True

    LOG_LEVEL: str = "INFO"


# 애플리케이션 전역에서 import하여 사용하는 Settings 인스턴스
settings = Settings()
