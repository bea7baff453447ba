"""
main.py

FastAPI 애플리케이션 진입점(Entry Point).

이 파일은 서버 실행 시 가장 먼저 로드되며,
애플리케이션 전반의 설정과 라우터 등록을 담당한다.

주요 역할:
- FastAPI 앱 인스턴스 생성 및 로깅 초기화
- CORS 미들웨어 설정
- 각 도메인별 라우터를 /api 아래에 등록
- 업로드 이미지 정적 서빙 (/uploads)
- 시작 시 샘플 스태프 계정 생성 (SEED_SAMPLE_STAFF)
- 헬스 체크 및 DB 연결 상태 확인용 엔드포인트 제공

설계 원칙:
- 비즈니스 로직은 포함하지 않고 설정/조립 역할만 수행
- 실제 기능은 routers / services 계층에 위임

관련 파일:
- familycare.core.config          : 환경 변수 및 설정 로드
- familycare.core.logging_setup   : 로깅 설정
- familycare.services.seed        : 샘플 스태프 생성
- familycare.routers.*            : 기능별 API 라우터

"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.orm import Session
from sqlalchemy import text

from familycare.core.config import settings
from familycare.core.deps import get_db
from familycare.core.logging_setup import setup_logging
from familycare.db.session import SessionLocal
from familycare.routers import (
    announcements,
    attendance,
    auth,
    care_logs,
    departments,
    donations,
    events,
    families,
    staff,
    teams,
    uploads,
)
from familycare.services.seed import seed_sample_staff
from familycare.services.uploads import UPLOAD_URL_PREFIX, upload_dir

logger = logging.getLogger(__name__)


def _seed_on_startup() -> None:
    db = SessionLocal()
    try:
        seed_sample_staff(db)
        db.commit()
    except Exception:
        db.rollback()
        # 샘플 데이터 생성 실패가 서버 기동을 막지 않도록 로그만 남김
        logger.exception("failed to initialize sample staff data")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    if settings.SEED_SAMPLE_STAFF:
        _seed_on_startup()
    yield


app = FastAPI(title="Family Care Backend", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

API_PREFIX = "/api"

app.include_router(auth.router, prefix=API_PREFIX)
app.include_router(staff.router, prefix=API_PREFIX)
app.include_router(families.router, prefix=API_PREFIX)
app.include_router(care_logs.router, prefix=API_PREFIX)
app.include_router(donations.router, prefix=API_PREFIX)
app.include_router(departments.router, prefix=API_PREFIX)
app.include_router(teams.router, prefix=API_PREFIX)
app.include_router(events.router, prefix=API_PREFIX)
app.include_router(attendance.router, prefix=API_PREFIX)
app.include_router(announcements.router, prefix=API_PREFIX)
app.include_router(uploads.router, prefix=API_PREFIX)

# 업로드된 이미지 정적 서빙
app.mount(UPLOAD_URL_PREFIX, StaticFiles(directory=upload_dir()), name="uploads")

"""
서버 헬스 체크 엔드포인트

- 애플리케이션 프로세스가 정상 동작 중인지 확인
- 로드밸런서 / 배포 환경에서 서버 상태 확인 용도

"""
@app.get("/health")
def health():
    return {"status": "ok"}

"""
데이터베이스 연결 상태 확인 엔드포인트

- 간단한 SELECT 1 쿼리를 통해 DB 연결 여부 확인
- 서버는 살아 있으나 DB가 죽은 상황을 분리해서 감지 가능

"""
@app.get("/db-ping")
def db_ping(db: Session = Depends(get_db)):
    value = db.execute(text("SELECT 1")).scalar_one()
    return {"db": "ok", "value": value}
