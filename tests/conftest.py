import os
import tempfile

import pytest

# settings 는 import 시점에 로드되므로 familycare import 전에 테스트 환경 변수 지정
_TMP_DIR = tempfile.mkdtemp(prefix="familycare-test-")
os.environ.setdefault("TEST_DATABASE_URL", f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}")
os.environ.setdefault("DATABASE_URL", os.environ["TEST_DATABASE_URL"])
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["SEED_SAMPLE_STAFF"] = "false"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP_DIR, "uploads")

from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from familycare.main import app as fastapi_app
from familycare.core.config import settings
from familycare.core.deps import get_db
from familycare.db.base import Base
from familycare.db.session import build_engine

# ✅ 모델 import (Base.metadata에 테이블 등록)
import familycare.models  # noqa: F401


TEST_DB_URL = settings.TEST_DATABASE_URL or settings.DATABASE_URL

engine = build_engine(TEST_DB_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """테스트 전체 시작/종료 때만 스키마 생성/삭제"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_tables():
    """각 테스트마다 데이터 초기화 (테이블은 유지, row만 삭제)"""
    # FK 의존성 역순으로 삭제 (SQLite 는 TRUNCATE 미지원)
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture()
def db_session():
    """테스트에서 직접 DB 조작할 때 쓰는 세션"""
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    finally:
        session.close()


@pytest.fixture()
def client():
    fastapi_app.dependency_overrides[get_db] = override_get_db
    with TestClient(fastapi_app) as c:
        yield c
    fastapi_app.dependency_overrides.clear()
