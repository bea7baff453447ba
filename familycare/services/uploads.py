"""
services/uploads.py

프로필 / 가정 사진 업로드 처리.

- 허용 형식: settings.ALLOWED_IMAGE_TYPES (jpeg / png / gif / webp)
- 최대 크기: settings.MAX_UPLOAD_SIZE (기본 5MB)
- 저장 파일명: <랜덤>-<밀리초 타임스탬프><content type 확장자>
- 저장 위치: settings.UPLOAD_DIR, 응답 URL 은 /uploads/<파일명>

"""

import logging
import mimetypes
import secrets
import time
import uuid
from pathlib import Path

from sqlalchemy.orm import Session

from familycare.core.config import settings
from familycare.models.family import Family

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads"


def upload_dir() -> Path:
    path = Path(settings.UPLOAD_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


IMAGE_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


# 확장자는 검사를 통과한 content type 기준 (클라이언트 파일명은 사용하지 않음)
def build_filename(content_type: str) -> str:
    ext = IMAGE_EXTENSIONS.get(content_type) or mimetypes.guess_extension(content_type) or ""
    return f"{secrets.token_urlsafe(15)}-{int(time.time() * 1000)}{ext}"


def save_image(*, content: bytes, content_type: str | None, original_name: str | None) -> str:
    """이미지를 저장하고 공개 URL 을 반환. 형식 / 크기 위반은 ValueError"""
    if content_type not in settings.ALLOWED_IMAGE_TYPES:
        raise ValueError("Invalid file type. Only JPEG, PNG, GIF, and WebP are allowed.")
    if not content:
        raise ValueError("No file uploaded")
    if len(content) > settings.MAX_UPLOAD_SIZE:
        limit_mb = settings.MAX_UPLOAD_SIZE // (1024 * 1024)
        raise ValueError(f"File too large. Maximum size is {limit_mb}MB.")

    filename = build_filename(content_type)
    (upload_dir() / filename).write_bytes(content)

    logger.info("stored upload %s from %r (%d bytes, %s)", filename, original_name, len(content), content_type)
    return f"{UPLOAD_URL_PREFIX}/{filename}"


def set_family_picture(db: Session, *, family_id: uuid.UUID, image_url: str) -> Family:
    family = db.get(Family, family_id)
    if not family:
        raise LookupError("Family not found")
    family.family_picture = image_url
    db.flush()
    return family
