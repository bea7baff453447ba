"""
uploads.py

이미지 업로드 API.

- POST /upload         : multipart 필드 image, 저장 후 {"url": "/uploads/<파일명>"} 반환
- PUT  /family-images  : 업로드한 이미지 URL 을 가정 사진으로 지정

업로드된 파일은 main.py 에서 /uploads 경로로 정적 서빙한다.

"""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session

from familycare.core.config import settings
from familycare.core.deps import get_db, get_current_staff
from familycare.models.staff import Staff
from familycare.schemas.family import FamilyResponse
from familycare.schemas.upload import FamilyImageRequest, UploadResponse
from familycare.services.families import get_family
from familycare.services.uploads import save_image, set_family_picture

logger = logging.getLogger(__name__)

router = APIRouter(tags=["uploads"])


@router.post("/upload", response_model=UploadResponse)
def upload_image(
    image: UploadFile = File(...),
    current_staff: Staff = Depends(get_current_staff),
):
    try:
        url = save_image(
            # 제한보다 1바이트 더 읽어서 초과 여부만 판단
            content=image.file.read(settings.MAX_UPLOAD_SIZE + 1),
            content_type=image.content_type,
            original_name=image.filename,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("image uploaded by %s: %s", current_staff.nick_name, url)
    return {"url": url}


@router.put("/family-images", response_model=FamilyResponse)
def update_family_image(
    body: FamilyImageRequest,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    try:
        set_family_picture(db, family_id=body.family_id, image_url=body.image_url)
        db.commit()
    except LookupError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
    return get_family(db, body.family_id)
