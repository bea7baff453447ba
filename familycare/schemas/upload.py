import uuid

from familycare.schemas.common import CamelModel


class UploadResponse(CamelModel):
    url: str


class FamilyImageRequest(CamelModel):
    family_id: uuid.UUID
    image_url: str
