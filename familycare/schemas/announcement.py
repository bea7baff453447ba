import uuid
from datetime import datetime

from pydantic import Field, field_validator, model_validator

from familycare.core.utils import as_utc
from familycare.models.announcement import AnnouncementType
from familycare.schemas.common import CamelModel, StaffSummary


class AnnouncementCreateRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    type: AnnouncementType = AnnouncementType.MEDIUM
    is_login_required: bool = True
    start_date: datetime
    end_date: datetime
    is_active: bool = True

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_utc(cls, v):
        return as_utc(v)

    @model_validator(mode="after")
    def check_window(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must be on or after startDate")
        return self


class AnnouncementUpdateRequest(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = Field(default=None, min_length=1)
    type: AnnouncementType | None = None
    is_login_required: bool | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    is_active: bool | None = None

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_utc(cls, v):
        return as_utc(v)


class AnnouncementResponse(CamelModel):
    id: uuid.UUID
    title: str
    content: str
    type: str
    is_login_required: bool
    start_date: datetime
    end_date: datetime
    is_active: bool
    created_by: uuid.UUID
    created_at: datetime
    updated_at: datetime
    author: StaffSummary | None = None
