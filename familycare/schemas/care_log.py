import uuid
import datetime as dt

from pydantic import Field

from familycare.models.care_log import CareLogStatus, CareLogType
from familycare.schemas.common import CamelModel, StaffSummary


class CareLogCreateRequest(CamelModel):
    family_id: uuid.UUID
    # 비우면 현재 로그인한 스태프
    staff_id: uuid.UUID | None = None
    date: dt.date
    type: CareLogType
    description: str = Field(..., min_length=1)
    status: CareLogStatus = CareLogStatus.PENDING


class CareLogUpdateRequest(CamelModel):
    date: dt.date | None = None
    type: CareLogType | None = None
    description: str | None = Field(default=None, min_length=1)
    status: CareLogStatus | None = None


class CareLogResponse(CamelModel):
    id: uuid.UUID
    family_id: uuid.UUID
    staff_id: uuid.UUID
    date: dt.date
    type: str
    description: str
    status: str
    created_at: dt.datetime
    updated_at: dt.datetime
    staff: StaffSummary | None = None
