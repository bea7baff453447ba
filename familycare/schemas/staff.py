import uuid
from datetime import datetime

from pydantic import EmailStr, Field

from familycare.models.staff import StaffGroup
from familycare.schemas.common import CamelModel


class StaffManageResponse(CamelModel):
    id: uuid.UUID
    full_name: str
    nick_name: str
    group: str
    email: str | None
    display_order: int
    is_active: bool
    last_login: datetime | None
    created_at: datetime
    updated_at: datetime


class StaffCreateRequest(CamelModel):
    full_name: str = Field(..., min_length=1, max_length=255)
    nick_name: str = Field(..., min_length=1, max_length=100)
    # 4자리 숫자 검증은 서비스에서 (ValueError -> 400)
    pin: str
    group: StaffGroup
    email: EmailStr | None = None
    display_order: int = 0


class StaffUpdateRequest(CamelModel):
    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    nick_name: str | None = Field(default=None, min_length=1, max_length=100)
    pin: str | None = None
    group: StaffGroup | None = None
    email: EmailStr | None = None
    display_order: int | None = None
    is_active: bool | None = None


class LoginLogResponse(CamelModel):
    id: uuid.UUID
    staff_id: uuid.UUID
    login_time: datetime
    ip_address: str | None
    user_agent: str | None
    success: bool
    failure_reason: str | None
