from pydantic import EmailStr, Field

from familycare.schemas.common import CamelModel, OptionalStr


class LoginRequest(CamelModel):
    # 누락 여부는 라우터에서 400 으로 처리
    nickname: str = ""
    pin: str = ""


class ProfileUpdateRequest(CamelModel):
    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    current_pin: str = Field(..., min_length=1)
    new_pin: OptionalStr = None
