import uuid
import datetime as dt
from decimal import Decimal

from pydantic import Field

from familycare.models.donation import DonationType
from familycare.schemas.common import CamelModel, OptionalStr


class DonationCreateRequest(CamelModel):
    family_id: uuid.UUID
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2, examples=["100.00"])
    type: DonationType = DonationType.REGULAR
    date: dt.date
    received: bool = False
    email_for_thank: bool = False
    email_for_tax: bool = False
    comment: OptionalStr = None


class DonationUpdateRequest(CamelModel):
    family_id: uuid.UUID | None = None
    amount: Decimal | None = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    type: DonationType | None = None
    date: dt.date | None = None
    received: bool | None = None
    email_for_thank: bool | None = None
    email_for_tax: bool | None = None
    comment: OptionalStr = None


class DonationFamilySummary(CamelModel):
    id: uuid.UUID
    family_code: str | None
    family_name: str


class DonationResponse(CamelModel):
    id: uuid.UUID
    family_id: uuid.UUID
    amount: Decimal
    type: str
    date: dt.date
    received: bool
    email_for_thank: bool
    email_for_tax: bool
    comment: str | None
    created_by: uuid.UUID
    created_at: dt.datetime
    updated_at: dt.datetime
    family: DonationFamilySummary | None = None
