import uuid
import datetime as dt

from pydantic import Field

from familycare.models.event import AttendanceStatus
from familycare.schemas.common import CamelModel, StaffSummary

# "HH:MM" (24시간)
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class EventCreateRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    # 일요일이 아니면 다음 일요일로 조정됨
    date: dt.date
    time: str = Field(..., pattern=TIME_PATTERN, examples=["11:00"])
    location: str = Field(..., min_length=1, max_length=255)
    is_active: bool = True


class EventUpdateRequest(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    date: dt.date | None = None
    time: str | None = Field(default=None, pattern=TIME_PATTERN)
    location: str | None = Field(default=None, min_length=1, max_length=255)
    is_active: bool | None = None


class EventResponse(CamelModel):
    id: uuid.UUID
    title: str
    date: dt.date
    time: str
    location: str
    is_active: bool
    created_by: uuid.UUID
    created_at: dt.datetime
    updated_at: dt.datetime
    creator: StaffSummary | None = None


class AttendanceFamilySummary(CamelModel):
    id: uuid.UUID
    family_name: str
    family_picture: str | None


class AttendanceMemberSummary(CamelModel):
    id: uuid.UUID
    korean_name: str
    english_name: str
    relationship: str
    grade_group: str | None


class AttendanceResponse(CamelModel):
    id: uuid.UUID
    event_id: uuid.UUID
    family_id: uuid.UUID
    family_member_id: uuid.UUID | None
    attendance_status: str
    updated_by: uuid.UUID
    updated_at: dt.datetime
    family: AttendanceFamilySummary | None = None
    family_member: AttendanceMemberSummary | None = None


class AttendanceUpdateRequest(CamelModel):
    attendance_status: AttendanceStatus


class AttendanceStats(CamelModel):
    total: int
    present: int
    absent: int
    pending: int
    present_families: int
    # 학년 그룹별 출석 인원 (그룹이 없으면 "Adult")
    present_by_grade_group: dict[str, int]
