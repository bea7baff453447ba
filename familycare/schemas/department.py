"""
department.py

부서 / 팀 요청·응답 스키마 및 조직도(부서 -> 팀 -> 가정) 트리 스키마.

"""

import uuid
from datetime import datetime

from pydantic import Field

from familycare.schemas.common import CamelModel, OptionalStr
from familycare.schemas.family import FamilyResponse


class DepartmentCreateRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: OptionalStr = None
    contact_person_name: OptionalStr = None
    contact_person_phone: OptionalStr = None
    contact_person_email: OptionalStr = None
    picture: OptionalStr = None


class DepartmentUpdateRequest(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: OptionalStr = None
    contact_person_name: OptionalStr = None
    contact_person_phone: OptionalStr = None
    contact_person_email: OptionalStr = None
    picture: OptionalStr = None


class DepartmentResponse(CamelModel):
    id: uuid.UUID
    name: str
    description: str | None
    contact_person_name: str | None
    contact_person_phone: str | None
    contact_person_email: str | None
    picture: str | None
    created_at: datetime
    updated_at: datetime


class TeamCreateRequest(CamelModel):
    department_id: uuid.UUID
    name: str = Field(..., min_length=1, max_length=255)
    description: OptionalStr = None
    contact_person_name: OptionalStr = None
    contact_person_phone: OptionalStr = None
    contact_person_email: OptionalStr = None
    picture: OptionalStr = None
    assigned_staff: list[uuid.UUID] = Field(default_factory=list)


class TeamUpdateRequest(CamelModel):
    department_id: uuid.UUID | None = None
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: OptionalStr = None
    contact_person_name: OptionalStr = None
    contact_person_phone: OptionalStr = None
    contact_person_email: OptionalStr = None
    picture: OptionalStr = None
    # 보내면 목록 전체 교체
    assigned_staff: list[uuid.UUID] | None = None


class TeamResponse(CamelModel):
    id: uuid.UUID
    department_id: uuid.UUID
    name: str
    description: str | None
    contact_person_name: str | None
    contact_person_phone: str | None
    contact_person_email: str | None
    picture: str | None
    assigned_staff: list[str]
    created_at: datetime
    updated_at: datetime


class DepartmentWithTeams(DepartmentResponse):
    teams: list[TeamResponse] = []


class TeamWithFamilies(TeamResponse):
    families: list[FamilyResponse] = []


class DepartmentWithTeamsAndFamilies(DepartmentResponse):
    teams: list[TeamWithFamilies] = []


class OrganizationTree(CamelModel):
    departments: list[DepartmentWithTeamsAndFamilies]
    # 어느 팀에도 배정되지 않은 가정
    unassigned: list[FamilyResponse]
