"""
family.py

가정 / 가족 구성원 요청·응답 스키마.

"""

import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import Field

from familycare.models.family import MemberStatus, Relationship
from familycare.schemas.common import CamelModel, OptionalDate, OptionalStr


class MemberIn(CamelModel):
    korean_name: str = Field(..., min_length=1, max_length=255)
    english_name: str = ""
    birth_date: OptionalDate = None
    phone_number: OptionalStr = None
    email: OptionalStr = None
    relationship: Relationship
    courses: list[str] = Field(default_factory=list)
    grade_level: OptionalStr = None
    # 비워두면 grade_level 로부터 자동 계산
    grade_group: OptionalStr = None
    school: OptionalStr = None
    display_order: int | None = None


class MemberResponse(CamelModel):
    id: uuid.UUID
    family_id: uuid.UUID
    korean_name: str
    english_name: str
    birth_date: date | None
    phone_number: str | None
    email: str | None
    relationship: str
    courses: list[str]
    grade_level: str | None
    grade_group: str | None
    school: str | None
    display_order: int
    created_at: datetime
    updated_at: datetime


class FamilyBase(CamelModel):
    family_name: str = ""
    visited_date: OptionalDate = None
    registration_date: OptionalDate = None
    member_status: MemberStatus = MemberStatus.VISIT
    phone_number: str = ""
    email: OptionalStr = None
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    full_address: str = ""
    family_notes: OptionalStr = None
    family_picture: OptionalStr = None
    life_group: OptionalStr = None
    support_team_member: OptionalStr = None
    biz: OptionalStr = None
    biz_title: OptionalStr = None
    biz_category: OptionalStr = None
    biz_name: OptionalStr = None
    biz_intro: OptionalStr = None
    team_id: uuid.UUID | None = None
    display_order: int = 0


class FamilyCreateRequest(FamilyBase):
    members: list[MemberIn] = Field(default_factory=list)


"""
가정 수정 요청

- 모든 필드 선택 (보낸 필드만 수정, exclude_unset 기준)
- members 를 보내면 구성원 목록 전체 교체, 보내지 않으면 유지
- teamId: null 은 팀 배정 해제

"""

class FamilyUpdateRequest(CamelModel):
    family_name: str | None = None
    visited_date: OptionalDate = None
    registration_date: OptionalDate = None
    member_status: MemberStatus | None = None
    phone_number: str | None = None
    email: OptionalStr = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    full_address: str | None = None
    family_notes: OptionalStr = None
    family_picture: OptionalStr = None
    life_group: OptionalStr = None
    support_team_member: OptionalStr = None
    biz: OptionalStr = None
    biz_title: OptionalStr = None
    biz_category: OptionalStr = None
    biz_name: OptionalStr = None
    biz_intro: OptionalStr = None
    team_id: uuid.UUID | None = None
    display_order: int | None = None
    members: list[MemberIn] | None = None


class FamilyResponse(CamelModel):
    id: uuid.UUID
    family_code: str | None
    family_name: str
    visited_date: date | None
    registration_date: date | None
    member_status: str
    phone_number: str
    email: str | None
    address: str
    city: str
    state: str
    zip_code: str
    full_address: str
    family_notes: str | None
    family_picture: str | None
    life_group: str | None
    support_team_member: str | None
    biz: str | None
    biz_title: str | None
    biz_category: str | None
    biz_name: str | None
    biz_intro: str | None
    team_id: uuid.UUID | None
    display_order: int
    created_at: datetime
    updated_at: datetime
    members: list[MemberResponse] = []


class QuickMemberRequest(CamelModel):
    korean_name: str = Field(..., min_length=1, max_length=255)
    english_name: str = ""
    phone_number: OptionalStr = None
    email: OptionalStr = None
    member_type: Literal["husband", "wife"]
    team_id: uuid.UUID
    family_picture: OptionalStr = None


class CsvRowError(CamelModel):
    row: int
    error: str
    data: dict[str, str]


class CsvCreatedNames(CamelModel):
    departments: list[str] = []
    teams: list[str] = []
    families: list[str] = []


class CsvUpdatedNames(CamelModel):
    families: list[str] = []


"""
CSV 일괄 등록 결과

- success : 정상 처리(생성 + 수정)된 행 수
- errors  : 실패한 행 (row 는 헤더를 1 로 하는 CSV 줄 번호, 첫 데이터 행은 2)
- created / updated : 새로 만들어지거나 갱신된 이름 목록

"""

class CsvImportResult(CamelModel):
    success: int = 0
    errors: list[CsvRowError] = []
    created: CsvCreatedNames = Field(default_factory=CsvCreatedNames)
    updated: CsvUpdatedNames = Field(default_factory=CsvUpdatedNames)
