"""
services/families.py

가정(Family) / 가족 구성원 도메인의 비즈니스 로직 모음.

주요 기능:
- 가정 목록 검색 (이름, 상태, 방문일, 팀, 수료 과정 등)
- 가정 + 구성원 동시 생성 / 수정 / 삭제
- 팀 화면에서의 빠른 구성원(가정) 등록
- CSV 일괄 등록 (부서 / 팀 자동 생성, 기존 가정 갱신)

설계 원칙:
- family_code 는 FM0001 부터 순번으로 발급
- 전화번호는 숫자만 저장 (화면 포맷은 클라이언트 / format_phone_number)
- 가정 이름, 전체 주소, 자녀 학년 그룹은 비어 있으면 자동 생성
- 규칙 위반은 ValueError 로 알리고, commit 은 라우터에서 수행

관련 파일:
- familycare.models.family       : Family / FamilyMember 모델
- familycare.core.utils          : 전화번호 / 이름 / 주소 / 주일 계산
- familycare.services.departments: 팀 존재 확인, CSV 부서 / 팀 생성
- familycare.routers.families    : 가정 API

"""

import csv
import io
import logging
import re
import uuid
from datetime import date
from typing import Any

from sqlalchemy import select, desc, or_
from sqlalchemy.orm import Session, selectinload

from familycare.core.utils import (
    clean_phone_number,
    generate_family_name,
    generate_full_address,
    grade_group_for,
    previous_sunday,
)
from familycare.models.family import Family, FamilyMember, MemberStatus, Relationship
from familycare.services.departments import get_or_create_department, get_or_create_team, get_team

logger = logging.getLogger(__name__)

FAMILY_CODE_PREFIX = "FM"
_FAMILY_CODE_RE = re.compile(r"^FM(\d+)$")


def next_family_code(db: Session) -> str:
    codes = db.scalars(
        select(Family.family_code).where(Family.family_code.like(f"{FAMILY_CODE_PREFIX}%"))
    ).all()
    numbers = [int(m.group(1)) for m in (_FAMILY_CODE_RE.match(c or "") for c in codes) if m]
    return f"{FAMILY_CODE_PREFIX}{(max(numbers, default=0) + 1):04d}"


def _split_csv_param(value: str | None) -> list[str]:
    return [v.strip() for v in (value or "").split(",") if v.strip()]


"""
가정 목록 검색

- name / life_group / support_team_member : 부분 일치 (대소문자 무시)
- member_status : 단일 값 또는 콤마 목록, "all" 은 무시
- date_from / date_to : 방문일(visited_date) 범위
- team_id / unassigned : 팀 소속 / 미배정 가정
- courses : 콤마 목록, 구성원 중 한 명이라도 해당 과정을 수료했으면 포함

정렬: 방문일 최신순 (방문일 없는 가정은 마지막)

"""

def list_families(
    db: Session,
    *,
    name: str | None = None,
    life_group: str | None = None,
    support_team_member: str | None = None,
    member_status: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    team_id: uuid.UUID | None = None,
    unassigned: bool = False,
    courses: str | None = None,
) -> list[Family]:
    stmt = select(Family).options(selectinload(Family.members))

    if name:
        stmt = stmt.where(Family.family_name.ilike(f"%{name.strip()}%"))
    if life_group:
        stmt = stmt.where(Family.life_group.ilike(f"%{life_group.strip()}%"))
    if support_team_member:
        stmt = stmt.where(Family.support_team_member.ilike(f"%{support_team_member.strip()}%"))

    statuses = [s for s in _split_csv_param(member_status) if s.lower() != "all"]
    if statuses:
        stmt = stmt.where(Family.member_status.in_(statuses))

    if date_from:
        stmt = stmt.where(Family.visited_date >= date_from)
    if date_to:
        stmt = stmt.where(Family.visited_date <= date_to)

    if unassigned:
        stmt = stmt.where(Family.team_id.is_(None))
    elif team_id:
        stmt = stmt.where(Family.team_id == team_id)

    stmt = stmt.order_by(
        desc(Family.visited_date).nulls_last(),
        desc(Family.created_at),
    )
    families = db.scalars(stmt).all()

    # JSON 컬럼은 DB 마다 검색 문법이 달라 메모리에서 필터링
    wanted = set(_split_csv_param(courses))
    if wanted:
        families = [
            f for f in families
            if any(wanted.intersection(m.courses or []) for m in f.members)
        ]
    return list(families)


def get_family(db: Session, family_id: uuid.UUID) -> Family | None:
    return db.scalar(
        select(Family).options(selectinload(Family.members)).where(Family.id == family_id)
    )


def _build_member(data: dict[str, Any], default_order: int) -> FamilyMember:
    relationship = Relationship(data["relationship"]).value
    grade_level = data.get("grade_level")
    grade_group = data.get("grade_group")
    if relationship == Relationship.CHILD.value and grade_level and not grade_group:
        grade_group = grade_group_for(grade_level) or None

    order = data.get("display_order")
    return FamilyMember(
        korean_name=data["korean_name"].strip(),
        english_name=(data.get("english_name") or "").strip(),
        birth_date=data.get("birth_date"),
        phone_number=clean_phone_number(data.get("phone_number")) or None,
        email=data.get("email"),
        relationship=relationship,
        courses=list(data.get("courses") or []),
        grade_level=grade_level,
        grade_group=grade_group,
        school=data.get("school"),
        display_order=default_order if order is None else order,
    )


def _build_members(members: list[dict[str, Any]]) -> list[FamilyMember]:
    return [_build_member(m, i) for i, m in enumerate(members)]


def _name_from_members(members: list[dict[str, Any]]) -> str:
    husband = next((m["korean_name"] for m in members if m.get("relationship") == Relationship.HUSBAND.value), "")
    wife = next((m["korean_name"] for m in members if m.get("relationship") == Relationship.WIFE.value), "")
    return generate_family_name(husband, wife)


def _normalize_enum_values(values: dict[str, Any]) -> dict[str, Any]:
    if isinstance(values.get("member_status"), MemberStatus):
        values["member_status"] = values["member_status"].value
    return values


def _ensure_team(db: Session, team_id: uuid.UUID | None) -> None:
    if team_id is not None and not get_team(db, team_id):
        raise ValueError("Team not found")


"""
가정 생성

- values  : 가정 필드 (snake_case)
- members : 구성원 목록 (snake_case dict)
- 가정 이름이 비어 있으면 남편・아내 한글 이름으로 생성
- 방문일이 비어 있으면 가장 최근 주일

"""

def create_family(db: Session, values: dict[str, Any], members: list[dict[str, Any]]) -> Family:
    values = _normalize_enum_values(dict(values))
    members = [{**m, "relationship": Relationship(m["relationship"]).value} for m in members]

    _ensure_team(db, values.get("team_id"))

    family_name = (values.get("family_name") or "").strip() or _name_from_members(members)
    if not family_name:
        raise ValueError("Family name is required (or add a husband / wife member)")
    values["family_name"] = family_name

    values["phone_number"] = clean_phone_number(values.get("phone_number"))
    if not (values.get("full_address") or "").strip():
        values["full_address"] = generate_full_address(
            values.get("address"), values.get("city"), values.get("state"), values.get("zip_code")
        )
    if values.get("visited_date") is None:
        values["visited_date"] = previous_sunday()

    family = Family(**values)
    family.family_code = next_family_code(db)
    family.members = _build_members(members)

    db.add(family)
    db.flush()
    return family


"""
가정 부분 수정

- changes 에 members 키가 있으면 구성원 전체 교체, 없으면 유지
- team_id 가 None 으로 오면 팀 배정 해제
- 가정 이름을 빈 값으로 보내면 구성원 기준으로 다시 생성

"""

def update_family(db: Session, family: Family, changes: dict[str, Any]) -> Family:
    changes = _normalize_enum_values(dict(changes))
    members = changes.pop("members", None)

    if "team_id" in changes:
        _ensure_team(db, changes["team_id"])

    if "phone_number" in changes:
        changes["phone_number"] = clean_phone_number(changes["phone_number"])

    if members is not None:
        members = [{**m, "relationship": Relationship(m["relationship"]).value} for m in members]
        family.members = _build_members(members)

    if "family_name" in changes and not (changes["family_name"] or "").strip():
        changes["family_name"] = _name_from_members(members) if members is not None else family.family_name

    for field, value in changes.items():
        # NOT NULL 문자열 컬럼은 None 대신 빈 문자열
        if value is None and field in ("address", "city", "state", "zip_code", "full_address", "phone_number"):
            value = ""
        if value is None and field in ("family_name", "member_status", "display_order"):
            continue
        setattr(family, field, value)

    address_fields = {"address", "city", "state", "zip_code"}
    if address_fields.intersection(changes) and "full_address" not in changes:
        family.full_address = generate_full_address(family.address, family.city, family.state, family.zip_code)

    db.flush()
    return family


def delete_family(db: Session, family: Family) -> None:
    # 구성원 / 심방 기록 / 헌금 / 출석은 cascade 로 함께 삭제
    db.delete(family)
    db.flush()


def create_quick_member(db: Session, data: dict[str, Any]) -> Family:
    """팀 화면에서 이름만으로 가정(구성원 1명)을 바로 등록"""
    _ensure_team(db, data["team_id"])

    korean_name = data["korean_name"].strip()
    member = {
        "korean_name": korean_name,
        "english_name": data.get("english_name") or "",
        "phone_number": data.get("phone_number"),
        "email": data.get("email"),
        "relationship": data["member_type"],
    }
    return create_family(
        db,
        {
            "family_name": korean_name,
            "member_status": MemberStatus.MEMBER.value,
            "phone_number": data.get("phone_number") or "",
            "email": data.get("email"),
            "team_id": data["team_id"],
            "family_picture": data.get("family_picture"),
        },
        [member],
    )


# ---------------------------------------------------------------------------
# CSV 일괄 등록
# ---------------------------------------------------------------------------

CSV_COLUMNS = [
    "Department",
    "Team",
    "Korean Name",
    "English Name",
    "Phone",
    "Email",
    "Address",
    "Business Name",
    "Business Title",
]
CSV_REQUIRED_COLUMNS = ["Department", "Team", "Korean Name"]

_STATE_ZIP_RE = re.compile(r"^([A-Za-z]{2})\s+(\d{5}(?:-\d{4})?)$")


def parse_address(raw: str) -> dict[str, str]:
    """
    "123 Main St, Frisco, TX 75034" -> address / city / state / zip_code

    형식이 맞지 않으면 전체 문자열을 address 에 그대로 둔다.
    """
    raw = (raw or "").strip()
    result = {"address": raw, "city": "", "state": "", "zip_code": ""}
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) < 3:
        return result

    m = _STATE_ZIP_RE.match(parts[-1])
    if not m:
        return result

    result["address"] = ", ".join(parts[:-2])
    result["city"] = parts[-2]
    result["state"] = m.group(1).upper()
    result["zip_code"] = m.group(2)
    return result


def _read_csv_rows(content: bytes) -> list[dict[str, str]]:
    try:
        # 엑셀에서 저장한 CSV 는 BOM 이 붙어 있음
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise ValueError("CSV file must be UTF-8 encoded")

    reader = csv.DictReader(io.StringIO(text))
    header = [h.strip() for h in (reader.fieldnames or [])]
    missing = [c for c in CSV_REQUIRED_COLUMNS if c not in header]
    if missing:
        raise ValueError(f"Missing required columns: {', '.join(missing)}")

    rows = []
    for raw in reader:
        rows.append({(k or "").strip(): (v or "").strip() for k, v in raw.items() if k})
    return rows


def _find_existing_family(db: Session, *, family_name: str, phone: str) -> Family | None:
    stmt = select(Family).where(Family.family_name == family_name)
    if phone:
        stmt = stmt.where(Family.phone_number == phone)
    else:
        stmt = stmt.where(or_(Family.phone_number == "", Family.phone_number.is_(None)))
    return db.scalars(stmt.order_by(Family.created_at)).first()


# 기존 가정 갱신: 비어 있는 CSV 칸은 기존 값을 유지
def _apply_csv_update(
    family: Family, row: dict[str, str], family_values: dict[str, Any], member_values: dict[str, Any]
) -> None:
    family.team_id = family_values["team_id"]

    if row.get("Address"):
        for field in ("address", "city", "state", "zip_code", "full_address"):
            setattr(family, field, family_values[field])
    for field in ("email", "biz_name", "biz_title"):
        if family_values[field]:
            setattr(family, field, family_values[field])

    head = next((m for m in family.members if m.korean_name == member_values["korean_name"]), None)
    if head is None:
        family.members.append(_build_member(member_values, len(family.members)))
        return
    if member_values["english_name"]:
        head.english_name = member_values["english_name"]
    if member_values["phone_number"]:
        head.phone_number = member_values["phone_number"]
    if member_values["email"]:
        head.email = member_values["email"]


"""
CSV 일괄 등록

- 필수 컬럼: Department, Team, Korean Name
- 부서 / 팀이 없으면 생성
- 같은 이름 + 전화번호의 가정이 있으면 갱신, 없으면 새 가정(등록 교인) 생성
- 갱신 시 비어 있는 CSV 칸은 기존 값을 덮어쓰지 않음
- 행 단위 검증 실패는 errors 에 기록하고 다음 행 진행
- 파일 자체가 잘못된 경우(인코딩, 필수 컬럼 누락) ValueError

"""

def import_families_csv(db: Session, content: bytes) -> dict[str, Any]:
    rows = _read_csv_rows(content)
    result: dict[str, Any] = {
        "success": 0,
        "errors": [],
        "created": {"departments": [], "teams": [], "families": []},
        "updated": {"families": []},
    }

    for line_no, row in enumerate(rows, start=2):
        missing = [c for c in CSV_REQUIRED_COLUMNS if not row.get(c)]
        if missing:
            result["errors"].append(
                {"row": line_no, "error": f"Missing required fields: {', '.join(missing)}", "data": row}
            )
            continue

        email = row.get("Email") or None
        if email and "@" not in email:
            result["errors"].append({"row": line_no, "error": "Invalid email", "data": row})
            continue

        department, dept_created = get_or_create_department(db, row["Department"])
        if dept_created:
            result["created"]["departments"].append(department.name)

        team, team_created = get_or_create_team(db, department, row["Team"])
        if team_created:
            result["created"]["teams"].append(f"{department.name} / {team.name}")

        korean_name = row["Korean Name"]
        phone = clean_phone_number(row.get("Phone"))
        address = parse_address(row.get("Address", ""))
        family_values = {
            "email": email,
            **address,
            "full_address": generate_full_address(
                address["address"], address["city"], address["state"], address["zip_code"]
            ),
            "biz_name": row.get("Business Name") or None,
            "biz_title": row.get("Business Title") or None,
            "team_id": team.id,
        }
        member_values = {
            "korean_name": korean_name,
            "english_name": row.get("English Name", ""),
            "phone_number": phone,
            "email": email,
            "relationship": Relationship.HUSBAND.value,
        }

        existing = _find_existing_family(db, family_name=korean_name, phone=phone)
        if existing:
            _apply_csv_update(existing, row, family_values, member_values)
            db.flush()
            result["updated"]["families"].append(existing.family_name)
        else:
            create_family(
                db,
                {
                    **family_values,
                    "family_name": korean_name,
                    "phone_number": phone,
                    "member_status": MemberStatus.MEMBER.value,
                },
                [member_values],
            )
            result["created"]["families"].append(korean_name)

        result["success"] += 1

    logger.info(
        "csv import: %d ok, %d errors, %d new families, %d updated families",
        result["success"],
        len(result["errors"]),
        len(result["created"]["families"]),
        len(result["updated"]["families"]),
    )
    return result
