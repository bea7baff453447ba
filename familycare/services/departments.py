"""
services/departments.py

부서(Department) / 팀(Team) 도메인의 비즈니스 로직 모음.

설계 원칙:
- 부서 이름은 전체에서 유일, 팀 이름은 부서 안에서 유일
- 팀 담당 스태프(assigned_staff)는 존재하는 스태프 id 만 허용
- 팀 삭제 시 소속 가정은 미배정 상태로 전환

관련 파일:
- familycare.models.department   : Department / Team 모델
- familycare.routers.departments : 부서 / 팀 API
- familycare.services.families   : CSV 등록 시 부서 / 팀 자동 생성

"""

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from familycare.models.department import Department, Team
from familycare.models.family import Family
from familycare.models.staff import Staff


def get_department(db: Session, department_id: uuid.UUID) -> Department | None:
    return db.scalar(select(Department).where(Department.id == department_id))


def get_team(db: Session, team_id: uuid.UUID) -> Team | None:
    return db.scalar(select(Team).where(Team.id == team_id))


def list_departments(db: Session) -> list[Department]:
    return db.scalars(select(Department).order_by(Department.name)).all()


def list_departments_with_teams(db: Session) -> list[Department]:
    return db.scalars(
        select(Department).options(selectinload(Department.teams)).order_by(Department.name)
    ).all()


"""
조직도 조회 (부서 -> 팀 -> 가정 -> 구성원)

- 팀에 배정되지 않은 가정은 unassigned 로 따로 반환
- 반환: (departments, unassigned_families)

"""

def organization_tree(db: Session) -> tuple[list[Department], list[Family]]:
    departments = db.scalars(
        select(Department)
        .options(
            selectinload(Department.teams)
            .selectinload(Team.families)
            .selectinload(Family.members)
        )
        .order_by(Department.name)
    ).all()

    unassigned = db.scalars(
        select(Family)
        .options(selectinload(Family.members))
        .where(Family.team_id.is_(None))
        .order_by(Family.display_order, Family.family_name)
    ).all()
    return departments, unassigned


def _ensure_unique_department_name(db: Session, name: str, *, exclude_id: uuid.UUID | None = None) -> None:
    stmt = select(Department).where(Department.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Department.id != exclude_id)
    if db.scalar(stmt):
        raise ValueError("Department name already exists")


def create_department(db: Session, values: dict[str, Any]) -> Department:
    values = dict(values)
    values["name"] = values["name"].strip()
    _ensure_unique_department_name(db, values["name"])

    department = Department(**values)
    db.add(department)
    db.flush()
    return department


def update_department(db: Session, department: Department, changes: dict[str, Any]) -> Department:
    changes = dict(changes)
    if changes.get("name") is not None:
        changes["name"] = changes["name"].strip()
        _ensure_unique_department_name(db, changes["name"], exclude_id=department.id)
    elif "name" in changes:
        changes.pop("name")

    for field, value in changes.items():
        setattr(department, field, value)
    db.flush()
    return department


def delete_department(db: Session, department: Department) -> None:
    # 소속 팀도 함께 삭제되고, 그 팀의 가정은 미배정 상태가 됨
    db.delete(department)
    db.flush()


def list_teams(db: Session, *, department_id: uuid.UUID | None = None) -> list[Team]:
    stmt = select(Team)
    if department_id:
        stmt = stmt.where(Team.department_id == department_id)
    return db.scalars(stmt.order_by(Team.name)).all()


def _validate_assigned_staff(db: Session, staff_ids: list[uuid.UUID]) -> list[str]:
    unique_ids = list(dict.fromkeys(staff_ids))
    if not unique_ids:
        return []
    found = set(db.scalars(select(Staff.id).where(Staff.id.in_(unique_ids))).all())
    missing = [str(i) for i in unique_ids if i not in found]
    if missing:
        raise ValueError(f"Staff not found: {', '.join(missing)}")
    return [str(i) for i in unique_ids]


def _ensure_unique_team_name(
    db: Session, department_id: uuid.UUID, name: str, *, exclude_id: uuid.UUID | None = None
) -> None:
    stmt = select(Team).where(Team.department_id == department_id, Team.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Team.id != exclude_id)
    if db.scalar(stmt):
        raise ValueError("Team name already exists in this department")


def create_team(db: Session, values: dict[str, Any]) -> Team:
    values = dict(values)
    if not get_department(db, values["department_id"]):
        raise ValueError("Department not found")

    values["name"] = values["name"].strip()
    _ensure_unique_team_name(db, values["department_id"], values["name"])
    values["assigned_staff"] = _validate_assigned_staff(db, values.get("assigned_staff") or [])

    team = Team(**values)
    db.add(team)
    db.flush()
    return team


def update_team(db: Session, team: Team, changes: dict[str, Any]) -> Team:
    changes = dict(changes)

    department_id = changes.get("department_id") or team.department_id
    if changes.get("department_id") is not None and not get_department(db, department_id):
        raise ValueError("Department not found")
    changes.pop("department_id", None)
    team.department_id = department_id

    if changes.get("name") is not None:
        changes["name"] = changes["name"].strip()
    else:
        changes.pop("name", None)
    _ensure_unique_team_name(db, department_id, changes.get("name", team.name), exclude_id=team.id)

    if "assigned_staff" in changes:
        changes["assigned_staff"] = _validate_assigned_staff(db, changes["assigned_staff"] or [])

    for field, value in changes.items():
        setattr(team, field, value)
    db.flush()
    return team


def delete_team(db: Session, team: Team) -> None:
    # Team.families 에 cascade 가 없으므로 ORM 이 team_id 를 NULL 로 갱신
    db.delete(team)
    db.flush()


def list_team_families(db: Session, team_id: uuid.UUID) -> list[Family]:
    return db.scalars(
        select(Family)
        .options(selectinload(Family.members))
        .where(Family.team_id == team_id)
        .order_by(Family.display_order, Family.family_name)
    ).all()


def get_or_create_department(db: Session, name: str) -> tuple[Department, bool]:
    name = name.strip()
    department = db.scalar(select(Department).where(Department.name == name))
    if department:
        return department, False
    department = Department(name=name)
    db.add(department)
    db.flush()
    return department, True


def get_or_create_team(db: Session, department: Department, name: str) -> tuple[Team, bool]:
    name = name.strip()
    team = db.scalar(select(Team).where(Team.department_id == department.id, Team.name == name))
    if team:
        return team, False
    team = Team(department_id=department.id, name=name, assigned_staff=[])
    db.add(team)
    db.flush()
    return team, True
