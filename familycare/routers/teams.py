"""
teams.py

팀(Team) API 모음.

- 조회는 로그인한 스태프 누구나, 생성 / 수정 / 삭제는 ADM, MGM
- assignedStaff 는 보낼 때마다 목록 전체 교체 (존재하는 스태프 id 만 허용)
- 팀 삭제 시 소속 가정은 미배정 상태로 남음

"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from familycare.core.deps import get_db, get_current_staff, get_current_manager
from familycare.models.department import Team
from familycare.models.staff import Staff
from familycare.schemas.department import TeamCreateRequest, TeamResponse, TeamUpdateRequest
from familycare.schemas.family import FamilyResponse
from familycare.services.departments import (
    create_team,
    delete_team,
    get_team,
    list_team_families,
    list_teams,
    update_team,
)

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("", response_model=list[TeamResponse])
def team_list(
    department_id: uuid.UUID | None = Query(None, alias="departmentId"),
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    return list_teams(db, department_id=department_id)


def _get_team_or_404(db: Session, team_id: uuid.UUID) -> Team:
    team = get_team(db, team_id)
    if not team:
        raise HTTPException(status_code=404, detail="Team not found")
    return team


@router.get("/{team_id}", response_model=TeamResponse)
def team_detail(
    team_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    return _get_team_or_404(db, team_id)


@router.get("/{team_id}/families", response_model=list[FamilyResponse])
def team_families(
    team_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    _get_team_or_404(db, team_id)
    return list_team_families(db, team_id)


@router.post("", response_model=TeamResponse, status_code=201)
def create_team_entry(
    body: TeamCreateRequest,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_manager),
):
    try:
        team = create_team(db, body.model_dump())
        db.commit()
        db.refresh(team)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
    return team


@router.put("/{team_id}", response_model=TeamResponse)
def update_team_entry(
    team_id: uuid.UUID,
    body: TeamUpdateRequest,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_manager),
):
    team = _get_team_or_404(db, team_id)
    try:
        update_team(db, team, body.model_dump(exclude_unset=True))
        db.commit()
        db.refresh(team)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
    return team


@router.delete("/{team_id}")
def delete_team_entry(
    team_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_manager),
):
    team = _get_team_or_404(db, team_id)
    try:
        delete_team(db, team)
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
    return {"message": "Team deleted"}
