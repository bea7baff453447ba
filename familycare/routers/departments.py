"""
departments.py

부서(Department) API 및 조직도(부서 -> 팀 -> 가정) 조회 API.

- 조회는 로그인한 스태프 누구나
- 생성 / 수정 / 삭제는 ADM, MGM 만 가능
- 부서 삭제 시 소속 팀도 삭제되고, 그 팀의 가정은 미배정 상태가 됨

관련 파일:
- familycare.services.departments : 부서 / 팀 / 조직도 로직
- familycare.routers.teams        : 팀 API

"""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from familycare.core.deps import get_db, get_current_staff, get_current_manager
from familycare.models.department import Department
from familycare.models.staff import Staff
from familycare.schemas.department import (
    DepartmentCreateRequest,
    DepartmentResponse,
    DepartmentUpdateRequest,
    DepartmentWithTeams,
    OrganizationTree,
)
from familycare.services.departments import (
    create_department,
    delete_department,
    get_department,
    list_departments,
    list_departments_with_teams,
    organization_tree,
    update_department,
)

router = APIRouter(prefix="/departments", tags=["departments"])


@router.get("", response_model=list[DepartmentResponse])
def department_list(
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    return list_departments(db)


@router.get("/with-teams", response_model=list[DepartmentWithTeams])
def departments_with_teams(
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    return list_departments_with_teams(db)


"""
조직도 조회 API

- 부서 -> 팀 -> 가정(구성원 포함) 트리
- 팀에 배정되지 않은 가정은 unassigned 로 따로 반환 (팀 배정 드래그 앤 드롭 화면용)

"""

@router.get("/with-teams-and-families", response_model=OrganizationTree)
def departments_with_teams_and_families(
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    departments, unassigned = organization_tree(db)
    return {"departments": departments, "unassigned": unassigned}


def _get_department_or_404(db: Session, department_id: uuid.UUID) -> Department:
    department = get_department(db, department_id)
    if not department:
        raise HTTPException(status_code=404, detail="Department not found")
    return department


@router.get("/{department_id}", response_model=DepartmentWithTeams)
def department_detail(
    department_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    return _get_department_or_404(db, department_id)


@router.post("", response_model=DepartmentResponse, status_code=201)
def create_department_entry(
    body: DepartmentCreateRequest,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_manager),
):
    try:
        department = create_department(db, body.model_dump())
        db.commit()
        db.refresh(department)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
    return department


@router.put("/{department_id}", response_model=DepartmentResponse)
def update_department_entry(
    department_id: uuid.UUID,
    body: DepartmentUpdateRequest,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_manager),
):
    department = _get_department_or_404(db, department_id)
    try:
        update_department(db, department, body.model_dump(exclude_unset=True))
        db.commit()
        db.refresh(department)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
    return department


@router.delete("/{department_id}")
def delete_department_entry(
    department_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_manager),
):
    department = _get_department_or_404(db, department_id)
    try:
        delete_department(db, department)
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
    return {"message": "Department deleted"}
