"""
families.py

가정(Family) / 가족 구성원 / 심방 기록 API 모음.

주요 기능:
- 가정 목록 검색 및 상세 조회
- 가정 + 구성원 생성 / 수정 / 삭제
- 팀 화면에서의 빠른 구성원 등록 (quick-member)
- CSV 일괄 등록 (upload-csv)
- 가정별 심방 기록 조회

설계 원칙:
- 생성 / 삭제 / 일괄 등록은 ADM, MGM 만 가능
- 수정은 로그인한 스태프 누구나 가능 (팀 드래그 앤 드롭 재배정 포함)
- 비즈니스 로직은 service 계층(familycare.services.families)에 위임

관련 파일:
- familycare.services.families  : 가정 생성 / 수정 / CSV 처리
- familycare.services.care_logs : 심방 기록 조회
- familycare.schemas.family     : 요청 / 응답 스키마

"""

import logging
import uuid
from datetime import date

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from sqlalchemy.orm import Session

from familycare.core.deps import get_db, get_current_staff, get_current_manager
from familycare.models.family import Family
from familycare.models.staff import Staff
from familycare.schemas.care_log import CareLogResponse
from familycare.schemas.family import (
    CsvImportResult,
    FamilyCreateRequest,
    FamilyResponse,
    FamilyUpdateRequest,
    MemberResponse,
    QuickMemberRequest,
)
from familycare.services.care_logs import list_family_care_logs
from familycare.services.families import (
    create_family,
    create_quick_member,
    delete_family,
    get_family,
    import_families_csv,
    list_families,
    update_family,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/families", tags=["families"])


def _get_family_or_404(db: Session, family_id: uuid.UUID) -> Family:
    family = get_family(db, family_id)
    if not family:
        raise HTTPException(status_code=404, detail="Family not found")
    return family


"""
가정 목록 검색 API

- 쿼리 파라미터는 프론트엔드와 같은 camelCase 이름 사용
- memberStatus / courses 는 콤마로 여러 값 지정 가능
- unassigned=true 면 팀 미배정 가정만

"""

@router.get("", response_model=list[FamilyResponse])
def search_families(
    name: str | None = Query(None),
    life_group: str | None = Query(None, alias="lifeGroup"),
    support_team_member: str | None = Query(None, alias="supportTeamMember"),
    member_status: str | None = Query(None, alias="memberStatus"),
    date_from: date | None = Query(None, alias="dateFrom"),
    date_to: date | None = Query(None, alias="dateTo"),
    team_id: uuid.UUID | None = Query(None, alias="teamId"),
    unassigned: bool = Query(False),
    courses: str | None = Query(None),
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    return list_families(
        db,
        name=name,
        life_group=life_group,
        support_team_member=support_team_member,
        member_status=member_status,
        date_from=date_from,
        date_to=date_to,
        team_id=team_id,
        unassigned=unassigned,
        courses=courses,
    )


"""
가정 생성 API (ADM / MGM)

- 가정 정보와 구성원 목록을 한 번에 생성
- family_code(FMnnnn) 자동 발급

"""

@router.post("", response_model=FamilyResponse, status_code=201)
def create_family_with_members(
    body: FamilyCreateRequest,
    db: Session = Depends(get_db),
    manager: Staff = Depends(get_current_manager),
):
    values = body.model_dump(exclude={"members"})
    members = [m.model_dump() for m in body.members]
    try:
        family = create_family(db, values, members)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.exception("create family failed")
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    logger.info("family %s (%s) created by %s", family.family_name, family.family_code, manager.nick_name)
    return _get_family_or_404(db, family.id)


@router.post("/quick-member", response_model=FamilyResponse, status_code=201)
def quick_member(
    body: QuickMemberRequest,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_manager),
):
    try:
        family = create_quick_member(db, body.model_dump())
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return _get_family_or_404(db, family.id)


"""
CSV 일괄 등록 API (ADM / MGM)

- multipart 필드명: file
- 파일 자체 오류(인코딩, 필수 컬럼 누락)는 400
- 행 단위 오류는 응답의 errors 에 담아 200 으로 반환

"""

@router.post("/upload-csv", response_model=CsvImportResult)
def upload_families_csv(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    manager: Staff = Depends(get_current_manager),
):
    if file.filename and not file.filename.lower().endswith(".csv") and file.content_type != "text/csv":
        raise HTTPException(status_code=400, detail="Please upload a CSV file")

    try:
        result = import_families_csv(db, file.file.read())
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.exception("csv import failed")
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    logger.info("csv import by %s: %d rows imported", manager.nick_name, result["success"])
    return result


@router.get("/{family_id}", response_model=FamilyResponse)
def family_detail(
    family_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    return _get_family_or_404(db, family_id)


@router.get("/{family_id}/members", response_model=list[MemberResponse])
def family_members(
    family_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    return _get_family_or_404(db, family_id).members


@router.get("/{family_id}/care-logs", response_model=list[CareLogResponse])
def family_care_logs(
    family_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    _get_family_or_404(db, family_id)
    return list_family_care_logs(db, family_id)


"""
가정 수정 API

- 보낸 필드만 수정
- members 를 보내면 구성원 전체 교체
- teamId 만 보내는 팀 재배정 / teamId: null 로 배정 해제

"""

@router.put("/{family_id}", response_model=FamilyResponse)
def update_family_info(
    family_id: uuid.UUID,
    body: FamilyUpdateRequest,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    family = _get_family_or_404(db, family_id)

    changes = body.model_dump(exclude_unset=True)
    try:
        update_family(db, family, changes)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        logger.exception("update family failed")
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return _get_family_or_404(db, family_id)


@router.delete("/{family_id}")
def remove_family(
    family_id: uuid.UUID,
    db: Session = Depends(get_db),
    manager: Staff = Depends(get_current_manager),
):
    family = _get_family_or_404(db, family_id)

    try:
        delete_family(db, family)
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    logger.info("family %s deleted by %s", family_id, manager.nick_name)
    return {"message": "Family deleted"}
