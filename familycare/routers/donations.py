"""
donations.py

헌금(Donation) API 모음.

주요 기능:
- 헌금 목록 검색 (건수 / 합계 금액 meta 포함)
- 헌금 등록 / 수정 / 삭제
- 검색 결과 CSV / Excel(xlsx) 내보내기

설계 원칙:
- 로그인한 스태프 누구나 조회 / 등록 가능, 등록자는 created_by 로 기록
- 목록과 내보내기는 같은 검색 조건(DonationFilters)을 사용
- 비즈니스 로직은 service 계층(familycare.services.donations)에 위임

관련 파일:
- familycare.services.donations : 검색 / 검증 / 내보내기 행 생성
- familycare.schemas.donation   : 요청 / 응답 스키마

"""

import csv
import io
import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from openpyxl import Workbook
from sqlalchemy.orm import Session
from starlette.responses import Response, StreamingResponse

from familycare.core.deps import get_db, get_current_staff
from familycare.models.donation import Donation
from familycare.models.staff import Staff
from familycare.schemas.common import dump
from familycare.schemas.donation import DonationCreateRequest, DonationResponse, DonationUpdateRequest
from familycare.services.donations import (
    EXPORT_HEADER,
    create_donation,
    delete_donation,
    export_rows,
    get_donation,
    list_donations,
    total_amount,
    update_donation,
)

router = APIRouter(prefix="/donations", tags=["donations"])


def _parse_flag(value: str | None) -> bool | None:
    # "true" / "false" 외의 값(빈 값, "all")은 조건 없음
    if value is None:
        return None
    value = value.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    return None


# 목록 / 내보내기 공통 검색 조건 (쿼리 파라미터는 camelCase)
class DonationFilters:
    def __init__(
        self,
        family_name: str | None = Query(None, alias="familyName"),
        family_id: uuid.UUID | None = Query(None, alias="familyId"),
        type: str | None = Query(None),
        date_from: date | None = Query(None, alias="dateFrom"),
        date_to: date | None = Query(None, alias="dateTo"),
        received: str | None = Query(None),
        email_for_thank: str | None = Query(None, alias="emailForThank"),
        email_for_tax: str | None = Query(None, alias="emailForTax"),
    ):
        self.family_name = family_name
        self.family_id = family_id
        self.type = type
        self.date_from = date_from
        self.date_to = date_to
        self.received = received
        self.email_for_thank = email_for_thank
        self.email_for_tax = email_for_tax

    def search(self, db: Session) -> list[Donation]:
        return list_donations(
            db,
            family_name=self.family_name,
            family_id=self.family_id,
            type=self.type,
            date_from=self.date_from,
            date_to=self.date_to,
            received=_parse_flag(self.received),
            email_for_thank=_parse_flag(self.email_for_thank),
            email_for_tax=_parse_flag(self.email_for_tax),
        )


"""
헌금 목록 조회 API

- 날짜 최신순
- meta.count       : 검색된 건수
- meta.totalAmount : 검색된 헌금 합계 (소수점 2자리 문자열)

"""

@router.get("")
def search_donations(
    filters: DonationFilters = Depends(),
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    donations = filters.search(db)
    return {
        "data": [dump(DonationResponse, d) for d in donations],
        "meta": {
            "count": len(donations),
            "totalAmount": f"{total_amount(donations):.2f}",
        },
    }


"""
헌금 검색 결과 CSV 다운로드 API

- 목록 조회와 같은 검색 조건 사용
- UTF-8 BOM 을 먼저 출력하여 Excel 에서 한글 가정 이름이 깨지지 않도록 처리

"""

@router.get("/export")
def export_donations_csv(
    filters: DonationFilters = Depends(),
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    rows = export_rows(filters.search(db))

    def generate():
        # Excel에서 UTF-8 CSV 한글 깨짐 방지를 위해 BOM(Byte Order Mark) 먼저 출력
        yield "\ufeff"

        output = io.StringIO()
        writer = csv.writer(output)

        writer.writerow(EXPORT_HEADER)
        yield output.getvalue()
        output.seek(0)
        output.truncate(0)

        for row in rows:
            writer.writerow(row)
            yield output.getvalue()
            output.seek(0)
            output.truncate(0)

    headers = {"Content-Disposition": 'attachment; filename="donations.csv"'}
    return StreamingResponse(generate(), media_type="text/csv; charset=utf-8", headers=headers)


@router.get("/export.xlsx")
def export_donations_xlsx(
    filters: DonationFilters = Depends(),
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    wb = Workbook()
    ws = wb.active
    ws.title = "donations"

    ws.append(EXPORT_HEADER)
    for row in export_rows(filters.search(db)):
        ws.append(row)

    buf = io.BytesIO()
    wb.save(buf)

    headers = {"Content-Disposition": 'attachment; filename="donations.xlsx"'}
    return Response(
        content=buf.getvalue(),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers=headers,
    )


def _get_donation_or_404(db: Session, donation_id: uuid.UUID) -> Donation:
    donation = get_donation(db, donation_id)
    if not donation:
        raise HTTPException(status_code=404, detail="Donation not found")
    return donation


@router.get("/{donation_id}", response_model=DonationResponse)
def donation_detail(
    donation_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    return _get_donation_or_404(db, donation_id)


@router.post("", response_model=DonationResponse, status_code=201)
def create_donation_record(
    body: DonationCreateRequest,
    db: Session = Depends(get_db),
    current_staff: Staff = Depends(get_current_staff),
):
    try:
        donation = create_donation(db, body.model_dump(), created_by=current_staff.id)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
    return _get_donation_or_404(db, donation.id)


@router.put("/{donation_id}", response_model=DonationResponse)
def update_donation_record(
    donation_id: uuid.UUID,
    body: DonationUpdateRequest,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    donation = _get_donation_or_404(db, donation_id)
    try:
        update_donation(db, donation, body.model_dump(exclude_unset=True))
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
    return _get_donation_or_404(db, donation_id)


@router.delete("/{donation_id}")
def delete_donation_record(
    donation_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: Staff = Depends(get_current_staff),
):
    donation = _get_donation_or_404(db, donation_id)
    try:
        delete_donation(db, donation)
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
    return {"message": "Donation deleted"}
