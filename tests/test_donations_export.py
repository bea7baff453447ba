"""

헌금 검색 결과 CSV / XLSX 내보내기 테스트.
- attachment 헤더, BOM(utf-8-sig), 헤더 / 데이터 행,
  검색 조건 적용 및 XLSX 파일 내용을 확인한다.

"""

import csv
import io
from decimal import Decimal

from openpyxl import load_workbook

from familycare.models.staff import StaffGroup
from familycare.services.donations import EXPORT_HEADER
from tests.helpers import auth_header, create_family_via_api, setup_staff


def _seed(client, token: str, family_token: str | None = None) -> dict:
    # 가정 등록은 관리자(ADM / MGM)만 가능
    family = create_family_via_api(client, family_token or token)
    for body in (
        {"amount": "100.00", "date": "2026-03-01", "received": True, "comment": "감사 헌금"},
        {"amount": "25.75", "date": "2026-03-08", "type": "Special"},
    ):
        res = client.post(
            "/api/donations", headers=auth_header(token), json={"familyId": family["id"], **body}
        )
        assert res.status_code == 201, res.text
    return family


def _parse_csv_text(content: bytes) -> list[list[str]]:
    return list(csv.reader(io.StringIO(content.decode("utf-8-sig"))))


def test_export_donations_csv(client, db_session):
    staff = setup_staff(client, db_session, StaffGroup.TEAM_B)
    manager = setup_staff(client, db_session, StaffGroup.MGM)
    family = _seed(client, staff["token"], family_token=manager["token"])

    res = client.get("/api/donations/export", headers=auth_header(staff["token"]))
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/csv")
    cd = res.headers.get("content-disposition", "")
    assert "attachment" in cd
    assert "donations.csv" in cd

    # Excel 호환 BOM
    assert res.content.startswith(b"\xef\xbb\xbf")

    rows = _parse_csv_text(res.content)
    assert rows[0] == EXPORT_HEADER
    assert len(rows) == 3

    newest, oldest = rows[1], rows[2]
    assert newest[0] == "2026-03-08"
    assert newest[1] == family["familyCode"]
    assert newest[2] == family["familyName"]
    assert newest[3] == "Special"
    assert Decimal(newest[4]) == Decimal("25.75")
    assert oldest[5] == "True"
    assert oldest[8] == "감사 헌금"


def test_export_donations_csv_applies_filters(client, db_session):
    staff = setup_staff(client, db_session, StaffGroup.TEAM_A)
    manager = setup_staff(client, db_session, StaffGroup.ADM)
    _seed(client, staff["token"], family_token=manager["token"])

    res = client.get("/api/donations/export?type=Special", headers=auth_header(staff["token"]))
    assert res.status_code == 200
    rows = _parse_csv_text(res.content)
    assert len(rows) == 2
    assert rows[1][3] == "Special"

    assert client.get("/api/donations/export").status_code == 401


def test_export_donations_xlsx(client, db_session):
    staff = setup_staff(client, db_session, StaffGroup.MGM)
    family = _seed(client, staff["token"])

    res = client.get("/api/donations/export.xlsx", headers=auth_header(staff["token"]))
    assert res.status_code == 200
    assert res.headers.get("content-type", "").startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert "attachment" in res.headers.get("content-disposition", "")
    # XLSX는 ZIP 기반 포맷이라 앞부분이 PK로 시작
    assert res.content[:2] == b"PK"

    ws = load_workbook(io.BytesIO(res.content)).active
    assert ws.title == "donations"
    rows = list(ws.iter_rows(values_only=True))
    assert list(rows[0]) == EXPORT_HEADER
    assert len(rows) == 3
    assert rows[1][2] == family["familyName"]
    assert Decimal(str(rows[2][4])) == Decimal("100")
