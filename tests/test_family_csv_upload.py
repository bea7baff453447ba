"""

가정 CSV 일괄 등록 테스트.
- 부서 / 팀 / 가정 자동 생성, 행 단위 오류 수집(줄 번호),
  같은 이름 + 전화번호 가정 갱신, 주소 분리, 파일 형식 오류(400)를 검증한다.

"""

from sqlalchemy import func, select

from familycare.models.family import Family
from familycare.models.staff import StaffGroup
from familycare.services.families import parse_address
from tests.helpers import auth_header, setup_staff

HEADER = "Department,Team,Korean Name,English Name,Phone,Email,Address,Business Name,Business Title"


def _upload(client, token: str, text: str, filename: str = "families.csv", content_type: str = "text/csv"):
    # Excel 에서 저장한 CSV 처럼 BOM 포함
    return client.post(
        "/api/families/upload-csv",
        headers=auth_header(token),
        files={"file": (filename, text.encode("utf-8-sig"), content_type)},
    )


def _find(client, token: str, name: str) -> dict:
    res = client.get("/api/families", headers=auth_header(token), params={"name": name})
    assert res.status_code == 200, res.text
    assert len(res.json()) == 1
    return res.json()[0]


def test_csv_upload_creates_organization_and_families(client, db_session):
    manager = setup_staff(client, db_session, StaffGroup.MGM)
    token = manager["token"]

    text = "\n".join([
        HEADER,
        '청년부,1팀,홍길동,Gildong Hong,(214) 555-0101,gildong@church.org,"123 Main St, Frisco, TX 75034",길동상사,대표',
        "청년부,1팀,,Nobody,,,,,",
        "청년부,2팀,임꺽정,,,bad-email,,,",
        "장년부,1팀,장보고,Bogo Jang,,,Somewhere,,",
    ])
    res = _upload(client, token, text)
    assert res.status_code == 200, res.text
    body = res.json()

    assert body["success"] == 2
    assert [(e["row"], e["error"]) for e in body["errors"]] == [
        (3, "Missing required fields: Korean Name"),
        (4, "Invalid email"),
    ]
    assert body["errors"][0]["data"]["English Name"] == "Nobody"
    assert body["created"]["departments"] == ["청년부", "장년부"]
    assert body["created"]["teams"] == ["청년부 / 1팀", "장년부 / 1팀"]
    assert body["created"]["families"] == ["홍길동", "장보고"]
    assert body["updated"]["families"] == []

    hong = _find(client, token, "홍길동")
    assert hong["memberStatus"] == "member"
    assert hong["phoneNumber"] == "2145550101"
    assert hong["email"] == "gildong@church.org"
    assert (hong["address"], hong["city"], hong["state"], hong["zipCode"]) == ("123 Main St", "Frisco", "TX", "75034")
    assert hong["fullAddress"] == "123 Main St, Frisco, TX, 75034"
    assert hong["bizName"] == "길동상사"
    assert hong["bizTitle"] == "대표"
    assert hong["teamId"] is not None
    assert [(m["koreanName"], m["relationship"]) for m in hong["members"]] == [("홍길동", "husband")]

    jang = _find(client, token, "장보고")
    assert jang["address"] == "Somewhere"
    assert jang["city"] == ""

    # 조직도에 새 팀과 가정이 보임
    tree = client.get("/api/departments/with-teams-and-families", headers=auth_header(token)).json()
    names = {d["name"]: d for d in tree["departments"]}
    assert [t["name"] for t in names["청년부"]["teams"]] == ["1팀"]
    assert [f["familyName"] for f in names["청년부"]["teams"][0]["families"]] == ["홍길동"]
    assert tree["unassigned"] == []


def test_csv_upload_updates_existing_family(client, db_session):
    manager = setup_staff(client, db_session, StaffGroup.ADM)
    token = manager["token"]

    first = _upload(client, token, "\n".join([HEADER, "청년부,1팀,홍길동,Gildong Hong,214-555-0101,,,,"]))
    assert first.status_code == 200, first.text

    second = _upload(
        client,
        token,
        "\n".join([HEADER, '청년부,1팀,홍길동,GD Hong,(214) 555-0101,,"9 Elm St, Plano, TX 75024",,']),
    )
    assert second.status_code == 200, second.text
    body = second.json()
    assert body["success"] == 1
    assert body["updated"]["families"] == ["홍길동"]
    assert body["created"] == {"departments": [], "teams": [], "families": []}

    assert db_session.scalar(select(func.count()).select_from(Family)) == 1
    hong = _find(client, token, "홍길동")
    assert hong["city"] == "Plano"
    assert len(hong["members"]) == 1
    assert hong["members"][0]["englishName"] == "GD Hong"

    # 전화번호가 다르면 다른 가정으로 등록
    third = _upload(client, token, "\n".join([HEADER, "청년부,1팀,홍길동,,972-000-0000,,,,"]))
    assert third.json()["created"]["families"] == ["홍길동"]
    assert db_session.scalar(select(func.count()).select_from(Family)) == 2


def test_csv_reupload_keeps_values_for_blank_cells(client, db_session):
    manager = setup_staff(client, db_session, StaffGroup.MGM)
    token = manager["token"]

    full = (
        '청년부,1팀,홍길동,Gildong Hong,(214) 555-0101,gildong@church.org,'
        '"123 Main St, Frisco, TX 75034",길동상사,대표'
    )
    assert _upload(client, token, "\n".join([HEADER, full])).status_code == 200

    # 이름 + 전화번호만 있는 명단을 다시 올려도 기존 정보는 유지
    res = _upload(client, token, "\n".join([HEADER, "청년부,2팀,홍길동,,2145550101,,,,"]))
    assert res.status_code == 200, res.text
    assert res.json()["updated"]["families"] == ["홍길동"]

    hong = _find(client, token, "홍길동")
    assert hong["email"] == "gildong@church.org"
    assert (hong["address"], hong["city"], hong["state"], hong["zipCode"]) == ("123 Main St", "Frisco", "TX", "75034")
    assert hong["fullAddress"] == "123 Main St, Frisco, TX, 75034"
    assert hong["bizName"] == "길동상사"
    assert hong["bizTitle"] == "대표"
    assert len(hong["members"]) == 1
    assert hong["members"][0]["englishName"] == "Gildong Hong"
    assert hong["members"][0]["email"] == "gildong@church.org"

    # 팀은 항상 CSV 값으로 갱신
    tree = client.get("/api/departments/with-teams-and-families", headers=auth_header(token)).json()
    teams = {t["name"]: t for d in tree["departments"] for t in d["teams"]}
    assert [f["familyName"] for f in teams["2팀"]["families"]] == ["홍길동"]
    assert teams["1팀"]["families"] == []


def test_csv_upload_file_errors(client, db_session):
    manager = setup_staff(client, db_session, StaffGroup.MGM)
    token = manager["token"]

    missing = _upload(client, token, "Department,Korean Name\n청년부,홍길동")
    assert missing.status_code == 400
    assert missing.json()["detail"] == "Missing required columns: Team"

    not_csv = _upload(client, token, HEADER, filename="families.txt", content_type="text/plain")
    assert not_csv.status_code == 400
    assert not_csv.json()["detail"] == "Please upload a CSV file"

    staff = setup_staff(client, db_session, StaffGroup.TEAM_A)
    assert _upload(client, staff["token"], HEADER).status_code == 403


def test_parse_address():
    assert parse_address("123 Main St, Frisco, TX 75034") == {
        "address": "123 Main St",
        "city": "Frisco",
        "state": "TX",
        "zip_code": "75034",
    }
    assert parse_address("Apt 1, 123 Main St, Frisco, tx 75034-1234") == {
        "address": "Apt 1, 123 Main St",
        "city": "Frisco",
        "state": "TX",
        "zip_code": "75034-1234",
    }
    assert parse_address("Somewhere")["address"] == "Somewhere"
    assert parse_address("1 A St, Town, Texas")["city"] == ""
