"""

스태프 계정 관리(ADM 전용) 통합 테스트.
- 계정 생성(닉네임 중복 / PIN 형식 검증), 수정, 비활성화(본인 금지),
  그룹 권한(403), 로그인 기록 조회(limit)까지 검증한다.

"""

from familycare.models.staff import StaffGroup
from tests.helpers import auth_header, create_staff_in_db, login, setup_staff


def test_admin_creates_and_updates_staff(client, db_session):
    admin = setup_staff(client, db_session, StaffGroup.ADM)
    headers = auth_header(admin["token"])

    created = client.post(
        "/api/staff/manage",
        headers=headers,
        json={"fullName": "Mike Team A", "nickName": "Mike", "pin": "3456", "group": "TEAM-A"},
    )
    assert created.status_code == 201, created.text
    body = created.json()
    assert body["nickName"] == "Mike"
    assert body["group"] == "TEAM-A"
    assert body["isActive"] is True
    assert "pinHash" not in body and "pin" not in body

    # 새 계정으로 로그인 가능
    login(client, "Mike", "3456")

    dup = client.post(
        "/api/staff/manage",
        headers=headers,
        json={"fullName": "Other", "nickName": "Mike", "pin": "1111", "group": "TEAM-B"},
    )
    assert dup.status_code == 400
    assert dup.json()["detail"] == "Nickname already in use"

    bad_pin = client.post(
        "/api/staff/manage",
        headers=headers,
        json={"fullName": "Other", "nickName": "Other", "pin": "12345", "group": "TEAM-B"},
    )
    assert bad_pin.status_code == 400
    assert bad_pin.json()["detail"] == "PIN must be exactly 4 digits"

    updated = client.put(
        f"/api/staff/manage/{body['id']}",
        headers=headers,
        json={"group": "MGM", "displayOrder": 3, "pin": "7777"},
    )
    assert updated.status_code == 200, updated.text
    assert updated.json()["group"] == "MGM"
    assert updated.json()["displayOrder"] == 3
    login(client, "Mike", "7777")


def test_non_admin_cannot_manage_staff(client, db_session):
    manager = setup_staff(client, db_session, StaffGroup.MGM)
    headers = auth_header(manager["token"])

    assert client.get("/api/staff/manage", headers=headers).status_code == 403
    res = client.post(
        "/api/staff/manage",
        headers=headers,
        json={"fullName": "X", "nickName": "X", "pin": "1111", "group": "ADM"},
    )
    assert res.status_code == 403

    # 활성 스태프 목록은 누구나 조회 가능
    listed = client.get("/api/staff", headers=headers)
    assert listed.status_code == 200
    assert [s["nickName"] for s in listed.json()] == [manager["nick_name"]]


def test_deactivate_staff(client, db_session):
    admin = setup_staff(client, db_session, StaffGroup.ADM)
    headers = auth_header(admin["token"])
    target = create_staff_in_db(db_session, nick_name="Lisa", group=StaffGroup.TEAM_B)

    self_delete = client.delete(f"/api/staff/manage/{admin['staff_id']}", headers=headers)
    assert self_delete.status_code == 400
    assert self_delete.json()["detail"] == "Cannot deactivate yourself"

    res = client.delete(f"/api/staff/manage/{target.id}", headers=headers)
    assert res.status_code == 200, res.text
    assert res.json()["message"] == "Staff deactivated"

    active = client.get("/api/staff", headers=headers).json()
    assert "Lisa" not in [s["nickName"] for s in active]

    # 관리 목록에는 비활성 계정도 포함
    managed = {s["nickName"]: s for s in client.get("/api/staff/manage", headers=headers).json()}
    assert managed["Lisa"]["isActive"] is False

    assert client.delete(
        "/api/staff/manage/00000000-0000-0000-0000-000000000000", headers=headers
    ).status_code == 404


def test_login_logs(client, db_session):
    admin = setup_staff(client, db_session, StaffGroup.ADM)
    headers = auth_header(admin["token"])
    target = create_staff_in_db(db_session, nick_name="Sarah", pin="2345", group=StaffGroup.MGM)

    assert client.post("/api/auth/login", json={"nickname": "Sarah", "pin": "0000"}).status_code == 401
    login(client, "Sarah", "2345")

    res = client.get(f"/api/staff/{target.id}/login-logs", headers=headers)
    assert res.status_code == 200, res.text
    logs = res.json()
    assert len(logs) == 2
    assert {log["success"] for log in logs} == {True, False}
    assert {log["failureReason"] for log in logs} == {None, "Invalid PIN"}

    limited = client.get(f"/api/staff/{target.id}/login-logs?limit=1", headers=headers)
    assert len(limited.json()) == 1
