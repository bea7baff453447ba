"""

스태프 인증 플로우 통합 테스트.
- 닉네임 + PIN 로그인 성공 / 실패(400, 401) 및 로그인 기록,
  내 정보 조회, 프로필 수정(현재 PIN 확인), 비활성 계정 차단까지 검증한다.

"""

from sqlalchemy import select

from familycare.models.staff import StaffGroup, StaffLoginLog
from tests.helpers import auth_header, create_staff_in_db, login


def test_login_success_returns_token_and_staff(client, db_session):
    staff = create_staff_in_db(db_session, nick_name="John", pin="1234", group=StaffGroup.ADM)

    res = client.post("/api/auth/login", json={"nickname": "John", "pin": "1234"})
    assert res.status_code == 200, res.text
    data = res.json()["data"]
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert data["staff"]["id"] == str(staff.id)
    assert data["staff"]["nickName"] == "John"
    assert data["staff"]["group"] == "ADM"
    assert "pinHash" not in data["staff"]

    me = client.get("/api/auth/me", headers=auth_header(data["access_token"]))
    assert me.status_code == 200, me.text
    assert me.json()["fullName"] == "Test Staff"

    # 성공 기록 + last_login 갱신
    db_session.expire_all()
    logs = db_session.scalars(select(StaffLoginLog).where(StaffLoginLog.staff_id == staff.id)).all()
    assert [log.success for log in logs] == [True]
    db_session.refresh(staff)
    assert staff.last_login is not None


def test_login_requires_nickname_and_pin(client):
    res = client.post("/api/auth/login", json={"nickname": "John"})
    assert res.status_code == 400
    assert res.json()["detail"] == "Nickname and PIN are required"

    res = client.post("/api/auth/login", json={"nickname": "  ", "pin": "1234"})
    assert res.status_code == 400


def test_login_failures_are_401_and_logged(client, db_session):
    staff = create_staff_in_db(db_session, nick_name="Sarah", pin="2345", group=StaffGroup.MGM)

    wrong_pin = client.post("/api/auth/login", json={"nickname": "Sarah", "pin": "0000"})
    assert wrong_pin.status_code == 401
    assert wrong_pin.json()["detail"] == "Invalid credentials"

    unknown = client.post("/api/auth/login", json={"nickname": "Nobody", "pin": "2345"})
    assert unknown.status_code == 401
    assert unknown.json()["detail"] == "Invalid credentials"

    db_session.expire_all()
    logs = db_session.scalars(select(StaffLoginLog).where(StaffLoginLog.staff_id == staff.id)).all()
    assert len(logs) == 1
    assert logs[0].success is False
    assert logs[0].failure_reason == "Invalid PIN"


def test_inactive_staff_cannot_login_and_token_is_revoked(client, db_session):
    staff = create_staff_in_db(db_session, nick_name="Mike", pin="3456", group=StaffGroup.TEAM_A)
    token = login(client, "Mike", "3456")

    staff.is_active = False
    db_session.commit()

    res = client.post("/api/auth/login", json={"nickname": "Mike", "pin": "3456"})
    assert res.status_code == 401

    # 비활성화 이전에 받은 토큰도 더 이상 사용 불가
    me = client.get("/api/auth/me", headers=auth_header(token))
    assert me.status_code == 401
    assert me.json()["detail"] == "Staff not found"


def test_logout(client, db_session):
    create_staff_in_db(db_session, nick_name="Lisa", pin="4567", group=StaffGroup.TEAM_B)
    token = login(client, "Lisa", "4567")

    res = client.post("/api/auth/logout", headers=auth_header(token))
    assert res.status_code == 200
    assert res.json()["message"] == "Logged out"

    assert client.post("/api/auth/logout").status_code == 401


def test_profile_update_requires_current_pin(client, db_session):
    create_staff_in_db(db_session, nick_name="John", pin="1234")
    token = login(client, "John", "1234")

    bad = client.patch(
        "/api/auth/profile",
        headers=auth_header(token),
        json={"currentPin": "9999", "fullName": "Changed"},
    )
    assert bad.status_code == 400
    assert bad.json()["detail"] == "Current PIN is incorrect"

    invalid_pin = client.patch(
        "/api/auth/profile",
        headers=auth_header(token),
        json={"currentPin": "1234", "newPin": "12a4"},
    )
    assert invalid_pin.status_code == 400
    assert invalid_pin.json()["detail"] == "PIN must be exactly 4 digits"

    ok = client.patch(
        "/api/auth/profile",
        headers=auth_header(token),
        json={"currentPin": "1234", "fullName": "John Kim", "email": "john@church.org", "newPin": "5678"},
    )
    assert ok.status_code == 200, ok.text
    body = ok.json()
    assert body["fullName"] == "John Kim"
    assert body["email"] == "john@church.org"
    assert "pinHash" not in body

    # 새 PIN 으로만 로그인 가능
    assert client.post("/api/auth/login", json={"nickname": "John", "pin": "1234"}).status_code == 401
    login(client, "John", "5678")
