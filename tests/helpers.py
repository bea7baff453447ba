# tests/helpers.py
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from familycare.models.family import Family
from familycare.models.staff import Staff, StaffGroup
from familycare.services.staff import create_staff


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_staff_in_db(
    db: Session,
    *,
    nick_name: str | None = None,
    pin: str = "1234",
    group: StaffGroup = StaffGroup.ADM,
    full_name: str = "Test Staff",
) -> Staff:
    staff = create_staff(
        db,
        full_name=full_name,
        nick_name=nick_name or f"staff_{uuid.uuid4().hex[:6]}",
        pin=pin,
        group=group,
    )
    db.commit()
    db.refresh(staff)
    return staff


def login(client, nick_name: str, pin: str) -> str:
    res = client.post("/api/auth/login", json={"nickname": nick_name, "pin": pin})
    assert res.status_code == 200, res.text
    return res.json()["data"]["access_token"]


def setup_staff(client, db: Session, group: StaffGroup = StaffGroup.ADM, pin: str = "1234") -> dict:
    """
    지정한 그룹의 스태프를 만들고 로그인까지 마친 컨텍스트 반환
    """
    staff = create_staff_in_db(db, group=group, pin=pin)
    token = login(client, staff.nick_name, pin)
    return {
        "staff_id": str(staff.id),
        "nick_name": staff.nick_name,
        "pin": pin,
        "token": token,
    }


def create_family_via_api(client, token: str, **overrides) -> dict:
    body = {
        "phoneNumber": "(214) 555-1234",
        "address": "123 Main St",
        "city": "Frisco",
        "state": "TX",
        "zipCode": "75034",
        "members": [
            {"koreanName": "김철수", "englishName": "Chulsoo Kim", "relationship": "husband"},
            {"koreanName": "이영희", "englishName": "Younghee Lee", "relationship": "wife"},
        ],
    }
    body.update(overrides)
    res = client.post("/api/families", headers=auth_header(token), json=body)
    assert res.status_code == 201, res.text
    return res.json()


def create_team_via_api(client, token: str, *, department: str = "장년부", team: str = "1팀") -> dict:
    d = client.post("/api/departments", headers=auth_header(token), json={"name": department})
    assert d.status_code == 201, d.text
    t = client.post(
        "/api/teams",
        headers=auth_header(token),
        json={"departmentId": d.json()["id"], "name": team},
    )
    assert t.status_code == 201, t.text
    return {"department_id": d.json()["id"], "team_id": t.json()["id"]}


def get_family(db: Session, family_id: str) -> Family | None:
    db.expire_all()
    return db.scalar(select(Family).where(Family.id == uuid.UUID(family_id)))
