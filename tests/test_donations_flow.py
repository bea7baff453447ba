"""

헌금 등록 / 조회 / 수정 / 삭제 통합 테스트.
- 금액 검증(0 이하 422), 존재하지 않는 가정(400),
  검색 필터(가정 이름, 유형, 날짜, 처리 플래그)와 meta(건수 / 합계)를 검증한다.

"""

import uuid
from decimal import Decimal

from familycare.models.staff import StaffGroup
from tests.helpers import auth_header, create_family_via_api, setup_staff


def _donate(client, token: str, family_id: str, **overrides) -> dict:
    body = {"familyId": family_id, "amount": "100.00", "date": "2026-03-01"}
    body.update(overrides)
    res = client.post("/api/donations", headers=auth_header(token), json=body)
    assert res.status_code == 201, res.text
    return res.json()


def test_create_and_update_donation(client, db_session):
    staff = setup_staff(client, db_session, StaffGroup.TEAM_A)
    manager = setup_staff(client, db_session, StaffGroup.MGM)
    family = create_family_via_api(client, manager["token"])
    headers = auth_header(staff["token"])

    donation = _donate(client, staff["token"], family["id"], amount="150.25", comment="부활절")
    assert Decimal(donation["amount"]) == Decimal("150.25")
    assert donation["type"] == "Regular"
    assert donation["received"] is False
    assert donation["createdBy"] == staff["staff_id"]
    assert donation["family"]["familyName"] == family["familyName"]
    assert donation["family"]["familyCode"] == family["familyCode"]

    updated = client.put(
        f"/api/donations/{donation['id']}",
        headers=headers,
        json={"received": True, "emailForThank": True, "type": "Special", "comment": None},
    )
    assert updated.status_code == 200, updated.text
    body = updated.json()
    assert body["received"] is True
    assert body["emailForThank"] is True
    assert body["emailForTax"] is False
    assert body["type"] == "Special"
    assert body["comment"] is None
    assert Decimal(body["amount"]) == Decimal("150.25")

    detail = client.get(f"/api/donations/{donation['id']}", headers=headers)
    assert detail.status_code == 200
    assert detail.json()["id"] == donation["id"]

    removed = client.delete(f"/api/donations/{donation['id']}", headers=headers)
    assert removed.status_code == 200
    assert client.get(f"/api/donations/{donation['id']}", headers=headers).status_code == 404


def test_donation_validation(client, db_session):
    manager = setup_staff(client, db_session, StaffGroup.MGM)
    family = create_family_via_api(client, manager["token"])
    headers = auth_header(manager["token"])

    for amount in ("0", "-5.00", "1.234"):
        res = client.post(
            "/api/donations",
            headers=headers,
            json={"familyId": family["id"], "amount": amount, "date": "2026-03-01"},
        )
        assert res.status_code == 422, amount

    res = client.post(
        "/api/donations",
        headers=headers,
        json={"familyId": family["id"], "amount": "10.00", "date": "2026-03-01", "type": "Weekly"},
    )
    assert res.status_code == 422

    res = client.post(
        "/api/donations",
        headers=headers,
        json={"familyId": str(uuid.uuid4()), "amount": "10.00", "date": "2026-03-01"},
    )
    assert res.status_code == 400
    assert res.json()["detail"] == "Family not found"


def test_search_donations_with_meta(client, db_session):
    manager = setup_staff(client, db_session, StaffGroup.MGM)
    token = manager["token"]
    kim = create_family_via_api(client, token)
    park = create_family_via_api(
        client, token, familyName="박가정", members=[{"koreanName": "박민수", "relationship": "husband"}]
    )

    _donate(client, token, kim["id"], amount="100.00", date="2026-03-01", received=True)
    _donate(client, token, kim["id"], amount="50.50", date="2026-03-08", type="Special", emailForTax=True)
    _donate(client, token, park["id"], amount="20.00", date="2026-04-05")

    def search(**params):
        res = client.get("/api/donations", headers=auth_header(token), params=params)
        assert res.status_code == 200, res.text
        return res.json()

    everything = search()
    assert everything["meta"] == {"count": 3, "totalAmount": "170.50"}
    # 날짜 최신순
    assert [d["date"] for d in everything["data"]] == ["2026-04-05", "2026-03-08", "2026-03-01"]

    assert search(familyName="박가")["meta"]["count"] == 1
    assert search(familyId=kim["id"])["meta"] == {"count": 2, "totalAmount": "150.50"}
    assert search(type="Special")["meta"]["count"] == 1
    assert search(type="all")["meta"]["count"] == 3
    assert search(dateFrom="2026-03-02", dateTo="2026-03-31")["meta"]["count"] == 1
    assert search(received="true")["meta"]["count"] == 1
    assert search(received="false")["meta"]["count"] == 2
    assert search(received="all")["meta"]["count"] == 3
    assert search(emailForTax="true")["meta"]["totalAmount"] == "50.50"
    assert search(emailForThank="true")["meta"] == {"count": 0, "totalAmount": "0.00"}

    # 가정 삭제 시 헌금도 함께 삭제
    assert client.delete(f"/api/families/{kim['id']}", headers=auth_header(token)).status_code == 200
    assert search()["meta"]["count"] == 1
