"""

가정 / 가족 구성원 통합 테스트.
- 가정 + 구성원 생성(가정 이름 / 코드 / 주소 / 학년 그룹 자동 생성),
  검색 필터, 부분 수정과 구성원 교체, 팀 재배정(일반 스태프 허용),
  빠른 구성원 등록, 삭제 시 연관 데이터 정리, 심방 기록 CRUD 까지 검증한다.

"""

import uuid
from datetime import date

from sqlalchemy import func, select

from familycare.models.care_log import CareLog
from familycare.models.family import FamilyMember
from familycare.models.staff import StaffGroup
from tests.helpers import (
    auth_header,
    create_family_via_api,
    create_team_via_api,
    get_family,
    setup_staff,
)


def test_create_family_generates_derived_fields(client, db_session):
    manager = setup_staff(client, db_session, StaffGroup.MGM)

    family = create_family_via_api(
        client,
        manager["token"],
        members=[
            {"koreanName": "김철수", "relationship": "husband", "courses": ["101"]},
            {"koreanName": "이영희", "relationship": "wife", "birthDate": ""},
            {"koreanName": "김하늘", "relationship": "child", "gradeLevel": "3"},
            {"koreanName": "김바다", "relationship": "child", "gradeLevel": "Pre-K"},
        ],
    )

    assert family["familyCode"] == "FM0001"
    assert family["familyName"] == "김철수・이영희"
    assert family["memberStatus"] == "visit"
    assert family["phoneNumber"] == "2145551234"
    assert family["fullAddress"] == "123 Main St, Frisco, TX, 75034"

    # 방문일을 비우면 가장 최근 주일
    visited = date.fromisoformat(family["visitedDate"])
    assert visited.weekday() == 6
    assert visited <= date.today()

    members = family["members"]
    assert [m["koreanName"] for m in members] == ["김철수", "이영희", "김하늘", "김바다"]
    assert [m["displayOrder"] for m in members] == [0, 1, 2, 3]
    assert members[0]["courses"] == ["101"]
    assert members[1]["birthDate"] is None
    assert members[2]["gradeGroup"] == "Team Kid"
    assert members[3]["gradeGroup"] == "Dream Kid"

    second = create_family_via_api(
        client,
        manager["token"],
        familyName="박가정",
        members=[{"koreanName": "박민수", "relationship": "husband"}],
    )
    assert second["familyCode"] == "FM0002"
    assert second["familyName"] == "박가정"


def test_create_family_permissions_and_validation(client, db_session):
    staff = setup_staff(client, db_session, StaffGroup.TEAM_A)
    manager = setup_staff(client, db_session, StaffGroup.MGM)

    forbidden = client.post(
        "/api/families",
        headers=auth_header(staff["token"]),
        json={"familyName": "X", "members": []},
    )
    assert forbidden.status_code == 403

    no_name = client.post(
        "/api/families",
        headers=auth_header(manager["token"]),
        json={"members": [{"koreanName": "김하늘", "relationship": "child"}]},
    )
    assert no_name.status_code == 400

    bad_team = client.post(
        "/api/families",
        headers=auth_header(manager["token"]),
        json={"familyName": "X", "teamId": str(uuid.uuid4())},
    )
    assert bad_team.status_code == 400
    assert bad_team.json()["detail"] == "Team not found"

    bad_relationship = client.post(
        "/api/families",
        headers=auth_header(manager["token"]),
        json={"familyName": "X", "members": [{"koreanName": "A", "relationship": "cousin"}]},
    )
    assert bad_relationship.status_code == 422


def test_search_families(client, db_session):
    manager = setup_staff(client, db_session, StaffGroup.MGM)
    token = manager["token"]
    ids = create_team_via_api(client, token)

    kim = create_family_via_api(
        client,
        token,
        visitedDate="2026-01-04",
        memberStatus="member",
        lifeGroup="Frisco 목장",
        teamId=ids["team_id"],
        members=[{"koreanName": "김철수", "relationship": "husband", "courses": ["101", "201"]}],
    )
    park = create_family_via_api(
        client,
        token,
        visitedDate="2026-02-01",
        memberStatus="visit",
        members=[{"koreanName": "박민수", "relationship": "husband"}],
    )
    headers = auth_header(token)

    def search(**params):
        res = client.get("/api/families", headers=headers, params=params)
        assert res.status_code == 200, res.text
        return [f["id"] for f in res.json()]

    # 방문일 최신순
    assert search() == [park["id"], kim["id"]]
    assert search(name="철수") == [kim["id"]]
    assert search(memberStatus="member") == [kim["id"]]
    assert search(memberStatus="member,visit") == [park["id"], kim["id"]]
    assert search(memberStatus="all") == [park["id"], kim["id"]]
    assert search(lifeGroup="frisco") == [kim["id"]]
    assert search(dateFrom="2026-01-15") == [park["id"]]
    assert search(dateTo="2026-01-15") == [kim["id"]]
    assert search(teamId=ids["team_id"]) == [kim["id"]]
    assert search(unassigned="true") == [park["id"]]
    assert search(courses="201") == [kim["id"]]
    assert search(courses="301") == []


def test_update_family_and_members(client, db_session):
    manager = setup_staff(client, db_session, StaffGroup.MGM)
    family = create_family_via_api(client, manager["token"])
    headers = auth_header(manager["token"])
    old_member_ids = {m["id"] for m in family["members"]}

    # members 없이 보내면 구성원 유지
    res = client.put(
        f"/api/families/{family['id']}",
        headers=headers,
        json={"familyNotes": "새가족반 수료", "city": "Plano", "phoneNumber": "972-555-0000"},
    )
    assert res.status_code == 200, res.text
    body = res.json()
    assert body["familyNotes"] == "새가족반 수료"
    assert body["phoneNumber"] == "9725550000"
    assert body["fullAddress"] == "123 Main St, Plano, TX, 75034"
    assert {m["id"] for m in body["members"]} == old_member_ids

    # members 를 보내면 전체 교체
    res = client.put(
        f"/api/families/{family['id']}",
        headers=headers,
        json={"members": [{"koreanName": "김철수", "relationship": "husband"}]},
    )
    assert res.status_code == 200, res.text
    members = res.json()["members"]
    assert len(members) == 1
    assert members[0]["id"] not in old_member_ids

    member_count = db_session.scalar(
        select(func.count()).select_from(FamilyMember).where(FamilyMember.family_id == uuid.UUID(family["id"]))
    )
    assert member_count == 1

    members_res = client.get(f"/api/families/{family['id']}/members", headers=headers)
    assert members_res.status_code == 200
    assert [m["koreanName"] for m in members_res.json()] == ["김철수"]


def test_team_staff_can_reassign_team(client, db_session):
    manager = setup_staff(client, db_session, StaffGroup.MGM)
    staff = setup_staff(client, db_session, StaffGroup.TEAM_B)
    ids = create_team_via_api(client, manager["token"])
    family = create_family_via_api(client, manager["token"])
    headers = auth_header(staff["token"])

    assigned = client.put(f"/api/families/{family['id']}", headers=headers, json={"teamId": ids["team_id"]})
    assert assigned.status_code == 200, assigned.text
    assert assigned.json()["teamId"] == ids["team_id"]

    missing = client.put(f"/api/families/{family['id']}", headers=headers, json={"teamId": str(uuid.uuid4())})
    assert missing.status_code == 400
    assert missing.json()["detail"] == "Team not found"

    cleared = client.put(f"/api/families/{family['id']}", headers=headers, json={"teamId": None})
    assert cleared.status_code == 200
    assert cleared.json()["teamId"] is None

    # 삭제는 ADM / MGM 만
    assert client.delete(f"/api/families/{family['id']}", headers=headers).status_code == 403


def test_quick_member(client, db_session):
    manager = setup_staff(client, db_session, StaffGroup.ADM)
    ids = create_team_via_api(client, manager["token"])

    res = client.post(
        "/api/families/quick-member",
        headers=auth_header(manager["token"]),
        json={"koreanName": "최수진", "memberType": "wife", "teamId": ids["team_id"], "phoneNumber": "469-000-1111"},
    )
    assert res.status_code == 201, res.text
    body = res.json()
    assert body["familyName"] == "최수진"
    assert body["memberStatus"] == "member"
    assert body["teamId"] == ids["team_id"]
    assert body["familyCode"] == "FM0001"
    assert len(body["members"]) == 1
    assert body["members"][0]["relationship"] == "wife"
    assert body["members"][0]["phoneNumber"] == "4690001111"

    bad = client.post(
        "/api/families/quick-member",
        headers=auth_header(manager["token"]),
        json={"koreanName": "최수진", "memberType": "child", "teamId": ids["team_id"]},
    )
    assert bad.status_code == 422


def test_care_logs_and_family_delete(client, db_session):
    manager = setup_staff(client, db_session, StaffGroup.MGM)
    headers = auth_header(manager["token"])
    family = create_family_via_api(client, manager["token"])

    created = client.post(
        "/api/care-logs",
        headers=headers,
        json={"familyId": family["id"], "date": "2026-03-01", "type": "visit", "description": "첫 심방"},
    )
    assert created.status_code == 201, created.text
    log = created.json()
    assert log["staffId"] == manager["staff_id"]
    assert log["staff"]["nickName"] == manager["nick_name"]
    assert log["status"] == "pending"

    client.post(
        "/api/care-logs",
        headers=headers,
        json={"familyId": family["id"], "date": "2026-03-08", "type": "call", "description": "안부 전화"},
    )

    listed = client.get(f"/api/families/{family['id']}/care-logs", headers=headers)
    assert listed.status_code == 200
    assert [c["date"] for c in listed.json()] == ["2026-03-08", "2026-03-01"]

    updated = client.put(f"/api/care-logs/{log['id']}", headers=headers, json={"status": "completed"})
    assert updated.status_code == 200, updated.text
    assert updated.json()["status"] == "completed"

    removed = client.delete(f"/api/care-logs/{log['id']}", headers=headers)
    assert removed.status_code == 200
    assert client.put(f"/api/care-logs/{log['id']}", headers=headers, json={"status": "completed"}).status_code == 404

    unknown_family = client.post(
        "/api/care-logs",
        headers=headers,
        json={"familyId": str(uuid.uuid4()), "date": "2026-03-01", "type": "visit", "description": "x"},
    )
    assert unknown_family.status_code == 400
    assert unknown_family.json()["detail"] == "Family not found"

    # 가정 삭제 시 구성원 / 심방 기록도 함께 삭제
    deleted = client.delete(f"/api/families/{family['id']}", headers=headers)
    assert deleted.status_code == 200, deleted.text
    assert deleted.json()["message"] == "Family deleted"
    assert client.get(f"/api/families/{family['id']}", headers=headers).status_code == 404

    assert get_family(db_session, family["id"]) is None
    assert db_session.scalar(select(func.count()).select_from(CareLog)) == 0
    assert db_session.scalar(select(func.count()).select_from(FamilyMember)) == 0
