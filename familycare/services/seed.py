"""
services/seed.py

초기 샘플 데이터 생성.

서버 시작 시 활성 스태프가 한 명도 없으면
그룹별 샘플 스태프 계정 4개를 만든다. (SEED_SAMPLE_STAFF=true 인 경우)

"""

import logging

from sqlalchemy.orm import Session

from familycare.models.staff import StaffGroup
from familycare.services.staff import create_staff, get_staff_by_nickname, list_active_staff

logger = logging.getLogger(__name__)

# (이름, 닉네임, PIN, 그룹)
SAMPLE_STAFF = [
    ("John Admin", "John", "1234", StaffGroup.ADM),
    ("Sarah Manager", "Sarah", "2345", StaffGroup.MGM),
    ("Mike Team A", "Mike", "3456", StaffGroup.TEAM_A),
    ("Lisa Team B", "Lisa", "4567", StaffGroup.TEAM_B),
]


def seed_sample_staff(db: Session) -> bool:
    """샘플 계정을 만들었으면 True (commit 은 호출 측)"""
    if list_active_staff(db):
        return False

    created = 0
    for order, (full_name, nick_name, pin, group) in enumerate(SAMPLE_STAFF, start=1):
        # 비활성화된 같은 닉네임 계정이 남아 있으면 건너뜀
        if get_staff_by_nickname(db, nick_name):
            continue
        create_staff(
            db,
            full_name=full_name,
            nick_name=nick_name,
            pin=pin,
            group=group,
            display_order=order,
        )
        created += 1

    logger.info("sample staff data initialized (%d accounts)", created)
    return True
