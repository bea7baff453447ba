"""
utils.py

도메인 공통 유틸리티 함수 모음.

전화번호 포맷, 자녀 학년 -> 학년 그룹 변환,
가정 이름 / 전체 주소 생성, 주일(일요일) 날짜 계산 등
여러 서비스에서 함께 쓰는 순수 함수만 둔다.

"""

import re
from datetime import date, datetime, timedelta, timezone

_NON_DIGIT_RE = re.compile(r"\D")


# (XXX) XXX-XXXX 형식, 자리수가 모자라면 입력된 만큼만 포맷
def format_phone_number(value: str | None) -> str:
    digits = clean_phone_number(value)
    if len(digits) >= 10:
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:10]}"
    if len(digits) >= 6:
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
    if len(digits) >= 3:
        return f"({digits[:3]}) {digits[3:]}"
    return digits


def clean_phone_number(value: str | None) -> str:
    return _NON_DIGIT_RE.sub("", value or "")


"""
학년 그룹

- B          : Sprouts
- Pre-K      : Dream Kid
- 1 ~ 5      : Team Kid
- 6 ~ 8      : Youth(Middle)
- 9 ~ 12     : Youth(High)

"""

GRADE_GROUPS = {
    "B": "Sprouts",
    "Pre-K": "Dream Kid",
    **{str(g): "Team Kid" for g in range(1, 6)},
    **{str(g): "Youth(Middle)" for g in range(6, 9)},
    **{str(g): "Youth(High)" for g in range(9, 13)},
}


def grade_group_for(grade_level: str | None) -> str:
    return GRADE_GROUPS.get((grade_level or "").strip(), "")


def generate_family_name(husband_korean_name: str | None, wife_korean_name: str | None) -> str:
    husband = (husband_korean_name or "").strip()
    wife = (wife_korean_name or "").strip()
    if husband and wife:
        return f"{husband}・{wife}"
    return husband or wife


def generate_full_address(address: str | None, city: str | None, state: str | None, zip_code: str | None) -> str:
    return ", ".join(p for p in (address, city, state, zip_code) if p)


def is_sunday(d: date) -> bool:
    # date.weekday(): 월=0 ... 일=6
    return d.weekday() == 6


def next_sunday(d: date | None = None) -> date:
    """d가 일요일이면 그대로, 아니면 다음 일요일"""
    d = d or date.today()
    return d + timedelta(days=(6 - d.weekday()) % 7)


def previous_sunday(d: date | None = None) -> date:
    """d가 일요일이면 그대로, 아니면 직전 일요일"""
    d = d or date.today()
    return d - timedelta(days=(d.weekday() + 1) % 7)


def as_utc(v: datetime | None) -> datetime | None:
    # 타임존 없는 값(SQLite 조회 결과 포함)은 UTC 로 간주
    if v is None:
        return None
    if v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v.astimezone(timezone.utc)
