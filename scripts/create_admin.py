"""

ADM(관리자) 초기 스태프 계정 생성 스크립트.

- 운영 서버 최초 세팅 시 단 한 번 실행하는 용도
  (운영 환경은 SEED_SAMPLE_STAFF=false 로 샘플 계정을 만들지 않음)
- .env에 정의된 ADMIN_* 환경 변수를 읽어 ADM 그룹 스태프를 생성한다.
- 같은 닉네임의 스태프가 이미 있으면 생성하지 않고 종료한다.

사용 방법
- 가상환경 접속
- (.venv) ~\backend~$ python -m scripts.create_admin

"""

import os
from dotenv import load_dotenv
load_dotenv()

from familycare.db.session import SessionLocal
from familycare.models.staff import StaffGroup
from familycare.services.staff import create_staff, get_staff_by_nickname


def main():
    db = SessionLocal()
    try:
        nick_name = os.environ["ADMIN_NICKNAME"]
        pin = os.environ["ADMIN_PIN"]
        full_name = os.environ.get("ADMIN_FULL_NAME", "Administrator")
        email = os.environ.get("ADMIN_EMAIL") or None

        if get_staff_by_nickname(db, nick_name):
            print(f"✅ Staff '{nick_name}' already exists. Skip creation.")
            return

        create_staff(
            db,
            full_name=full_name,
            nick_name=nick_name,
            pin=pin,
            group=StaffGroup.ADM,
            email=email,
        )
        db.commit()

        print(f"🚀 ADM staff created: {nick_name}")

    finally:
        db.close()


if __name__ == "__main__":
    main()
