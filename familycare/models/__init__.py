# 모든 모델을 임포트하여 Base.metadata 에 테이블을 등록한다 (create_all / alembic autogenerate 용)
from familycare.models.staff import Staff, StaffGroup, StaffLoginLog
from familycare.models.department import Department, Team
from familycare.models.family import Family, FamilyMember, MemberStatus, Relationship
from familycare.models.care_log import CareLog, CareLogStatus, CareLogType
from familycare.models.donation import Donation, DonationType
from familycare.models.event import AttendanceStatus, Event, EventAttendance
from familycare.models.announcement import Announcement, AnnouncementType

__all__ = [
    "Announcement",
    "AnnouncementType",
    "AttendanceStatus",
    "CareLog",
    "CareLogStatus",
    "CareLogType",
    "Department",
    "Donation",
    "DonationType",
    "Event",
    "EventAttendance",
    "Family",
    "FamilyMember",
    "MemberStatus",
    "Relationship",
    "Staff",
    "StaffGroup",
    "StaffLoginLog",
    "Team",
]
