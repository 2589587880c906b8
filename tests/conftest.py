from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceRecord
from src.attendance_tracker.attendance_tracker.container import wire_services
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus, Group
from src.attendance_tracker.attendance_tracker.core.exceptions import ConflictError
from src.attendance_tracker.attendance_tracker.timetable.loader import parse_rotations, parse_timetable
from src.attendance_tracker.attendance_tracker.users.model import User

ROTATIONS = {
    "clinical_postings": {
        "01/11/2025 TO 20/11/2025": {"MEDICINE": "A", "SURGERY": "B", "OBG": "C"},
        "21/11/2025 TO 10/12/2025": {"MEDICINE": "C", "SURGERY": "A", "OBG": "B"},
        "11/12/2025 TO 31/12/2025": {"MEDICINE": "B", "SURGERY": "C", "OBG": "A"},
        "01/01/2026 TO 31/01/2026": {"MEDICINE": "A", "SURGERY": "B", "OBG": "C"},
    },
    "sgl_schedules": {
        "before_first_assessment": {
            "MONDAY": {"Pathology": "A", "Pharmacology": "C", "Microbiology": "B"},
            "TUESDAY": {"Pathology": "B", "Pharmacology": "A", "Microbiology": "C"},
            "WEDNESDAY": {"Pathology": "C", "Pharmacology": "B", "Microbiology": "A"},
        },
        "first_to_second_assessment": {
            "MONDAY": {"Pathology": "B", "Pharmacology": "A", "Microbiology": "C"},
        },
        "second_to_third_assessment": {
            "THURSDAY": {"Pathology": "C", "Pharmacology": "B", "Microbiology": "A"},
        },
    },
    "assessment_dates": {"first": "12-01-2026", "second": "22-01-2026", "third": None},
}

TIMETABLE = {
    "timetable": [
        {
            "date": "24-11-2025",
            "day": "MONDAY",
            "time_8_9_AM": "PA 4.2 Inflammation",
            "time_9_AM_12_Noon": "CLINICS",
            "time_1_2_PM": "",
            "time_2_4_PM": "SMALL GROUP LEARNING",
        },
        {
            "date": "25-11-2025",
            "day": "TUESDAY",
            "time_8_9_AM": "HOLIDAY",
            "time_9_AM_12_Noon": "HOLIDAY",
            "time_1_2_PM": "HOLIDAY",
            "time_2_4_PM": "HOLIDAY",
        },
        {
            "date": "22-01-2026",
            "day": "THURSDAY",
            "time_8_9_AM": "SDL",
            "time_9_AM_12_Noon": "CLINICS",
            "time_1_2_PM": "PH 3.4 Antihypertensives",
            "time_2_4_PM": "SMALL GROUP LEARNING",
        },
        {
            "date": "23-01-2026",
            "day": "FRIDAY",
            "time_8_9_AM": "SU 4.2 Burns",
            "time_9_AM_12_Noon": "",
            "time_1_2_PM": "",
            "time_2_4_PM": "",
        },
    ]
}


class InMemoryUsers:
    def __init__(self):
        self._by_id: dict[int, User] = {}
        self._next_id = 1

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        for u in self._by_id.values():
            if u.email == email:
                return u
        return None

    def create_user(self, *, name: str, email: str, password_hash: str) -> int:
        if self.get_by_email(email):
            raise ConflictError("User already exists")
        uid = self._next_id
        self._next_id += 1
        self._by_id[uid] = User(
            user_id=uid,
            name=name,
            email=email,
            password_hash=password_hash,
            created_at=datetime(2025, 11, 1, 9, 0, 0),
        )
        return uid

    def update_group(self, user_id: int, group: Group) -> bool:
        user = self._by_id.get(user_id)
        if not user:
            return False
        self._by_id[user_id] = replace(user, group=group)
        return True

    def count_all(self) -> int:
        return len(self._by_id)


class InMemoryAttendance:
    def __init__(self):
        self._by_key: dict[tuple[int, date, str], AttendanceRecord] = {}
        self._next_id = 1

    def upsert(self, *, user_id, class_date, time_slot_key, time_slot, subject, status):
        key = (user_id, class_date, time_slot_key)
        existing = self._by_key.get(key)
        if existing:
            record = replace(existing, time_slot=time_slot, subject=subject, status=status)
        else:
            record = AttendanceRecord(
                attendance_id=self._next_id,
                user_id=user_id,
                class_date=class_date,
                time_slot_key=time_slot_key,
                time_slot=time_slot,
                subject=subject,
                status=status,
            )
            self._next_id += 1
        self._by_key[key] = record
        return record

    def list_for_user(self, user_id):
        items = [r for r in self._by_key.values() if r.user_id == user_id]
        items.sort(key=lambda r: (r.class_date, r.time_slot_key))
        return items

    def delete_for_slot(self, *, user_id, class_date, time_slot_key) -> bool:
        return self._by_key.pop((user_id, class_date, time_slot_key), None) is not None

    def count_all(self) -> int:
        return len(self._by_key)


@pytest.fixture()
def make_record():
    def _make(subject, status: AttendanceStatus, *, day: int = 1, slot: str = "time_8_9_AM", user_id: int = 1):
        return AttendanceRecord(
            attendance_id=day,
            user_id=user_id,
            class_date=date(2025, 11, day),
            time_slot_key=slot,
            time_slot="8-9 AM",
            subject=subject,
            status=status,
        )

    return _make


@pytest.fixture()
def rotations():
    return parse_rotations(ROTATIONS)


@pytest.fixture()
def rotations_raw():
    return ROTATIONS


@pytest.fixture()
def timetable_days():
    return parse_timetable(TIMETABLE)


@pytest.fixture()
def fixed_now():
    return datetime(2026, 1, 22, 17, 0, 0)


@pytest.fixture()
def users_repo():
    return InMemoryUsers()


@pytest.fixture()
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture()
def container(users_repo, attendance_repo, timetable_days, rotations):
    return wire_services(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        secret_key="test-secret",
        days=timetable_days,
        rotations=rotations,
    )


@pytest.fixture()
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.attendance_tracker.attendance_tracker.main import create_app

    app = create_app(container)
    return app.test_client()
