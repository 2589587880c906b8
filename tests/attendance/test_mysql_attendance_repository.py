from __future__ import annotations

from datetime import date

from src.attendance_tracker.attendance_tracker.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus


class RecordingCursor:
    def __init__(self, row):
        self.statements: list[tuple[str, tuple]] = []
        self._row = row

    def execute(self, sql, params=()):
        self.statements.append((" ".join(sql.split()), params))

    def fetchone(self):
        return self._row

    def close(self):
        pass


class RecordingConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        pass

    def close(self):
        pass


class RecordingFactory:
    def __init__(self, row):
        self.cursor = RecordingCursor(row)
        self.connection = RecordingConnection(self.cursor)

    def connect(self, *, with_database=True):
        return self.connection


def test_upsert_uses_row_alias_and_reads_back_by_unique_key():
    row = {
        "attendance_id": 7,
        "user_id": 1,
        "class_date": date(2025, 11, 24),
        "time_slot_key": "time_8_9_AM",
        "time_slot": "8-9 AM",
        "subject": "Pathology",
        "status": "Absent",
        "created_at": None,
        "updated_at": None,
    }
    factory = RecordingFactory(row)
    repo = MySQLAttendanceRepository(factory)

    record = repo.upsert(
        user_id=1,
        class_date=date(2025, 11, 24),
        time_slot_key="time_8_9_AM",
        time_slot="8-9 AM",
        subject="Pathology",
        status=AttendanceStatus.ABSENT,
    )

    insert_sql, insert_params = factory.cursor.statements[0]
    assert "AS new ON DUPLICATE KEY UPDATE" in insert_sql
    assert "status=new.status" in insert_sql
    assert "VALUES(status)" not in insert_sql
    assert insert_params[-1] == "Absent"

    select_sql, select_params = factory.cursor.statements[1]
    assert "WHERE user_id=%s AND class_date=%s AND time_slot_key=%s" in select_sql
    assert select_params == (1, date(2025, 11, 24), "time_8_9_AM")

    assert factory.connection.committed
    assert record.attendance_id == 7
    assert record.status == AttendanceStatus.ABSENT
