from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, user_id, class_date, time_slot_key, time_slot, subject, status, created_at, updated_at"


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        class_date=r["class_date"],
        time_slot_key=r["time_slot_key"],
        time_slot=r["time_slot"],
        subject=r["subject"],
        status=AttendanceStatus(r["status"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(
        self,
        *,
        user_id: int,
        class_date: date,
        time_slot_key: str,
        time_slot: str,
        subject: str,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(user_id, class_date, time_slot_key, time_slot, subject, status)
                VALUES(%s,%s,%s,%s,%s,%s) AS new
                ON DUPLICATE KEY UPDATE
                    time_slot=new.time_slot,
                    subject=new.subject,
                    status=new.status
                """,
                (int(user_id), class_date, time_slot_key, time_slot, subject, status.value),
            )

            # lastrowid is not reliable for the update branch; read the row back by its unique key.
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND class_date=%s AND time_slot_key=%s
                """,
                (int(user_id), class_date, time_slot_key),
            )
            return _row_to_record(fetchone(cur))

    def list_for_user(self, user_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s
                ORDER BY class_date ASC, time_slot_key ASC
                """,
                (int(user_id),),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def delete_for_slot(self, *, user_id: int, class_date: date, time_slot_key: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_records WHERE user_id=%s AND class_date=%s AND time_slot_key=%s",
                (int(user_id), class_date, time_slot_key),
            )
            return cur.rowcount > 0

    def count_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM attendance_records")
            row = fetchone(cur)
            return int(row["n"]) if row else 0
