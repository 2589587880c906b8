from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
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
        """Insert or overwrite the unique (user, date, slot) record.

        Returns the stored record.
        """

        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def delete_for_slot(self, *, user_id: int, class_date: date, time_slot_key: str) -> bool:
        raise NotImplementedError

    def count_all(self) -> int:
        raise NotImplementedError
