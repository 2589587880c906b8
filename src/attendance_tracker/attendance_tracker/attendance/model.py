from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import format_class_date
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's attendance mark for one class session."""

    attendance_id: int
    user_id: int
    class_date: date
    time_slot_key: str
    time_slot: str
    subject: str
    status: AttendanceStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def session_key(self) -> str:
        """Matches the unique id of a timetable session: "{DD-MM-YYYY}-{slotKey}"."""
        return f"{format_class_date(self.class_date)}-{self.time_slot_key}"

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "userId": self.user_id,
            "classDate": format_class_date(self.class_date),
            "timeSlotKey": self.time_slot_key,
            "timeSlot": self.time_slot,
            "subject": self.subject,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class MarkError:
    record: Any
    error: str

    def to_dict(self) -> dict:
        return {"record": self.record, "error": self.error}


@dataclass
class MarkResult:
    """Per-item outcome of a batch mark: saved records plus rejected items with reasons."""

    saved: list[AttendanceRecord] = field(default_factory=list)
    errors: list[MarkError] = field(default_factory=list)

    @property
    def saved_count(self) -> int:
        return len(self.saved)

    @property
    def error_count(self) -> int:
        return len(self.errors)
