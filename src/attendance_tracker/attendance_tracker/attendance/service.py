from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Sequence

from ..common.datetime_utils import parse_class_date
from ..common.validators import require_max_length
from ..core.constants import (
    SUBJECT_MAX_LENGTH,
    TIME_SLOT_KEY_MAX_LENGTH,
    TIME_SLOT_MAX_LENGTH,
    UNKNOWN_SUBJECT,
    UNKNOWN_TIME_SLOT,
)
from ..core.enums import AttendanceStatus
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from .model import AttendanceRecord, MarkError, MarkResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    @staticmethod
    def _parse_date(value: Any) -> date:
        try:
            return parse_class_date(value)
        except (TypeError, ValueError, AttributeError):
            raise ValidationError("classDate must be in DD-MM-YYYY format")

    @staticmethod
    def _parse_status(value: Any) -> AttendanceStatus:
        try:
            return AttendanceStatus(value)
        except ValueError:
            allowed = ", ".join(s.value for s in AttendanceStatus)
            raise ValidationError(f"Invalid status {value!r}; expected one of {allowed}")

    def upsert_attendance(
        self,
        user_id: int,
        *,
        class_date: Any,
        time_slot_key: Any,
        status: Any,
        time_slot: Any = None,
        subject: Any = None,
    ) -> AttendanceRecord:
        """Insert or overwrite the mark for (user, class_date, time_slot_key).

        Required fields are checked before anything reaches the store.
        """

        if not _text(class_date) or not _text(time_slot_key) or not status:
            raise ValidationError("Missing required fields")

        slot_key = require_max_length(_text(time_slot_key), "timeSlotKey", TIME_SLOT_KEY_MAX_LENGTH)
        slot_label = require_max_length(_text(time_slot) or UNKNOWN_TIME_SLOT, "timeSlot", TIME_SLOT_MAX_LENGTH)
        subject_name = require_max_length(_text(subject) or UNKNOWN_SUBJECT, "subject", SUBJECT_MAX_LENGTH)

        return self._attendance.upsert(
            user_id=int(user_id),
            class_date=self._parse_date(class_date),
            time_slot_key=slot_key,
            time_slot=slot_label,
            subject=subject_name,
            status=self._parse_status(status),
        )

    def mark_batch(self, user_id: int, records: Any) -> MarkResult:
        """Process each submitted record on its own; one failure never aborts the rest."""

        if not isinstance(records, list) or not records:
            raise ValidationError("No attendance records provided.")

        result = MarkResult()
        for item in records:
            try:
                if not isinstance(item, Mapping):
                    raise ValidationError("Record must be an object")
                saved = self.upsert_attendance(
                    user_id,
                    class_date=item.get("classDate"),
                    time_slot_key=item.get("timeSlotKey"),
                    status=item.get("status"),
                    time_slot=item.get("timeSlot"),
                    subject=item.get("subject"),
                )
                result.saved.append(saved)
            except DomainError as e:
                logger.warning("Rejected attendance record for user id=%s: %s", user_id, e)
                result.errors.append(MarkError(record=item, error=str(e)))
            except Exception:
                logger.exception("Failed to store attendance record for user id=%s", user_id)
                result.errors.append(MarkError(record=item, error="Failed to save record"))

        logger.info(
            "Attendance batch for user id=%s: saved=%s errors=%s",
            user_id,
            result.saved_count,
            result.error_count,
        )
        return result

    def list_attendance(self, user_id: int) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_user(int(user_id))

    def status_by_session(self, user_id: int) -> dict[str, AttendanceStatus]:
        """Persisted statuses keyed like timetable sessions ("{date}-{slotKey}")."""
        return {r.session_key: r.status for r in self.list_attendance(user_id)}

    def delete_attendance(self, user_id: int, *, class_date: Any, time_slot_key: Any) -> None:
        if not _text(class_date) or not _text(time_slot_key):
            raise ValidationError("classDate and timeSlotKey are required")

        removed = self._attendance.delete_for_slot(
            user_id=int(user_id),
            class_date=self._parse_date(class_date),
            time_slot_key=_text(time_slot_key),
        )
        if not removed:
            raise NotFoundError("Attendance record not found")

