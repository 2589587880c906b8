from __future__ import annotations

import logging
import math
from typing import Iterable

from ..attendance.model import AttendanceRecord
from ..core.enums import AttendanceStatus
from .model import SubjectStat

logger = logging.getLogger(__name__)

# UI availability placeholders; never persisted, excluded if one ever shows up.
PLACEHOLDER_STATUSES = frozenset({"Future", "Pending"})


def _status_value(status) -> str:
    return status.value if isinstance(status, AttendanceStatus) else str(status or "")


def compute_subject_stats(records: Iterable[AttendanceRecord]) -> list[SubjectStat]:
    """Group records by subject and count total / attended / cancelled marks.

    Records without a subject are skipped with a warning. Subjects that end up
    with no counted classes are dropped.
    """

    by_subject: dict[str, SubjectStat] = {}

    for record in records:
        if not record.subject:
            logger.warning("Skipping attendance record id=%s with missing subject", record.attendance_id)
            continue

        status = _status_value(record.status)
        if not status or status in PLACEHOLDER_STATUSES:
            continue

        stat = by_subject.get(record.subject)
        if stat is None:
            stat = by_subject[record.subject] = SubjectStat(subject=record.subject)

        stat.total_classes += 1
        if status == AttendanceStatus.PRESENT.value:
            stat.attended_classes += 1
        elif status == AttendanceStatus.CANCELLED.value:
            stat.cancelled_classes += 1

    return [s for s in by_subject.values() if s.total_classes > 0]


def attendance_percentage(stat: SubjectStat) -> int:
    """round(attended / held * 100), half rounded up; 0 when nothing was held."""
    held = stat.held_classes
    if held <= 0:
        return 0
    return int(math.floor(stat.attended_classes * 100 / held + 0.5))
