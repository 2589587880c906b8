from __future__ import annotations

from enum import Enum


class Group(str, Enum):
    """Student cohort used by the clinical posting and SGL rotations."""

    A = "A"
    B = "B"
    C = "C"

    @classmethod
    def coerce(cls, value: object) -> "Group":
        """Return the matching group, falling back to A for anything unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.A


class AttendanceStatus(str, Enum):
    """Attendance status persisted per class session."""

    PRESENT = "Present"
    ABSENT = "Absent"
    CANCELLED = "Cancelled"


class SubmissionState(str, Enum):
    """Computed availability of a session that has no persisted status yet.

    These values are never stored.
    """

    FUTURE = "Future"
    NOT_YET_OPEN = "Available after 4 PM"
    PENDING = "Pending"


class TimeSlot(str, Enum):
    """The four fixed daily time windows of the timetable."""

    EARLY_MORNING = "time_8_9_AM"
    MORNING = "time_9_AM_12_Noon"
    EARLY_AFTERNOON = "time_1_2_PM"
    AFTERNOON = "time_2_4_PM"

    @property
    def label(self) -> str:
        return _SLOT_LABELS[self]


_SLOT_LABELS = {
    TimeSlot.EARLY_MORNING: "8-9 AM",
    TimeSlot.MORNING: "9 AM-12 Noon",
    TimeSlot.EARLY_AFTERNOON: "1-2 PM",
    TimeSlot.AFTERNOON: "2-4 PM",
}


class SGLPeriod(str, Enum):
    """Small-group-learning period, bounded by assessment dates."""

    BEFORE_FIRST_ASSESSMENT = "before_first_assessment"
    FIRST_TO_SECOND_ASSESSMENT = "first_to_second_assessment"
    SECOND_TO_THIRD_ASSESSMENT = "second_to_third_assessment"
