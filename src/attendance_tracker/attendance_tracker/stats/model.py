from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SubjectStat:
    """Per-subject counters derived from a user's attendance records (request scoped, never stored)."""

    subject: str
    total_classes: int = 0
    attended_classes: int = 0
    cancelled_classes: int = 0

    @property
    def held_classes(self) -> int:
        """Classes that actually took place: cancellations are not held."""
        return self.total_classes - self.cancelled_classes

    def to_dict(self) -> dict:
        return {
            "subject": self.subject,
            "totalClasses": self.total_classes,
            "attendedClasses": self.attended_classes,
            "cancelledClasses": self.cancelled_classes,
        }


@dataclass(frozen=True)
class StatsReport:
    rows: list[dict]
    overall: dict
    total_records: int
