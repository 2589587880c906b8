from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Mapping, Optional

from ..core.enums import Group, SGLPeriod, TimeSlot


@dataclass(frozen=True)
class DayRecord:
    """One row of the static academic timetable.

    `slots` maps each TimeSlot to the raw cell text ("" when the cell is empty).
    """

    date: str
    day: str
    slots: Mapping[TimeSlot, str]

    def topic(self, slot: TimeSlot) -> str:
        return self.slots.get(slot, "")


@dataclass(frozen=True)
class ClinicalPostingPeriod:
    """Clinical posting window, inclusive on both ends, with department -> group."""

    start: date
    end: date
    departments: Mapping[str, Group]

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def department_for(self, group: Group) -> Optional[str]:
        for department, assigned in self.departments.items():
            if assigned == group:
                return department
        return None


@dataclass(frozen=True)
class AssessmentDates:
    """Up to three assessment dates splitting the term into SGL periods."""

    first: Optional[date] = None
    second: Optional[date] = None
    third: Optional[date] = None

    def period_for(self, day: Optional[date]) -> SGLPeriod:
        if day is None or self.first is None or day < self.first:
            return SGLPeriod.BEFORE_FIRST_ASSESSMENT
        if self.second is None or day < self.second:
            return SGLPeriod.FIRST_TO_SECOND_ASSESSMENT
        # No fourth bucket: dates on or after the third assessment stay in the last period.
        return SGLPeriod.SECOND_TO_THIRD_ASSESSMENT


@dataclass(frozen=True)
class RotationConfig:
    """Versioned rotation tables for one academic term."""

    clinical_postings: tuple[ClinicalPostingPeriod, ...] = ()
    sgl_schedules: Mapping[SGLPeriod, Mapping[str, Mapping[str, Group]]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    assessment_dates: AssessmentDates = AssessmentDates()

    def clinical_period_for(self, day: Optional[date]) -> Optional[ClinicalPostingPeriod]:
        if day is None:
            return None
        for period in self.clinical_postings:
            if period.contains(day):
                return period
        return None

    def sgl_day_schedule(self, day: Optional[date], weekday: str) -> Mapping[str, Group]:
        period = self.assessment_dates.period_for(day)
        return self.sgl_schedules.get(period, {}).get(weekday.upper(), {})


@dataclass(frozen=True)
class TimetableSession:
    """A single markable class session derived from a DayRecord slot."""

    date: str
    day: str
    time_slot_key: str
    time_slot: str
    subject: str
    topic: str

    @property
    def unique_id(self) -> str:
        return f"{self.date}-{self.time_slot_key}"
