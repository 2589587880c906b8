from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import now_local, parse_class_date
from ..core.constants import MARKING_OPENS_AT_HOUR
from ..core.enums import AttendanceStatus, Group, SubmissionState, TimeSlot
from .model import DayRecord, TimetableSession
from .resolver import SubjectResolver, is_markable


@dataclass(frozen=True)
class SessionView:
    session: TimetableSession
    status: str
    can_mark: bool

    def to_dict(self) -> dict:
        s = self.session
        return {
            "uniqueId": s.unique_id,
            "date": s.date,
            "day": s.day,
            "timeSlot": s.time_slot,
            "timeSlotKey": s.time_slot_key,
            "subject": s.subject,
            "topic": s.topic,
            "status": self.status,
            "canMark": self.can_mark,
        }


def submission_state(class_date: str, existing: Optional[AttendanceStatus], now: datetime) -> tuple[str, bool]:
    """(status label, can mark) for one session as seen at `now`."""
    if existing is not None:
        return existing.value, True

    day = parse_class_date(class_date)
    today = now.date()
    if day > today:
        return SubmissionState.FUTURE.value, False
    if day == today and now.hour < MARKING_OPENS_AT_HOUR:
        return SubmissionState.NOT_YET_OPEN.value, False
    return SubmissionState.PENDING.value, True


class TimetableService:
    """Personalized timetable views shared by the schedule grid and attendance marking."""

    def __init__(self, days: Sequence[DayRecord], resolver: SubjectResolver):
        self._days = list(days)
        self._resolver = resolver

    def _resolve(self, day: DayRecord, slot: TimeSlot, group: Group) -> str:
        return self._resolver.resolve_subject(day.topic(slot), day.date, day.day, group.value)

    def personalized_timetable(self, group: object) -> list[dict]:
        g = Group.coerce(group)
        out: list[dict] = []
        for day in self._days:
            out.append(
                {
                    "date": day.date,
                    "day": day.day,
                    "slots": {
                        slot.value: {
                            "timeSlot": slot.label,
                            "topic": day.topic(slot),
                            "subject": self._resolve(day, slot, g),
                        }
                        for slot in TimeSlot
                    },
                }
            )
        return out

    def sessions(self, group: object) -> list[TimetableSession]:
        """Flat list of sessions that resolve to something the student can attend."""
        g = Group.coerce(group)
        out: list[TimetableSession] = []
        for day in self._days:
            for slot in TimeSlot:
                subject = self._resolve(day, slot, g)
                if not is_markable(subject):
                    continue
                out.append(
                    TimetableSession(
                        date=day.date,
                        day=day.day,
                        time_slot_key=slot.value,
                        time_slot=slot.label,
                        subject=subject,
                        topic=day.topic(slot),
                    )
                )
        return out

    def markable_sessions(
        self,
        group: object,
        statuses: Mapping[str, AttendanceStatus],
        *,
        now: Optional[datetime] = None,
    ) -> list[SessionView]:
        now = now or now_local()
        views = []
        for s in self.sessions(group):
            label, can_mark = submission_state(s.date, statuses.get(s.unique_id), now)
            views.append(SessionView(session=s, status=label, can_mark=can_mark))
        return views
