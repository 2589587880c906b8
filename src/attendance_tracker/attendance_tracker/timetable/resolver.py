from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import try_parse_class_date
from ..core.enums import Group
from .factory import SubjectRuleFactory
from .model import RotationConfig
from .rules.activity_rules import HOLIDAY_MARKER, NOT_AVAILABLE
from .rules.base import ResolveContext, SubjectRule
from .rules.rotation_rules import CLINICS_MARKER, SGL_MARKER
from .rules.subject_rules import GENERIC_ACTIVITY

# Labels meaning "nothing specific for this student"; such cells are not markable.
UNRESOLVED_LABELS = frozenset({NOT_AVAILABLE, CLINICS_MARKER, SGL_MARKER})


def is_markable(subject: str) -> bool:
    return bool(subject) and subject not in UNRESOLVED_LABELS and HOLIDAY_MARKER not in subject


class SubjectResolver:
    """Maps a raw timetable cell to the subject a given group actually attends.

    Pure: the same (topic, date, weekday, group) always yields the same string,
    and no input makes it raise.
    """

    def __init__(self, rotations: RotationConfig, *, rules: Optional[Sequence[SubjectRule]] = None):
        self._rules = list(rules) if rules is not None else SubjectRuleFactory().build(rotations)

    def resolve_subject(self, topic: object, date: object, weekday: object, group: object = None) -> str:
        ctx = ResolveContext(
            topic=topic if isinstance(topic, str) else "",
            class_date=try_parse_class_date(date) if isinstance(date, str) else None,
            weekday=weekday.strip().upper() if isinstance(weekday, str) else "",
            group=Group.coerce(group),
        )
        for rule in self._rules:
            subject = rule.apply(ctx)
            if subject is not None:
                return subject
        return GENERIC_ACTIVITY
