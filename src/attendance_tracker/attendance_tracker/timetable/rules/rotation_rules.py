from __future__ import annotations

from typing import Optional

from ..model import RotationConfig
from .base import ResolveContext, SubjectRule

CLINICS_MARKER = "CLINICS"
SGL_MARKER = "SMALL GROUP LEARNING"


class ClinicalPostingRule(SubjectRule):
    """CLINICS cells resolve to the department the caller's group is posted to on that date."""

    def __init__(self, rotations: RotationConfig):
        self._rotations = rotations

    def apply(self, ctx: ResolveContext) -> Optional[str]:
        if CLINICS_MARKER not in ctx.topic:
            return None

        period = self._rotations.clinical_period_for(ctx.class_date)
        department = period.department_for(ctx.group) if period else None
        return f"{department} CLINIC" if department else CLINICS_MARKER


class SmallGroupLearningRule(SubjectRule):
    """SGL cells resolve by assessment period and weekday to the caller's subject."""

    def __init__(self, rotations: RotationConfig):
        self._rotations = rotations

    def apply(self, ctx: ResolveContext) -> Optional[str]:
        if SGL_MARKER not in ctx.topic:
            return None

        for subject, group in self._rotations.sgl_day_schedule(ctx.class_date, ctx.weekday).items():
            if group == ctx.group:
                return f"{subject} (SGL)"
        return SGL_MARKER
