from __future__ import annotations

from typing import Optional

from .base import ResolveContext, SubjectRule

NOT_AVAILABLE = "N/A"
HOLIDAY_MARKER = "HOLIDAY"


class EmptyOrHolidayRule(SubjectRule):
    """Empty cells become N/A; holiday cells are shown verbatim."""

    def apply(self, ctx: ResolveContext) -> Optional[str]:
        if not ctx.topic.strip():
            return NOT_AVAILABLE
        if HOLIDAY_MARKER in ctx.topic:
            return ctx.topic
        return None


class SpecialActivityRule(SubjectRule):
    """Group-independent activities with fixed display names."""

    ACTIVITIES = (
        ("FAMILY ADOPTION PROGRAMME", "FAMILY ADOPTION PROGRAMME"),
        ("SDL", "Self-Directed Learning (SDL)"),
        ("AETCOM", "AETCOM"),
    )

    def apply(self, ctx: ResolveContext) -> Optional[str]:
        for marker, display in self.ACTIVITIES:
            if marker in ctx.topic:
                return display
        return None
