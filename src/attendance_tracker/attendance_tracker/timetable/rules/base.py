from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ...core.enums import Group


@dataclass(frozen=True)
class ResolveContext:
    """Normalized inputs for one timetable cell."""

    topic: str
    class_date: Optional[date]
    weekday: str
    group: Group


class SubjectRule(ABC):
    """Strategy Pattern: one step of subject classification.

    `apply` returns the display subject when the rule matches, otherwise None
    so the next rule in the chain gets a chance.
    """

    @abstractmethod
    def apply(self, ctx: ResolveContext) -> Optional[str]:
        raise NotImplementedError
