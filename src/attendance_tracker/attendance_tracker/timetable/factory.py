from __future__ import annotations

from dataclasses import dataclass

from .model import RotationConfig
from .rules.activity_rules import EmptyOrHolidayRule, SpecialActivityRule
from .rules.base import SubjectRule
from .rules.rotation_rules import ClinicalPostingRule, SmallGroupLearningRule
from .rules.subject_rules import FallbackRule, SubjectCodeRule


@dataclass
class SubjectRuleFactory:
    """Factory Pattern: build the ordered rule chain; first match wins."""

    def build(self, rotations: RotationConfig) -> list[SubjectRule]:
        return [
            EmptyOrHolidayRule(),
            ClinicalPostingRule(rotations),
            SmallGroupLearningRule(rotations),
            SpecialActivityRule(),
            SubjectCodeRule(),
            FallbackRule(),
        ]
