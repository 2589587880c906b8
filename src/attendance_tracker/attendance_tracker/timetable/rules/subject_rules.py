from __future__ import annotations

import re
import string
from typing import Optional

from .base import ResolveContext, SubjectRule

GENERIC_ACTIVITY = "Class/Activity"

_TOKEN_SPLIT = re.compile(r"[.\s:]+")


def tokens(topic: str) -> list[str]:
    return [t for t in _TOKEN_SPLIT.split(topic) if t]


class SubjectCodeRule(SubjectRule):
    """Map subject codes and full names to canonical subject names.

    Tried in order: first token, first two tokens, then substring containment.
    """

    CODES = {
        "IM": "Internal Medicine",
        "MI": "Microbiology",
        "PH": "Pharmacology",
        "PA": "Pathology",
        "SU": "Surgery",
        "FM": "Forensic Medicine",
        "OG": "Obstetrics & Gynecology",
        "CM": "Community Medicine",
        "OBG": "Obstetrics & Gynecology",
        "PATHOLOGY": "Pathology",
        "PHARMACOLOGY": "Pharmacology",
        "MICROBIOLOGY": "Microbiology",
        "GENERAL MEDICINE": "Internal Medicine",
        "GENERAL SURGERY": "Surgery",
        "COMMUNITY MEDICINE": "Community Medicine",
    }

    CONTAINS = (
        ("pathology", "Pathology"),
        ("pharmacology", "Pharmacology"),
        ("microbiology", "Microbiology"),
        ("internal medicine", "Internal Medicine"),
        ("surgery", "Surgery"),
        ("forensic medicine", "Forensic Medicine"),
        ("obstetrics", "Obstetrics & Gynecology"),
        ("gynaecology", "Obstetrics & Gynecology"),
        ("gynecology", "Obstetrics & Gynecology"),
        ("community medicine", "Community Medicine"),
    )

    def apply(self, ctx: ResolveContext) -> Optional[str]:
        parts = [t.upper() for t in tokens(ctx.topic)]
        if parts:
            if parts[0] in self.CODES:
                return self.CODES[parts[0]]
            if len(parts) > 1 and f"{parts[0]} {parts[1]}" in self.CODES:
                return self.CODES[f"{parts[0]} {parts[1]}"]

        lowered = ctx.topic.lower()
        for needle, subject in self.CONTAINS:
            if needle in lowered:
                return subject
        return None


class FallbackRule(SubjectRule):
    """Last resort: the first token without digits or trailing punctuation."""

    def apply(self, ctx: ResolveContext) -> Optional[str]:
        parts = tokens(ctx.topic)
        if parts:
            label = re.sub(r"\d", "", parts[0]).rstrip(string.punctuation)
            if label:
                return label
        return GENERIC_ACTIVITY
