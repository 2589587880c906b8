"""Validate the timetable and rotation files and print one group's resolved week.

Usage: python scripts/check_timetable.py [GROUP]
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.core.enums import Group
from src.attendance_tracker.attendance_tracker.timetable.loader import load_rotations, load_timetable
from src.attendance_tracker.attendance_tracker.timetable.resolver import SubjectResolver
from src.attendance_tracker.attendance_tracker.timetable.service import TimetableService


def main(argv: list[str]) -> int:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    group = Group.coerce(argv[1].upper() if len(argv) > 1 else None)

    # Raises ConfigurationError on overlapping postings, bad dates and the like.
    days = load_timetable(settings.TIMETABLE_PATH)
    rotations = load_rotations(settings.ROTATIONS_PATH)

    service = TimetableService(days, SubjectResolver(rotations))
    for day in service.personalized_timetable(group):
        cells = " | ".join(f"{cell['timeSlot']}: {cell['subject']}" for cell in day["slots"].values())
        print(f"{day['date']} {day['day']:<9} {cells}")
    print(f"OK: {len(days)} days, {len(rotations.clinical_postings)} clinical periods, group {group.value}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
