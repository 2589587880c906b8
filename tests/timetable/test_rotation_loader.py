from __future__ import annotations

import copy
import json
from datetime import date
from pathlib import Path

import pytest

from src.attendance_tracker.attendance_tracker.core.enums import Group, SGLPeriod, TimeSlot
from src.attendance_tracker.attendance_tracker.core.exceptions import ConfigurationError
from src.attendance_tracker.attendance_tracker.timetable.loader import (
    load_rotations,
    load_timetable,
    parse_date_range,
    parse_rotations,
    parse_timetable,
)
from src.attendance_tracker.attendance_tracker.timetable.model import AssessmentDates
from src.attendance_tracker.attendance_tracker.timetable.resolver import SubjectResolver

DATA_DIR = Path(__file__).resolve().parents[2] / "data"

DEPTS = {"MEDICINE": "A", "SURGERY": "B", "OBG": "C"}


def test_parse_date_range():
    assert parse_date_range("01/11/2025 TO 20/11/2025") == (date(2025, 11, 1), date(2025, 11, 20))
    assert parse_date_range(" 1/3/2026 to 31/3/2026 ") == (date(2026, 3, 1), date(2026, 3, 31))


@pytest.mark.parametrize("value", ["01/11/2025 - 20/11/2025", "32/11/2025 TO 01/12/2025", "20/11/2025 TO 01/11/2025", ""])
def test_parse_date_range_rejects_bad_input(value):
    with pytest.raises(ConfigurationError):
        parse_date_range(value)


def test_parse_rotations(rotations_raw):
    config = parse_rotations(copy.deepcopy(rotations_raw))

    assert len(config.clinical_postings) == 4
    first = config.clinical_postings[0]
    assert first.department_for(Group.C) == "OBG"
    assert config.sgl_schedules[SGLPeriod.BEFORE_FIRST_ASSESSMENT]["MONDAY"]["Pharmacology"] == Group.C
    assert config.assessment_dates == AssessmentDates(date(2026, 1, 12), date(2026, 1, 22), None)


def test_overlapping_clinical_periods_are_rejected():
    raw = {
        "clinical_postings": {
            "01/11/2025 TO 20/11/2025": DEPTS,
            "20/11/2025 TO 30/11/2025": DEPTS,
        }
    }
    with pytest.raises(ConfigurationError, match="overlap"):
        parse_rotations(raw)


def test_gaps_between_clinical_periods_are_rejected():
    raw = {
        "clinical_postings": {
            "01/11/2025 TO 20/11/2025": DEPTS,
            "22/11/2025 TO 30/11/2025": DEPTS,
        }
    }
    with pytest.raises(ConfigurationError, match="gap"):
        parse_rotations(raw)


def test_periods_may_be_listed_out_of_order():
    raw = {
        "clinical_postings": {
            "21/11/2025 TO 30/11/2025": DEPTS,
            "01/11/2025 TO 20/11/2025": DEPTS,
        }
    }
    assert len(parse_rotations(raw).clinical_postings) == 2


def test_unknown_group_is_rejected():
    raw = {"clinical_postings": {"01/11/2025 TO 20/11/2025": {"MEDICINE": "D"}}}
    with pytest.raises(ConfigurationError, match="Invalid group"):
        parse_rotations(raw)


def test_unknown_sgl_period_is_rejected():
    raw = {"sgl_schedules": {"after_finals": {"MONDAY": {"Pathology": "A"}}}}
    with pytest.raises(ConfigurationError, match="Unknown SGL period"):
        parse_rotations(raw)


@pytest.mark.parametrize(
    "dates",
    [
        {"first": "22-01-2026", "second": "12-01-2026"},
        {"first": "12-01-2026", "second": "12-01-2026"},
        {"first": None, "second": "22-01-2026"},
        {"first": "2026-01-12"},
    ],
)
def test_bad_assessment_dates_are_rejected(dates):
    with pytest.raises(ConfigurationError):
        parse_rotations({"assessment_dates": dates})


def test_assessment_period_boundaries():
    dates = AssessmentDates(date(2026, 1, 12), date(2026, 1, 22), date(2026, 2, 20))

    assert dates.period_for(date(2026, 1, 11)) == SGLPeriod.BEFORE_FIRST_ASSESSMENT
    assert dates.period_for(date(2026, 1, 12)) == SGLPeriod.FIRST_TO_SECOND_ASSESSMENT
    assert dates.period_for(date(2026, 1, 21)) == SGLPeriod.FIRST_TO_SECOND_ASSESSMENT
    assert dates.period_for(date(2026, 1, 22)) == SGLPeriod.SECOND_TO_THIRD_ASSESSMENT
    # No bucket after the third assessment.
    assert dates.period_for(date(2026, 3, 1)) == SGLPeriod.SECOND_TO_THIRD_ASSESSMENT
    assert dates.period_for(None) == SGLPeriod.BEFORE_FIRST_ASSESSMENT


def test_assessment_periods_with_missing_dates():
    assert AssessmentDates().period_for(date(2026, 5, 1)) == SGLPeriod.BEFORE_FIRST_ASSESSMENT
    only_first = AssessmentDates(first=date(2026, 1, 12))
    assert only_first.period_for(date(2026, 5, 1)) == SGLPeriod.FIRST_TO_SECOND_ASSESSMENT


def test_parse_timetable_accepts_bare_list_and_fills_missing_slots():
    days = parse_timetable([{"date": "24-11-2025", "day": "monday", "time_8_9_AM": "PA 4.2"}])

    assert len(days) == 1
    assert days[0].day == "MONDAY"
    assert days[0].topic(TimeSlot.EARLY_MORNING) == "PA 4.2"
    assert days[0].topic(TimeSlot.AFTERNOON) == ""


@pytest.mark.parametrize(
    "row",
    [
        {"date": "2025-11-24", "day": "MONDAY"},
        {"date": "24-11-2025", "day": ""},
        "24-11-2025",
    ],
)
def test_parse_timetable_rejects_bad_rows(row):
    with pytest.raises(ConfigurationError):
        parse_timetable({"timetable": [row]})


def test_missing_and_malformed_files(tmp_path):
    with pytest.raises(ConfigurationError, match="Missing configuration file"):
        load_timetable(tmp_path / "nope.json")

    broken = tmp_path / "rotations.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="Invalid JSON"):
        load_rotations(broken)


def test_load_from_file(tmp_path, rotations_raw):
    path = tmp_path / "rotations.json"
    path.write_text(json.dumps(rotations_raw), encoding="utf-8")

    assert len(load_rotations(path).clinical_postings) == 4


def test_shipped_data_files_are_valid():
    rotations = load_rotations(DATA_DIR / "rotations.json")
    days = load_timetable(DATA_DIR / "academic_timetable.json")

    assert len(rotations.clinical_postings) == 6
    assert rotations.clinical_postings[0].start == date(2025, 11, 1)
    assert rotations.clinical_postings[-1].end == date(2026, 3, 31)
    assert len(days) > 0


def test_shipped_sgl_tables_end_at_first_assessment():
    rotations = load_rotations(DATA_DIR / "rotations.json")
    resolver = SubjectResolver(rotations)

    assert set(rotations.sgl_schedules) == {SGLPeriod.BEFORE_FIRST_ASSESSMENT}
    assert resolver.resolve_subject("SMALL GROUP LEARNING", "24-11-2025", "MONDAY", "C") == "Pharmacology (SGL)"
    assert resolver.resolve_subject("SMALL GROUP LEARNING", "13-01-2026", "TUESDAY", "A") == "SMALL GROUP LEARNING"
    assert resolver.resolve_subject("SMALL GROUP LEARNING", "22-01-2026", "THURSDAY", "B") == "SMALL GROUP LEARNING"
