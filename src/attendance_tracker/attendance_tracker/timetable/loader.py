"""Load the static timetable and the per-term rotation tables from JSON files.

Both files are validated once at startup; any inconsistency raises
ConfigurationError so a bad term configuration never reaches a request.
"""
from __future__ import annotations

import json
import logging
import re
from datetime import date, datetime, timedelta
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from ..common.datetime_utils import try_parse_class_date
from ..core.enums import Group, SGLPeriod, TimeSlot
from ..core.exceptions import ConfigurationError
from .model import AssessmentDates, ClinicalPostingPeriod, DayRecord, RotationConfig

logger = logging.getLogger(__name__)

_RANGE_RE = re.compile(r"^\s*(\d{1,2}/\d{1,2}/\d{4})\s+TO\s+(\d{1,2}/\d{1,2}/\d{4})\s*$", re.IGNORECASE)


def _read_json(path: str | Path) -> Any:
    path = Path(path)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigurationError(f"Missing configuration file: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e


def parse_date_range(value: str) -> tuple[date, date]:
    """Parse "DD/MM/YYYY TO DD/MM/YYYY" into (start, end)."""
    m = _RANGE_RE.match(value or "")
    if not m:
        raise ConfigurationError(f"Invalid clinical posting range: {value!r}")
    try:
        start = datetime.strptime(m.group(1), "%d/%m/%Y").date()
        end = datetime.strptime(m.group(2), "%d/%m/%Y").date()
    except ValueError as e:
        raise ConfigurationError(f"Invalid date in clinical posting range {value!r}") from e
    if start > end:
        raise ConfigurationError(f"Clinical posting range ends before it starts: {value!r}")
    return start, end


def _parse_group(value: Any, where: str) -> Group:
    try:
        return Group(value)
    except ValueError:
        raise ConfigurationError(f"Invalid group {value!r} in {where}")


def _group_mapping(raw: Any, where: str) -> Mapping[str, Group]:
    if not isinstance(raw, dict) or not raw:
        raise ConfigurationError(f"Expected a non-empty name -> group mapping in {where}")
    return MappingProxyType({str(name): _parse_group(g, f"{where}/{name}") for name, g in raw.items()})


def validate_clinical_postings(periods: Iterable[ClinicalPostingPeriod]) -> None:
    """Periods must be disjoint and leave no day uncovered between the first and the last."""
    ordered = sorted(periods, key=lambda p: p.start)
    for prev, cur in zip(ordered, ordered[1:]):
        if cur.start <= prev.end:
            raise ConfigurationError(
                f"Clinical posting periods overlap: {prev.start}..{prev.end} and {cur.start}..{cur.end}"
            )
        if cur.start != prev.end + timedelta(days=1):
            raise ConfigurationError(f"Clinical posting calendar has a gap between {prev.end} and {cur.start}")


def _parse_assessment_dates(raw: Any) -> AssessmentDates:
    raw = raw or {}
    if not isinstance(raw, dict):
        raise ConfigurationError("assessment_dates must be an object")

    parsed: list[Optional[date]] = []
    for key in ("first", "second", "third"):
        value = raw.get(key)
        if value in (None, ""):
            parsed.append(None)
            continue
        d = try_parse_class_date(value)
        if d is None:
            raise ConfigurationError(f"Invalid {key} assessment date {value!r} (expected DD-MM-YYYY)")
        parsed.append(d)

    # A later boundary only makes sense once the earlier ones exist, and they must increase.
    seen_gap = False
    previous: Optional[date] = None
    for d in parsed:
        if d is None:
            seen_gap = True
            continue
        if seen_gap:
            raise ConfigurationError("Assessment dates must be filled in order (first, second, third)")
        if previous is not None and d <= previous:
            raise ConfigurationError("Assessment dates must be strictly increasing")
        previous = d

    return AssessmentDates(*parsed)


def parse_rotations(raw: Any) -> RotationConfig:
    if not isinstance(raw, dict):
        raise ConfigurationError("Rotation configuration must be a JSON object")

    postings_raw = raw.get("clinical_postings") or {}
    if not isinstance(postings_raw, dict):
        raise ConfigurationError("clinical_postings must map 'DD/MM/YYYY TO DD/MM/YYYY' to departments")

    postings = []
    for range_text, departments in postings_raw.items():
        start, end = parse_date_range(range_text)
        postings.append(
            ClinicalPostingPeriod(
                start=start,
                end=end,
                departments=_group_mapping(departments, f"clinical_postings/{range_text}"),
            )
        )
    postings.sort(key=lambda p: p.start)
    validate_clinical_postings(postings)

    sgl_raw = raw.get("sgl_schedules") or {}
    if not isinstance(sgl_raw, dict):
        raise ConfigurationError("sgl_schedules must be an object")

    sgl: dict[SGLPeriod, Mapping[str, Mapping[str, Group]]] = {}
    for period_key, days in sgl_raw.items():
        try:
            period = SGLPeriod(period_key)
        except ValueError:
            raise ConfigurationError(f"Unknown SGL period {period_key!r}")
        if not isinstance(days, dict):
            raise ConfigurationError(f"sgl_schedules/{period_key} must map weekday -> subjects")
        sgl[period] = MappingProxyType(
            {
                str(weekday).upper(): _group_mapping(subjects, f"sgl_schedules/{period_key}/{weekday}")
                for weekday, subjects in days.items()
            }
        )

    return RotationConfig(
        clinical_postings=tuple(postings),
        sgl_schedules=MappingProxyType(sgl),
        assessment_dates=_parse_assessment_dates(raw.get("assessment_dates")),
    )


def load_rotations(path: str | Path) -> RotationConfig:
    config = parse_rotations(_read_json(path))
    logger.info(
        "Loaded rotations from %s (clinical periods=%s, sgl periods=%s)",
        path,
        len(config.clinical_postings),
        len(config.sgl_schedules),
    )
    return config


def parse_timetable(raw: Any) -> list[DayRecord]:
    rows = raw.get("timetable") if isinstance(raw, dict) else raw
    if not isinstance(rows, list):
        raise ConfigurationError("Timetable must be a list of day records (or an object with a 'timetable' list)")

    days: list[DayRecord] = []
    for i, row in enumerate(rows):
        if not isinstance(row, dict):
            raise ConfigurationError(f"Timetable row {i} is not an object")

        date_text = str(row.get("date") or "").strip()
        parsed = try_parse_class_date(date_text)
        if parsed is None:
            raise ConfigurationError(f"Timetable row {i} has invalid date {row.get('date')!r} (expected DD-MM-YYYY)")

        day_name = str(row.get("day") or "").strip().upper()
        if not day_name:
            raise ConfigurationError(f"Timetable row {i} ({date_text}) has no day name")
        if day_name != parsed.strftime("%A").upper():
            logger.warning("Timetable row %s: %s is a %s, not %s", i, date_text, parsed.strftime("%A"), day_name)

        slots = MappingProxyType({slot: str(row.get(slot.value) or "") for slot in TimeSlot})
        days.append(DayRecord(date=date_text, day=day_name, slots=slots))

    return days


def load_timetable(path: str | Path) -> list[DayRecord]:
    days = parse_timetable(_read_json(path))
    logger.info("Loaded %s timetable days from %s", len(days), path)
    return days
