from __future__ import annotations

from ..attendance.repository import AttendanceRepository
from ..core.constants import LOW_ATTENDANCE_THRESHOLD
from .aggregator import attendance_percentage, compute_subject_stats
from .model import StatsReport, SubjectStat

# Shorter labels for the summary view; unknown subjects keep their own name.
SUBJECT_DISPLAY_NAMES = {
    "Obstetrics & Gynecology": "OBG",
    "CLINICS": "Clinical Postings",
    "SMALL GROUP LEARNING": "SGL Sessions",
    "Self-Directed Learning (SDL)": "SDL",
    "FAMILY ADOPTION PROGRAMME": "FAP",
    "Class/Activity": "Other Activities",
}


class SubjectStatsService:
    def __init__(self, attendance: AttendanceRepository, *, low_threshold: int = LOW_ATTENDANCE_THRESHOLD):
        self._attendance = attendance
        self._low_threshold = int(low_threshold)

    def _to_row(self, stat: SubjectStat) -> dict:
        percentage = attendance_percentage(stat)
        return {
            **stat.to_dict(),
            "displayName": SUBJECT_DISPLAY_NAMES.get(stat.subject, stat.subject),
            "actualTotalClasses": stat.held_classes,
            "percentage": percentage,
            "isLow": stat.held_classes > 0 and percentage < self._low_threshold,
        }

    def build_report(self, user_id: int) -> StatsReport:
        records = list(self._attendance.list_for_user(int(user_id)))
        stats = compute_subject_stats(records)

        rows = [self._to_row(s) for s in stats]
        rows.sort(key=lambda r: r["percentage"], reverse=True)

        held_rows = [r for r in rows if r["actualTotalClasses"] > 0]
        attended = sum(r["attendedClasses"] for r in held_rows)
        held = sum(r["actualTotalClasses"] for r in held_rows)
        cancelled = sum(r["cancelledClasses"] for r in held_rows)
        overall_pct = attendance_percentage(
            SubjectStat(subject="*", total_classes=held + cancelled, attended_classes=attended, cancelled_classes=cancelled)
        )

        overall = {
            "attendedClasses": attended,
            "actualTotalClasses": held,
            "cancelledClasses": cancelled,
            "percentage": overall_pct,
            "isLow": held > 0 and overall_pct < self._low_threshold,
        }
        return StatsReport(rows=rows, overall=overall, total_records=len(records))
