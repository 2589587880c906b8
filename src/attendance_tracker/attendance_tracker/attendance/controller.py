from __future__ import annotations

import logging

from flask import Flask

from ..common.http import json_body, ok, token_required
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    auth_required = token_required(container.auth_service)

    @app.route("/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    @auth_required
    def attendance_mark(current_user):
        result = container.attendance_service.mark_batch(current_user.user_id, json_body().get("records"))
        return ok(
            message="Attendance processing completed",
            savedCount=result.saved_count,
            errorCount=result.error_count,
            errors=[e.to_dict() for e in result.errors],
        )

    @app.route("/attendance/my", methods=["GET"], endpoint="attendance_my")
    @auth_required
    def attendance_my(current_user):
        records = container.attendance_service.list_attendance(current_user.user_id)
        return ok(
            message="Attendance fetched successfully",
            count=len(records),
            records=[r.to_dict() for r in records],
        )

    @app.route("/attendance/remove", methods=["DELETE"], endpoint="attendance_remove")
    @auth_required
    def attendance_remove(current_user):
        data = json_body()
        container.attendance_service.delete_attendance(
            current_user.user_id,
            class_date=data.get("classDate"),
            time_slot_key=data.get("timeSlotKey"),
        )
        return ok(message="Attendance record removed successfully")

    @app.route("/attendance/stats/subject", methods=["GET"], endpoint="attendance_stats_subject")
    @auth_required
    def attendance_stats_subject(current_user):
        report = container.stats_service.build_report(current_user.user_id)
        return ok(
            stats=report.rows,
            overall=report.overall,
            totalRecords=report.total_records,
            processedSubjects=len(report.rows),
        )

    @app.route("/attendance/test-db", methods=["GET"], endpoint="attendance_test_db")
    @auth_required
    def attendance_test_db(current_user):
        status = container.database_status()
        logger.info("Database check requested by user id=%s: %s", current_user.user_id, status["connection"])
        return ok(**status)
