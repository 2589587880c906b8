from __future__ import annotations

from flask import Flask

from ..common.http import ok, token_required
from ..container import Container
from ..core.enums import Group


def register(app: Flask, container: Container) -> None:
    auth_required = token_required(container.auth_service)

    @app.route("/timetable", methods=["GET"], endpoint="timetable")
    @auth_required
    def timetable(current_user):
        group = Group.coerce(current_user.group)
        days = container.timetable_service.personalized_timetable(group)
        return ok(group=group.value, days=days)

    @app.route("/timetable/sessions", methods=["GET"], endpoint="timetable_sessions")
    @auth_required
    def timetable_sessions(current_user):
        group = Group.coerce(current_user.group)
        statuses = container.attendance_service.status_by_session(current_user.user_id)
        views = container.timetable_service.markable_sessions(group, statuses)
        return ok(group=group.value, sessions=[v.to_dict() for v in views])
