from __future__ import annotations

from flask import Flask

from ..common.http import json_body, ok, token_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth_required = token_required(container.auth_service)

    @app.route("/user/register", methods=["POST"], endpoint="user_register")
    def user_register():
        data = json_body()
        result = container.auth_service.register(
            data.get("name", ""),
            data.get("email", ""),
            data.get("password", ""),
        )
        return ok(201, token=result.token, user=result.user.to_public_dict(include_group=False))

    @app.route("/user/login", methods=["POST"], endpoint="user_login")
    def user_login():
        data = json_body()
        result = container.auth_service.login(data.get("email", ""), data.get("password", ""))
        return ok(token=result.token, user=result.user.to_public_dict(include_group=False))

    @app.route("/user/profile", methods=["GET"], endpoint="user_profile")
    @auth_required
    def user_profile(current_user):
        return ok(user=current_user.to_public_dict())

    @app.route("/user/profile/group", methods=["PUT"], endpoint="user_profile_group")
    @auth_required
    def user_profile_group(current_user):
        user = container.user_service.update_group(current_user.user_id, json_body().get("group"))
        return ok(message="Group updated successfully", user=user.to_public_dict())
