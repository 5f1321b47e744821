from __future__ import annotations

from flask import Flask, session

from ..common.http import admin_required, current_identity, json_body, login_required, ok, query_int
from ..common.serialization import to_dict
from ..common.validators import parse_enum, require_int
from ..core.constants import DEFAULT_LEADERBOARD_LIMIT
from ..core.enums import MembershipRole, Role
from ..container import Container
from .model import User


def user_json(user: User) -> dict:
    return to_dict(user, exclude=("password_hash",))


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        data = json_body()
        user = container.auth_service.register(
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
        )
        return ok(user_json(user), status=201, message="Registration successful")

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        data = json_body()
        user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session["user_id"] = user.user_id
        session["name"] = user.name
        return ok(user_json(user), message="Login successful")

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def auth_logout():
        session.clear()
        return ok(message="Logged out")

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def auth_me():
        user = container.user_service.get_user(current_identity().user_id)
        return ok(user_json(user))

    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    @admin_required
    def users_list():
        users = container.user_service.list_users(current_identity())
        return ok([user_json(u) for u in users])

    @app.route("/api/users/<int:user_id>/role", methods=["PUT"], endpoint="users_set_role")
    @admin_required
    def users_set_role(user_id: int):
        role = parse_enum(Role, json_body().get("role"), "role")
        user = container.user_service.set_role(current_identity(), user_id=user_id, role=role)
        return ok(user_json(user), message="Role updated")

    @app.route("/api/users/<int:user_id>/club-role", methods=["PUT"], endpoint="users_set_club_role")
    @admin_required
    def users_set_club_role(user_id: int):
        data = json_body()
        membership = container.membership_service.assign_club_role(
            current_identity(),
            user_id=user_id,
            club_id=require_int(data.get("clubId"), "clubId"),
            role=parse_enum(MembershipRole, data.get("role"), "role"),
        )
        return ok(membership, message="Club role updated")

    @app.route("/api/users/<int:user_id>/memberships", methods=["GET"], endpoint="users_memberships")
    @login_required
    def users_memberships(user_id: int):
        return ok(container.membership_service.memberships_of(current_identity(), user_id=user_id))

    @app.route("/api/leaderboard", methods=["GET"], endpoint="leaderboard")
    @login_required
    def leaderboard():
        limit = query_int("limit", DEFAULT_LEADERBOARD_LIMIT)
        return ok(container.user_service.leaderboard(limit=limit))
