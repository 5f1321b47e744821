from __future__ import annotations

from flask import Flask

from ..common.http import admin_required, current_identity, json_body, login_required, ok
from ..common.validators import parse_enum
from ..core.enums import ClubStatus, MembershipRole, MembershipStatus
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/clubs", methods=["GET"], endpoint="clubs_list")
    @login_required
    def clubs_list():
        return ok(container.club_service.list_clubs())

    @app.route("/api/clubs/<int:club_id>", methods=["GET"], endpoint="clubs_get")
    @login_required
    def clubs_get(club_id: int):
        return ok(container.club_service.get_club(club_id))

    @app.route("/api/clubs", methods=["POST"], endpoint="clubs_create")
    @admin_required
    def clubs_create():
        data = json_body()
        club = container.club_service.create_club(
            current_identity(),
            name=data.get("name", ""),
            description=data.get("description"),
        )
        return ok(club, status=201, message="Club created")

    @app.route("/api/clubs/<int:club_id>", methods=["PUT"], endpoint="clubs_update")
    @admin_required
    def clubs_update(club_id: int):
        data = json_body()
        status = data.get("status")
        club = container.club_service.update_club(
            current_identity(),
            club_id=club_id,
            name=data.get("name"),
            description=data.get("description"),
            status=parse_enum(ClubStatus, status, "status") if status is not None else None,
        )
        return ok(club, message="Club updated")

    @app.route("/api/clubs/<int:club_id>", methods=["DELETE"], endpoint="clubs_delete")
    @admin_required
    def clubs_delete(club_id: int):
        container.club_service.delete_club(current_identity(), club_id=club_id)
        return ok(message="Club deleted")

    @app.route("/api/clubs/<int:club_id>/join", methods=["POST"], endpoint="clubs_join")
    @login_required
    def clubs_join(club_id: int):
        membership = container.membership_service.request_join(current_identity(), club_id=club_id)
        return ok(membership, status=201, message="Join request submitted")

    @app.route("/api/clubs/<int:club_id>/pending", methods=["GET"], endpoint="clubs_pending")
    @login_required
    def clubs_pending(club_id: int):
        return ok(container.membership_service.list_pending(current_identity(), club_id=club_id))

    @app.route(
        "/api/clubs/<int:club_id>/membership/<int:user_id>",
        methods=["PUT"],
        endpoint="clubs_decide_membership",
    )
    @login_required
    def clubs_decide_membership(club_id: int, user_id: int):
        status = parse_enum(MembershipStatus, json_body().get("status"), "status")
        membership = container.membership_service.decide(
            current_identity(), club_id=club_id, user_id=user_id, status=status
        )
        return ok(membership, message=f"Membership {status.value}")

    @app.route("/api/clubs/my-clubs", methods=["GET"], endpoint="clubs_mine")
    @login_required
    def clubs_mine():
        return ok(container.membership_service.my_clubs(current_identity()))

    @app.route("/api/clubs/<int:club_id>/members", methods=["GET"], endpoint="clubs_members")
    @login_required
    def clubs_members(club_id: int):
        return ok(container.membership_service.list_members(club_id=club_id))

    @app.route(
        "/api/clubs/<int:club_id>/members/<int:user_id>/role",
        methods=["PUT"],
        endpoint="clubs_member_role",
    )
    @login_required
    def clubs_member_role(club_id: int, user_id: int):
        role = parse_enum(MembershipRole, json_body().get("role"), "role")
        membership = container.membership_service.set_member_role(
            current_identity(), club_id=club_id, user_id=user_id, role=role
        )
        return ok(membership, message="Member role updated")

    @app.route(
        "/api/clubs/<int:club_id>/members/<int:user_id>",
        methods=["DELETE"],
        endpoint="clubs_remove_member",
    )
    @login_required
    def clubs_remove_member(club_id: int, user_id: int):
        container.membership_service.remove_member(current_identity(), club_id=club_id, user_id=user_id)
        return ok(message="Member removed")
