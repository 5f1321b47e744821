from __future__ import annotations

from flask import Flask

from ..common.http import current_identity, json_body, login_required, ok, query_int
from ..common.validators import require_int
from ..core.constants import DEFAULT_PAGE_LIMIT
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/announcements", methods=["POST"], endpoint="announcements_create")
    @login_required
    def announcements_create():
        data = json_body()
        club_id = data.get("clubId")
        announcement = container.announcement_service.create(
            current_identity(),
            title=data.get("title", ""),
            content=data.get("content", ""),
            club_id=require_int(club_id, "clubId") if club_id not in (None, "") else None,
        )
        return ok(announcement, status=201, message="Announcement posted")

    @app.route("/api/announcements", methods=["GET"], endpoint="announcements_list")
    @login_required
    def announcements_list():
        return ok(
            container.announcement_service.list_feed(
                current_identity(),
                limit=query_int("limit", DEFAULT_PAGE_LIMIT),
                offset=query_int("offset", 0),
            )
        )

    @app.route("/api/announcements/club/<int:club_id>", methods=["GET"], endpoint="announcements_club")
    @login_required
    def announcements_club(club_id: int):
        return ok(container.announcement_service.list_for_club(current_identity(), club_id=club_id))

    @app.route("/api/announcements/<int:announcement_id>", methods=["DELETE"], endpoint="announcements_delete")
    @login_required
    def announcements_delete(announcement_id: int):
        container.announcement_service.delete(current_identity(), announcement_id=announcement_id)
        return ok(message="Announcement deleted")
