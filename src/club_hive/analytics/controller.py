from __future__ import annotations

from flask import Flask

from ..common.http import admin_required, current_identity, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/analytics/system-wide", methods=["GET"], endpoint="analytics_system")
    @admin_required
    def analytics_system():
        return ok(container.analytics_service.system_wide(current_identity()))

    @app.route("/api/analytics/club/<int:club_id>", methods=["GET"], endpoint="analytics_club")
    @login_required
    def analytics_club(club_id: int):
        return ok(container.analytics_service.club_report(current_identity(), club_id=club_id))

    @app.route("/api/analytics/event/<int:event_id>", methods=["GET"], endpoint="analytics_event")
    @login_required
    def analytics_event(event_id: int):
        return ok(container.analytics_service.event_report(current_identity(), event_id=event_id))

    @app.route("/api/analytics/member/<int:user_id>", methods=["GET"], endpoint="analytics_member")
    @login_required
    def analytics_member(user_id: int):
        return ok(container.analytics_service.member_report(current_identity(), user_id=user_id))
