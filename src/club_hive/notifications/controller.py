from __future__ import annotations

from flask import Flask

from ..common.http import current_identity, login_required, ok, query_bool, query_int
from ..core.constants import DEFAULT_PAGE_LIMIT
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/notifications", methods=["GET"], endpoint="notifications_list")
    @login_required
    def notifications_list():
        return ok(
            container.notification_service.list_mine(
                current_identity(),
                unread_only=query_bool("unreadOnly"),
                limit=query_int("limit", DEFAULT_PAGE_LIMIT),
                offset=query_int("offset", 0),
            )
        )

    @app.route("/api/notifications/unread-count", methods=["GET"], endpoint="notifications_unread_count")
    @login_required
    def notifications_unread_count():
        return ok({"count": container.notification_service.unread_count(current_identity())})

    @app.route("/api/notifications/<int:notification_id>/read", methods=["PUT"], endpoint="notifications_read")
    @login_required
    def notifications_read(notification_id: int):
        notification = container.notification_service.mark_read(current_identity(), notification_id=notification_id)
        return ok(notification)

    @app.route("/api/notifications/mark-all-read", methods=["PUT"], endpoint="notifications_mark_all_read")
    @login_required
    def notifications_mark_all_read():
        updated = container.notification_service.mark_all_read(current_identity())
        return ok({"updated": updated}, message="All notifications marked as read")

    @app.route("/api/notifications/<int:notification_id>", methods=["DELETE"], endpoint="notifications_delete")
    @login_required
    def notifications_delete(notification_id: int):
        container.notification_service.delete(current_identity(), notification_id=notification_id)
        return ok(message="Notification deleted")
