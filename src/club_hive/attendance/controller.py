from __future__ import annotations

from flask import Flask

from ..common.http import current_identity, json_body, login_required, ok
from ..common.validators import require_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/events/<int:event_id>/attendance", methods=["PUT"], endpoint="events_attendance")
    @login_required
    def events_attendance(event_id: int):
        data = json_body()
        change = container.attendance_service.mark_attendance(
            current_identity(),
            event_id=event_id,
            user_id=require_int(data.get("userId"), "userId"),
            status=data.get("status"),
        )
        return ok(change, message="Attendance updated")
