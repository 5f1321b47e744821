from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_iso_datetime
from ..common.http import current_identity, json_body, login_required, ok, query_int
from ..common.validators import require_int, require_non_empty, require_non_negative_int
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/events", methods=["GET"], endpoint="events_list")
    @login_required
    def events_list():
        return ok(container.event_service.list_events(club_id=query_int("clubId")))

    @app.route("/api/events/<int:event_id>", methods=["GET"], endpoint="events_get")
    @login_required
    def events_get(event_id: int):
        return ok(container.event_service.get_event(event_id))

    @app.route("/api/events", methods=["POST"], endpoint="events_create")
    @login_required
    def events_create():
        data = json_body()
        raw_date = require_non_empty(data.get("date"), "Date")
        try:
            event_date = parse_iso_datetime(raw_date)
        except ValueError:
            raise ValidationError("Date must be an ISO-8601 date/time")

        points = data.get("points")
        event = container.event_service.create_event(
            current_identity(),
            club_id=require_int(data.get("clubId"), "clubId"),
            title=data.get("title", ""),
            description=data.get("description"),
            venue=data.get("venue"),
            event_date=event_date,
            points=require_non_negative_int(points, "points") if points not in (None, "") else None,
        )
        return ok(event, status=201, message="Event created")

    @app.route("/api/events/<int:event_id>/register", methods=["POST"], endpoint="events_register")
    @login_required
    def events_register(event_id: int):
        participation = container.event_service.register(current_identity(), event_id=event_id)
        return ok(participation, status=201, message="Registered for event")

    @app.route("/api/events/<int:event_id>/register", methods=["DELETE"], endpoint="events_unregister")
    @login_required
    def events_unregister(event_id: int):
        container.event_service.unregister(current_identity(), event_id=event_id)
        return ok(message="Registration cancelled")

    @app.route("/api/events/<int:event_id>/participants", methods=["GET"], endpoint="events_participants")
    @login_required
    def events_participants(event_id: int):
        return ok(container.event_service.list_participants(current_identity(), event_id=event_id))

    @app.route("/api/events/<int:event_id>/my-registration", methods=["GET"], endpoint="events_my_registration")
    @login_required
    def events_my_registration(event_id: int):
        participation = container.event_service.my_registration(current_identity(), event_id=event_id)
        return ok({"registered": participation is not None, "participation": participation})
