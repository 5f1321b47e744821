from __future__ import annotations

from datetime import datetime

import pytest

from club_hive.core.constants import DEFAULT_EVENT_POINTS, TITLE_MAX_LENGTH, VENUE_MAX_LENGTH
from club_hive.core.enums import ParticipationStatus
from club_hive.core.exceptions import AuthorizationError, NotFoundError, ValidationError

WHEN = datetime(2026, 3, 10, 19, 0)


def test_board_creates_event_with_default_points(container, campus, ident):
    event = container.event_service.create_event(
        ident(campus.board), club_id=campus.club.club_id, title="Blitz Night", event_date=WHEN
    )

    assert event.points == DEFAULT_EVENT_POINTS
    assert [e.title for e in container.event_service.list_events(club_id=campus.club.club_id)] == ["Blitz Night"]


def test_member_cannot_create_event(container, campus, ident):
    with pytest.raises(AuthorizationError):
        container.event_service.create_event(
            ident(campus.alice), club_id=campus.club.club_id, title="Rogue", event_date=WHEN
        )


def test_create_event_validates_input(container, campus, ident):
    svc = container.event_service
    with pytest.raises(NotFoundError):
        svc.create_event(ident(campus.admin), club_id=999, title="Nowhere", event_date=WHEN)
    with pytest.raises(ValidationError):
        svc.create_event(ident(campus.admin), club_id=campus.club.club_id, title="", event_date=WHEN)
    with pytest.raises(ValidationError):
        svc.create_event(ident(campus.admin), club_id=campus.club.club_id, title="Neg", event_date=WHEN, points=-1)


def test_register_once_then_unregister(container, campus, make_event, ident):
    svc = container.event_service
    event = make_event(campus.club)

    participation = svc.register(ident(campus.outsider), event_id=event.event_id)
    assert participation.status == ParticipationStatus.REGISTERED
    with pytest.raises(ValidationError):
        svc.register(ident(campus.outsider), event_id=event.event_id)

    svc.unregister(ident(campus.outsider), event_id=event.event_id)
    assert svc.my_registration(ident(campus.outsider), event_id=event.event_id) is None


def test_cannot_unregister_after_attendance_recorded(container, campus, make_event, ident):
    event = make_event(campus.club)
    container.event_service.register(ident(campus.alice), event_id=event.event_id)
    container.attendance_service.mark_attendance(
        ident(campus.board), event_id=event.event_id, user_id=campus.alice.user_id, status="attended"
    )

    with pytest.raises(ValidationError):
        container.event_service.unregister(ident(campus.alice), event_id=event.event_id)


def test_participants_are_visible_to_managers_only(container, campus, make_event, ident):
    svc = container.event_service
    event = make_event(campus.club)
    svc.register(ident(campus.alice), event_id=event.event_id)

    participants = svc.list_participants(ident(campus.board), event_id=event.event_id)
    assert [(p.user_name, p.status) for p in participants] == [("Alice", ParticipationStatus.REGISTERED)]
    with pytest.raises(AuthorizationError):
        svc.list_participants(ident(campus.alice), event_id=event.event_id)


def test_long_titles_fit_the_derived_announcement(container, campus, ident, db):
    title = "T" * TITLE_MAX_LENGTH
    event = container.event_service.create_event(
        ident(campus.board), club_id=campus.club.club_id, title=title, event_date=WHEN
    )

    assert event.title == title
    [announcement] = db.announcements.values()
    assert announcement.title.startswith("New Event: T")
    assert len(announcement.title) == TITLE_MAX_LENGTH
    assert db.notifications
    assert all(len(n.title) <= TITLE_MAX_LENGTH for n in db.notifications.values())


def test_over_long_title_or_venue_is_rejected_before_any_write(container, campus, ident, db):
    svc = container.event_service
    with pytest.raises(ValidationError):
        svc.create_event(
            ident(campus.board), club_id=campus.club.club_id, title="T" * (TITLE_MAX_LENGTH + 1), event_date=WHEN
        )
    with pytest.raises(ValidationError):
        svc.create_event(
            ident(campus.board),
            club_id=campus.club.club_id,
            title="Blitz",
            venue="V" * (VENUE_MAX_LENGTH + 1),
            event_date=WHEN,
        )

    assert db.events == {}
    assert db.announcements == {}
    assert db.notifications == {}
