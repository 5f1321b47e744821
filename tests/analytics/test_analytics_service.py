from __future__ import annotations

from datetime import date, datetime

import pytest

from club_hive.analytics.service import rate
from club_hive.core.exceptions import AuthorizationError, NotFoundError

TODAY = date(2026, 3, 1)


@pytest.fixture
def activity(container, campus, make_event, ident):
    first = make_event(campus.club, "Opening", points=10)
    second = make_event(campus.club, "Finals", points=20)
    for event in (first, second):
        container.event_service.register(ident(campus.alice), event_id=event.event_id)
        container.event_service.register(ident(campus.board), event_id=event.event_id)

    mark = container.attendance_service.mark_attendance
    mark(ident(campus.board), event_id=first.event_id, user_id=campus.alice.user_id, status="attended")
    mark(ident(campus.board), event_id=second.event_id, user_id=campus.alice.user_id, status="attended")
    mark(ident(campus.board), event_id=first.event_id, user_id=campus.board.user_id, status="absent")
    return first, second


def test_rate_rounds_to_one_decimal():
    assert rate(1, 3) == 33.3
    assert rate(2, 3) == 66.7
    assert rate(0, 0) == 0.0


def test_system_wide_report(container, campus, activity, ident):
    report = container.analytics_service.system_wide(ident(campus.admin), now=datetime(2026, 3, 1, 12, 0))

    assert report.total_users == 4
    assert report.total_clubs == 1
    assert report.total_events == 2
    assert report.total_active_members == 2
    assert report.recent_events == 2
    assert report.attendance_rate == 50.0
    assert [(c.name, c.member_count) for c in report.top_clubs] == [("Chess Club", 2)]

    with pytest.raises(AuthorizationError):
        container.analytics_service.system_wide(ident(campus.board))


def test_club_report(container, campus, activity, ident):
    report = container.analytics_service.club_report(ident(campus.board), club_id=campus.club.club_id, today=TODAY)

    assert (report.total_members, report.board_members, report.pending_requests) == (2, 1, 1)
    assert report.total_events == 2
    assert report.attendance_rate == 50.0
    assert [m.month for m in report.member_growth] == [
        "Oct 2025", "Nov 2025", "Dec 2025", "Jan 2026", "Feb 2026", "Mar 2026",
    ]
    assert report.member_growth[-1].value == 2
    assert report.member_growth[0].value == 0
    assert report.active_members[0].name == "Alice"
    assert report.active_members[0].events_attended == 2

    with pytest.raises(AuthorizationError):
        container.analytics_service.club_report(ident(campus.alice), club_id=campus.club.club_id)


def test_event_report(container, campus, activity, ident):
    first, _ = activity
    report = container.analytics_service.event_report(ident(campus.admin), event_id=first.event_id)

    assert (report.total_registrations, report.attended, report.absent, report.registered) == (2, 1, 1, 0)
    assert report.attendance_rate == 50.0
    assert report.no_show_rate == 50.0
    assert report.club_name == "Chess Club"
    with pytest.raises(NotFoundError):
        container.analytics_service.event_report(ident(campus.admin), event_id=999)


def test_member_report_is_self_or_admin(container, campus, activity, db, ident):
    report = container.analytics_service.member_report(ident(campus.alice), user_id=campus.alice.user_id, today=TODAY)

    assert report.total_points == 30
    assert (report.total_events_registered, report.total_events_attended) == (2, 2)
    assert report.attendance_rate == 100.0
    assert report.points_history[-1].month == "Mar"
    assert report.points_history[-1].value == 30
    assert report.clubs == ["Chess Club"]
    assert {e.title for e in report.recent_events} == {"Opening", "Finals"}

    with pytest.raises(AuthorizationError):
        container.analytics_service.member_report(ident(campus.bob), user_id=campus.alice.user_id)
    assert container.analytics_service.member_report(ident(campus.admin), user_id=campus.alice.user_id).user_id == (
        campus.alice.user_id
    )
