from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from ..clubs.permissions import require_club_manager
from ..clubs.repository import ClubRepository, MembershipRepository
from ..common.datetime_utils import month_windows, now_local
from ..core.constants import (
    ANALYTICS_ACTIVE_MEMBERS,
    ANALYTICS_HISTORY_MONTHS,
    ANALYTICS_RECENT_DAYS,
    ANALYTICS_RECENT_EVENTS,
    ANALYTICS_TOP_CLUBS,
)
from ..core.enums import MembershipStatus, ParticipationStatus
from ..core.exceptions import AuthorizationError, NotFoundError
from ..core.identity import Identity
from ..events.repository import EventRepository
from ..users.repository import UserRepository
from .model import ClubReport, EventReport, MemberReport, MonthlyValue, SystemReport
from .repository import AnalyticsRepository


def rate(part: int, whole: int) -> float:
    """Percentage with one decimal; 0.0 when there is nothing to divide."""
    if whole <= 0:
        return 0.0
    return round(part * 100.0 / whole, 1)


class AnalyticsService:
    def __init__(
        self,
        analytics: AnalyticsRepository,
        users: UserRepository,
        clubs: ClubRepository,
        events: EventRepository,
        memberships: MembershipRepository,
    ):
        self._analytics = analytics
        self._users = users
        self._clubs = clubs
        self._events = events
        self._memberships = memberships

    def system_wide(self, identity: Identity, *, now: Optional[datetime] = None) -> SystemReport:
        if not identity.is_admin:
            raise AuthorizationError("Admin access required")

        since = (now or now_local()) - timedelta(days=ANALYTICS_RECENT_DAYS)
        counts = self._analytics.system_counts(since=since)
        return SystemReport(
            total_users=counts.users,
            total_clubs=counts.clubs,
            total_events=counts.events,
            total_active_members=counts.active_members,
            recent_events=counts.recent_events,
            recent_memberships=counts.recent_memberships,
            attendance_rate=rate(counts.attended, counts.participations),
            top_clubs=list(self._analytics.top_clubs(limit=ANALYTICS_TOP_CLUBS)),
        )

    def club_report(self, identity: Identity, *, club_id: int, today: Optional[date] = None) -> ClubReport:
        require_club_manager(
            identity, int(club_id), self._memberships, message="Not authorized to view this club analytics"
        )
        club = self._clubs.get_by_id(int(club_id))
        if not club:
            raise NotFoundError("Club not found")

        today = today or now_local().date()
        counts = self._analytics.club_counts(club.club_id)
        growth = [
            MonthlyValue(
                month=start.strftime("%b %Y"),
                value=self._analytics.approved_members_before(club.club_id, end),
            )
            for start, end in month_windows(today, ANALYTICS_HISTORY_MONTHS)
        ]
        return ClubReport(
            club_id=club.club_id,
            club_name=club.name,
            total_members=counts.members,
            board_members=counts.board_members,
            pending_requests=counts.pending_requests,
            total_events=counts.events,
            attendance_rate=rate(counts.attended, counts.participations),
            member_growth=growth,
            active_members=list(self._analytics.most_active_members(club.club_id, limit=ANALYTICS_ACTIVE_MEMBERS)),
        )

    def event_report(self, identity: Identity, *, event_id: int) -> EventReport:
        event = self._events.get_by_id(int(event_id))
        if not event:
            raise NotFoundError("Event not found")
        require_club_manager(
            identity, event.club_id, self._memberships, message="Not authorized to view this event analytics"
        )
        club = self._clubs.get_by_id(event.club_id)

        counts = self._analytics.event_status_counts(event.event_id)
        registered = counts.get(ParticipationStatus.REGISTERED, 0)
        attended = counts.get(ParticipationStatus.ATTENDED, 0)
        absent = counts.get(ParticipationStatus.ABSENT, 0)
        total = registered + attended + absent
        return EventReport(
            event_id=event.event_id,
            title=event.title,
            event_date=event.event_date,
            venue=event.venue,
            points=event.points,
            club_id=event.club_id,
            club_name=club.name if club else "",
            total_registrations=total,
            registered=registered,
            attended=attended,
            absent=absent,
            attendance_rate=rate(attended, total),
            no_show_rate=rate(absent, total),
        )

    def member_report(self, identity: Identity, *, user_id: int, today: Optional[date] = None) -> MemberReport:
        if identity.user_id != int(user_id) and not identity.is_admin:
            raise AuthorizationError("Not authorized to view this member analytics")
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")

        today = today or now_local().date()
        counts = self._analytics.member_counts(user.user_id)
        history = [
            MonthlyValue(
                month=start.strftime("%b"),
                value=self._analytics.points_earned_between(user.user_id, start, end),
            )
            for start, end in month_windows(today, ANALYTICS_HISTORY_MONTHS)
        ]
        clubs = [m.club_name for m in self._memberships.list_for_user(user.user_id, status=MembershipStatus.APPROVED)]
        return MemberReport(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            total_points=user.points,
            total_clubs=counts.clubs,
            total_events_registered=counts.registered,
            total_events_attended=counts.attended,
            attendance_rate=rate(counts.attended, counts.registered),
            points_history=history,
            clubs=clubs,
            recent_events=list(self._analytics.recent_attended_events(user.user_id, limit=ANALYTICS_RECENT_EVENTS)),
        )
