from __future__ import annotations

from datetime import datetime
from typing import Dict, Protocol, Sequence

from ..core.enums import ParticipationStatus
from .model import ActiveMember, AttendedEvent, ClubCounts, ClubMemberCount, MemberCounts, SystemCounts


class AnalyticsRepository(Protocol):
    """Read-only aggregate queries behind the analytics reports."""

    def system_counts(self, *, since: datetime) -> SystemCounts:
        """Site totals; ``recent_*`` count rows created at or after ``since``."""

        raise NotImplementedError

    def top_clubs(self, *, limit: int) -> Sequence[ClubMemberCount]:
        raise NotImplementedError

    def club_counts(self, club_id: int) -> ClubCounts:
        raise NotImplementedError

    def approved_members_before(self, club_id: int, before: datetime) -> int:
        raise NotImplementedError

    def most_active_members(self, club_id: int, *, limit: int) -> Sequence[ActiveMember]:
        raise NotImplementedError

    def event_status_counts(self, event_id: int) -> Dict[ParticipationStatus, int]:
        raise NotImplementedError

    def member_counts(self, user_id: int) -> MemberCounts:
        raise NotImplementedError

    def points_earned_between(self, user_id: int, start: datetime, end: datetime) -> int:
        """Sum of event points for participations marked attended in ``[start, end)``."""

        raise NotImplementedError

    def recent_attended_events(self, user_id: int, *, limit: int) -> Sequence[AttendedEvent]:
        raise NotImplementedError
