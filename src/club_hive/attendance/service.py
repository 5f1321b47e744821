from __future__ import annotations

import logging

from ..clubs.permissions import require_club_manager
from ..clubs.repository import MembershipRepository
from ..common.validators import parse_enum
from ..core.enums import ParticipationStatus
from ..core.exceptions import NotFoundError
from ..core.identity import Identity
from ..events.repository import EventRepository, ParticipationRepository
from ..notifications.fanout import points_awarded_notification
from ..users.repository import UserRepository
from .model import AttendanceChange
from .repository import AttendanceLedger
from .rules import apply_delta, points_transition

logger = logging.getLogger(__name__)


class AttendanceService:
    """Reconciles a roster status change with the attendee's point balance.

    Each call touches exactly one (event, user) pair: at most one balance
    change and at most one ``points_awarded`` notification.
    """

    def __init__(
        self,
        ledger: AttendanceLedger,
        events: EventRepository,
        participations: ParticipationRepository,
        users: UserRepository,
        memberships: MembershipRepository,
    ):
        self._ledger = ledger
        self._events = events
        self._participations = participations
        self._users = users
        self._memberships = memberships

    def mark_attendance(self, identity: Identity, *, event_id: int, user_id: int, status) -> AttendanceChange:
        event = self._events.get_by_id(int(event_id))
        if not event:
            raise NotFoundError("Event not found")

        participation = self._participations.get(event_id=event.event_id, user_id=int(user_id))
        if not participation:
            raise NotFoundError("Participation not found")

        require_club_manager(
            identity,
            event.club_id,
            self._memberships,
            message="Not authorized to mark attendance for this event",
        )
        new_status = parse_enum(ParticipationStatus, status, "status")

        user = self._users.get_by_id(participation.user_id)
        if not user:
            raise NotFoundError("User not found")

        previous = participation.status
        delta = points_transition(previous, new_status, event.points)
        user_points = apply_delta(user.points, delta) if delta else user.points
        notification = (
            points_awarded_notification(user_id=user.user_id, event=event) if delta > 0 else None
        )

        # the status is written even when it did not change
        self._ledger.record_attendance(
            participation_id=participation.participation_id,
            status=new_status,
            user_id=user.user_id,
            user_points=user_points if delta else None,
            notification=notification,
        )

        if delta:
            logger.info(
                "Attendance %s -> %s for user %s at event %s: points %d -> %d",
                previous.value,
                new_status.value,
                user.user_id,
                event.event_id,
                user.points,
                user_points,
            )

        return AttendanceChange(
            event_id=event.event_id,
            user_id=user.user_id,
            previous_status=previous,
            status=new_status,
            points_delta=user_points - user.points,
            user_points=user_points,
            notified=notification is not None,
        )
