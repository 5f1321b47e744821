from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..announcements.repository import AnnouncementRepository
from ..clubs.permissions import require_club_manager
from ..clubs.repository import ClubRepository, MembershipRepository
from ..common.validators import require_max_length, require_non_empty, truncate
from ..core.constants import DEFAULT_EVENT_POINTS, TITLE_MAX_LENGTH, VENUE_MAX_LENGTH
from ..core.enums import ParticipationStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..core.identity import Identity
from ..notifications.fanout import NotificationFanout, event_created_summary
from .model import Event, EventListing, Participant, Participation
from .repository import EventRepository, ParticipationRepository

logger = logging.getLogger(__name__)


class EventService:
    """Use case: event catalogue, creation with fan-out, and self-registration."""

    def __init__(
        self,
        events: EventRepository,
        participations: ParticipationRepository,
        clubs: ClubRepository,
        memberships: MembershipRepository,
        announcements: AnnouncementRepository,
        fanout: NotificationFanout,
    ):
        self._events = events
        self._participations = participations
        self._clubs = clubs
        self._memberships = memberships
        self._announcements = announcements
        self._fanout = fanout

    def get_event(self, event_id: int) -> Event:
        event = self._events.get_by_id(int(event_id))
        if not event:
            raise NotFoundError("Event not found")
        return event

    def list_events(self, *, club_id: Optional[int] = None) -> Sequence[EventListing]:
        return self._events.list_all(club_id=club_id)

    def create_event(
        self,
        identity: Identity,
        *,
        club_id: int,
        title: str,
        event_date: datetime,
        description: Optional[str] = None,
        venue: Optional[str] = None,
        points: Optional[int] = None,
    ) -> Event:
        """Create an event, post its club announcement and notify approved members.

        The announcement row and the member notifications are written
        independently of the general announcement fan-out.
        """
        club = self._clubs.get_by_id(int(club_id))
        if not club:
            raise NotFoundError("Club not found")
        require_club_manager(identity, club.club_id, self._memberships, message="Not authorized to create events for this club")

        title = require_max_length(require_non_empty(title, "Title"), "Title", TITLE_MAX_LENGTH)
        venue = require_max_length((venue or "").strip(), "Venue", VENUE_MAX_LENGTH)
        points = DEFAULT_EVENT_POINTS if points is None else int(points)
        if points < 0:
            raise ValidationError("Points must not be negative")

        event_id = self._events.create(
            club_id=club.club_id,
            title=title,
            description=(description or "").strip() or None,
            venue=venue or None,
            event_date=event_date,
            points=points,
        )
        event = self.get_event(event_id)

        content = event_created_summary(event, club)
        if event.description:
            content += f". {event.description}"
        self._announcements.create(
            title=truncate(f"New Event: {event.title}", TITLE_MAX_LENGTH),
            content=content,
            club_id=club.club_id,
            created_by=identity.user_id,
        )
        self._fanout.notify_event_created(event, club)

        logger.info("Event %s created in club %s by %s", event.event_id, club.club_id, identity.user_id)
        return event

    def register(self, identity: Identity, *, event_id: int) -> Participation:
        event = self.get_event(event_id)
        if self._participations.get(event_id=event.event_id, user_id=identity.user_id):
            raise ValidationError("You are already registered for this event")

        self._participations.create(
            event_id=event.event_id,
            user_id=identity.user_id,
            status=ParticipationStatus.REGISTERED,
        )
        return self._participations.get(event_id=event.event_id, user_id=identity.user_id)

    def unregister(self, identity: Identity, *, event_id: int) -> None:
        event = self.get_event(event_id)
        participation = self._participations.get(event_id=event.event_id, user_id=identity.user_id)
        if not participation:
            raise NotFoundError("Registration not found")
        if participation.status != ParticipationStatus.REGISTERED:
            raise ValidationError("Attendance has already been recorded for this event")

        self._participations.delete(participation.participation_id)

    def list_participants(self, identity: Identity, *, event_id: int) -> Sequence[Participant]:
        event = self.get_event(event_id)
        require_club_manager(identity, event.club_id, self._memberships)
        return self._participations.list_for_event(event.event_id)

    def my_registration(self, identity: Identity, *, event_id: int) -> Optional[Participation]:
        event = self.get_event(event_id)
        return self._participations.get(event_id=event.event_id, user_id=identity.user_id)
