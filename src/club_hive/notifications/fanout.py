from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..announcements.model import Announcement
from ..clubs.model import Club
from ..clubs.repository import MembershipRepository
from ..common.datetime_utils import format_event_time
from ..common.validators import truncate
from ..core.constants import NOTIFICATION_CONTENT_MAX_LENGTH, TITLE_MAX_LENGTH
from ..core.enums import MembershipStatus, NotificationType, RelatedType, Role
from ..events.model import Event
from ..users.repository import UserRepository
from .model import NewNotification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


def points_awarded_notification(*, user_id: int, event: Event) -> NewNotification:
    return NewNotification(
        user_id=int(user_id),
        type=NotificationType.POINTS_AWARDED,
        title="Points Awarded",
        content=f'You earned {event.points} points for attending "{event.title}"!',
        related_id=event.event_id,
        related_type=RelatedType.EVENT,
    )


def event_created_summary(event: Event, club: Club) -> str:
    text = f'{club.name} is hosting "{event.title}" on {format_event_time(event.event_date)}'
    if event.venue:
        text += f" at {event.venue}"
    return text


def event_reminder_notification(*, user_id: int, event: Event) -> NewNotification:
    return NewNotification(
        user_id=int(user_id),
        type=NotificationType.EVENT_REMINDER,
        title="Event Reminder",
        content=f'Reminder: "{event.title}" is happening soon at {format_event_time(event.event_date)}!',
        related_id=event.event_id,
        related_type=RelatedType.EVENT,
    )


class NotificationFanout:
    """Computes recipients for announcement-like actions and writes one row per recipient.

    Each fan-out is a single batch write through ``create_many``: it either
    succeeds for every recipient or fails as a whole.
    """

    def __init__(self, notifications: NotificationRepository, memberships: MembershipRepository, users: UserRepository):
        self._notifications = notifications
        self._memberships = memberships
        self._users = users

    def announcement_targets(self, club_id: Optional[int]) -> Sequence[int]:
        if club_id is not None:
            # every membership row counts, whatever its status
            return list(self._memberships.list_user_ids(int(club_id)))
        return list(self._users.list_ids_excluding_role(Role.ADMIN))

    def notify_announcement(self, announcement: Announcement) -> int:
        targets = self.announcement_targets(announcement.club_id)
        items = [
            NewNotification(
                user_id=user_id,
                type=NotificationType.ANNOUNCEMENT,
                title=announcement.title,
                content=truncate(announcement.content, NOTIFICATION_CONTENT_MAX_LENGTH),
                related_id=announcement.announcement_id,
                related_type=RelatedType.ANNOUNCEMENT,
            )
            for user_id in targets
        ]
        created = self._notifications.create_many(items)
        logger.info(
            "Announcement %s fanned out to %d users (club=%s)",
            announcement.announcement_id,
            created,
            announcement.club_id,
        )
        return created

    def notify_event_created(self, event: Event, club: Club) -> int:
        """Tell approved members of ``club`` about a new event."""
        targets = self._memberships.list_user_ids(club.club_id, status=MembershipStatus.APPROVED)
        content = event_created_summary(event, club)
        items = [
            NewNotification(
                user_id=user_id,
                type=NotificationType.ANNOUNCEMENT,
                title=truncate(f"New Event: {event.title}", TITLE_MAX_LENGTH),
                content=truncate(content, NOTIFICATION_CONTENT_MAX_LENGTH),
                related_id=event.event_id,
                related_type=RelatedType.EVENT,
            )
            for user_id in targets
        ]
        created = self._notifications.create_many(items)
        logger.info("Event %s announced to %d members of club %s", event.event_id, created, club.club_id)
        return created
