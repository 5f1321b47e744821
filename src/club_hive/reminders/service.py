from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.constants import REMINDER_LOOKAHEAD_HOURS
from ..core.enums import NotificationType, ParticipationStatus, RelatedType
from ..events.repository import EventRepository, ParticipationRepository
from ..notifications.fanout import event_reminder_notification
from ..notifications.repository import NotificationRepository

logger = logging.getLogger(__name__)


class EventReminderService:
    """Periodic sweep: remind registered attendees of events starting soon.

    A user gets at most one ``event_reminder`` per event no matter how often
    the sweep runs; an existing reminder row is the de-duplication key.
    """

    def __init__(
        self,
        events: EventRepository,
        participations: ParticipationRepository,
        notifications: NotificationRepository,
        *,
        lookahead_hours: int = REMINDER_LOOKAHEAD_HOURS,
    ):
        self._events = events
        self._participations = participations
        self._notifications = notifications
        self._lookahead = timedelta(hours=int(lookahead_hours))

    def send_event_reminders(self, now: Optional[datetime] = None) -> int:
        now = now or now_local()
        upcoming = self._events.list_between(now, now + self._lookahead)

        sent = 0
        for event in upcoming:
            user_ids = self._participations.list_user_ids_for_event(
                event.event_id, status=ParticipationStatus.REGISTERED
            )
            for user_id in user_ids:
                if self._notifications.exists(
                    user_id=user_id,
                    type=NotificationType.EVENT_REMINDER,
                    related_id=event.event_id,
                    related_type=RelatedType.EVENT,
                ):
                    continue
                self._notifications.create(event_reminder_notification(user_id=user_id, event=event))
                sent += 1

        logger.info("Reminder sweep: %d upcoming events, %d reminders sent", len(upcoming), sent)
        return sent
