from __future__ import annotations

from typing import Sequence

from ..core.constants import DEFAULT_PAGE_LIMIT
from ..core.exceptions import NotFoundError, ValidationError
from ..core.identity import Identity
from .model import Notification
from .repository import NotificationRepository


class NotificationService:
    """Use case: a user's own notification inbox."""

    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def list_mine(
        self,
        identity: Identity,
        *,
        unread_only: bool = False,
        limit: int = DEFAULT_PAGE_LIMIT,
        offset: int = 0,
    ) -> Sequence[Notification]:
        if limit <= 0 or offset < 0:
            raise ValidationError("limit must be positive and offset non-negative")
        return self._notifications.list_for_user(
            user_id=identity.user_id,
            unread_only=unread_only,
            limit=limit,
            offset=offset,
        )

    def unread_count(self, identity: Identity) -> int:
        return self._notifications.count_unread(user_id=identity.user_id)

    def mark_read(self, identity: Identity, *, notification_id: int) -> Notification:
        if not self._notifications.get_for_user(notification_id=int(notification_id), user_id=identity.user_id):
            raise NotFoundError("Notification not found")
        self._notifications.mark_read(notification_id=int(notification_id), user_id=identity.user_id)
        return self._notifications.get_for_user(notification_id=int(notification_id), user_id=identity.user_id)

    def mark_all_read(self, identity: Identity) -> int:
        return self._notifications.mark_all_read(user_id=identity.user_id)

    def delete(self, identity: Identity, *, notification_id: int) -> None:
        if not self._notifications.delete(notification_id=int(notification_id), user_id=identity.user_id):
            raise NotFoundError("Notification not found")
