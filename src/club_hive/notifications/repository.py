from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import NotificationType, RelatedType
from .model import NewNotification, Notification


class NotificationRepository(Protocol):
    def create(self, item: NewNotification) -> int:
        raise NotImplementedError

    def create_many(self, items: Sequence[NewNotification]) -> int:
        """Insert all rows in one transaction; either every row is written or none."""

        raise NotImplementedError

    def exists(
        self,
        *,
        user_id: int,
        type: NotificationType,
        related_id: int,
        related_type: RelatedType,
    ) -> bool:
        raise NotImplementedError

    def get_for_user(self, *, notification_id: int, user_id: int) -> Optional[Notification]:
        raise NotImplementedError

    def list_for_user(
        self,
        *,
        user_id: int,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[Notification]:
        raise NotImplementedError

    def count_unread(self, *, user_id: int) -> int:
        raise NotImplementedError

    def mark_read(self, *, notification_id: int, user_id: int) -> bool:
        raise NotImplementedError

    def mark_all_read(self, *, user_id: int) -> int:
        raise NotImplementedError

    def delete(self, *, notification_id: int, user_id: int) -> bool:
        raise NotImplementedError
