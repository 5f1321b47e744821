from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import NotificationType, RelatedType


@dataclass(frozen=True)
class Notification:
    notification_id: int
    user_id: int
    type: NotificationType
    title: str
    content: str
    is_read: bool
    related_id: Optional[int]
    related_type: Optional[RelatedType]
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class NewNotification:
    """Row to insert; ids and timestamps come from the store."""

    user_id: int
    type: NotificationType
    title: str
    content: str
    related_id: Optional[int] = None
    related_type: Optional[RelatedType] = None
