from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Announcement:
    """``club_id`` is None for a global (site-wide) announcement."""

    announcement_id: int
    title: str
    content: str
    club_id: Optional[int]
    created_by: int
    created_at: Optional[datetime] = None

    @property
    def is_global(self) -> bool:
        return self.club_id is None


@dataclass(frozen=True)
class AnnouncementView:
    """Read-model with author and club names for the feed."""

    announcement_id: int
    title: str
    content: str
    club_id: Optional[int]
    club_name: Optional[str]
    created_by: int
    author_name: str
    author_email: str
    created_at: Optional[datetime] = None
