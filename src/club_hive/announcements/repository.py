from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Announcement, AnnouncementView


class AnnouncementRepository(Protocol):
    def create(self, *, title: str, content: str, club_id: Optional[int], created_by: int) -> int:
        raise NotImplementedError

    def get_by_id(self, announcement_id: int) -> Optional[Announcement]:
        raise NotImplementedError

    def get_view(self, announcement_id: int) -> Optional[AnnouncementView]:
        raise NotImplementedError

    def list_feed(
        self,
        *,
        club_ids: Optional[Sequence[int]],
        limit: int,
        offset: int,
    ) -> Sequence[AnnouncementView]:
        """Newest first. ``club_ids=None`` means every announcement;
        otherwise global announcements plus those of the given clubs."""

        raise NotImplementedError

    def list_for_club(self, club_id: int) -> Sequence[AnnouncementView]:
        raise NotImplementedError

    def delete(self, announcement_id: int) -> bool:
        raise NotImplementedError
