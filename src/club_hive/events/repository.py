from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ParticipationStatus
from .model import Event, EventListing, Participant, Participation


class EventRepository(Protocol):
    def get_by_id(self, event_id: int) -> Optional[Event]:
        raise NotImplementedError

    def list_all(self, *, club_id: Optional[int] = None) -> Sequence[EventListing]:
        raise NotImplementedError

    def create(
        self,
        *,
        club_id: int,
        title: str,
        description: Optional[str],
        venue: Optional[str],
        event_date: datetime,
        points: int,
    ) -> int:
        raise NotImplementedError

    def list_between(self, start: datetime, end: datetime) -> Sequence[Event]:
        """Events whose date falls within ``[start, end]``."""

        raise NotImplementedError


class ParticipationRepository(Protocol):
    def get(self, *, event_id: int, user_id: int) -> Optional[Participation]:
        raise NotImplementedError

    def create(self, *, event_id: int, user_id: int, status: ParticipationStatus) -> int:
        """Insert a roster entry. The store rejects a second row for the same pair."""

        raise NotImplementedError

    def delete(self, participation_id: int) -> bool:
        raise NotImplementedError

    def list_for_event(self, event_id: int) -> Sequence[Participant]:
        raise NotImplementedError

    def list_user_ids_for_event(self, event_id: int, *, status: ParticipationStatus) -> Sequence[int]:
        raise NotImplementedError
