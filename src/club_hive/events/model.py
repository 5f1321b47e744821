from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.constants import DEFAULT_EVENT_POINTS
from ..core.enums import ParticipationStatus


@dataclass(frozen=True)
class Event:
    event_id: int
    club_id: int
    title: str
    description: Optional[str]
    venue: Optional[str]
    event_date: datetime
    points: int = DEFAULT_EVENT_POINTS
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class EventListing:
    """Read-model for event lists (event + owning club name)."""

    event_id: int
    club_id: int
    club_name: str
    title: str
    description: Optional[str]
    venue: Optional[str]
    event_date: datetime
    points: int


@dataclass(frozen=True)
class Participation:
    """Roster entry of one user for one event. Unique per (event, user)."""

    participation_id: int
    event_id: int
    user_id: int
    status: ParticipationStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class Participant:
    """Read-model: participation joined with the user's name and email."""

    participation_id: int
    event_id: int
    user_id: int
    user_name: str
    user_email: str
    status: ParticipationStatus
