from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import ParticipationStatus


@dataclass(frozen=True)
class AttendanceChange:
    """Outcome of one attendance update for one (event, user) pair."""

    event_id: int
    user_id: int
    previous_status: ParticipationStatus
    status: ParticipationStatus
    points_delta: int
    user_points: int
    notified: bool
