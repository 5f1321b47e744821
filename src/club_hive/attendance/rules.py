from __future__ import annotations

from ..core.enums import ParticipationStatus


def points_transition(previous: ParticipationStatus, new: ParticipationStatus, event_points: int) -> int:
    """Signed points change caused by moving a participation from ``previous`` to ``new``.

    Only transitions into or out of ``attended`` carry points; every other
    transition, including a repeat of the current status, is worth 0.
    """
    was_attended = previous == ParticipationStatus.ATTENDED
    is_attended = new == ParticipationStatus.ATTENDED
    if is_attended and not was_attended:
        return int(event_points)
    if was_attended and not is_attended:
        return -int(event_points)
    return 0


def apply_delta(current_points: int, delta: int) -> int:
    """Point balances never go below zero."""
    return max(0, int(current_points) + int(delta))
