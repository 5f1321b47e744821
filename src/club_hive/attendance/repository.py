from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import ParticipationStatus
from ..notifications.model import NewNotification


class AttendanceLedger(Protocol):
    """Write side of attendance: roster status, point balance and award notice.

    ``record_attendance`` applies all three in one transaction.
    """

    def record_attendance(
        self,
        *,
        participation_id: int,
        status: ParticipationStatus,
        user_id: int,
        user_points: Optional[int] = None,
        notification: Optional[NewNotification] = None,
    ) -> None:
        """Persist ``status``; set the user's balance to ``user_points`` when given;
        insert ``notification`` when given."""

        raise NotImplementedError
