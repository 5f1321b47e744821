from __future__ import annotations

from typing import Optional

from ..core.enums import ParticipationStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from ..notifications.model import NewNotification
from ..notifications.mysql_notification_repository import INSERT_SQL, insert_params
from .repository import AttendanceLedger


class MySQLAttendanceLedger(AttendanceLedger):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def record_attendance(
        self,
        *,
        participation_id: int,
        status: ParticipationStatus,
        user_id: int,
        user_points: Optional[int] = None,
        notification: Optional[NewNotification] = None,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE event_participations SET status=%s WHERE participation_id=%s",
                (status.value, int(participation_id)),
            )
            if user_points is not None:
                cur.execute(
                    "UPDATE users SET points=%s WHERE user_id=%s",
                    (max(0, int(user_points)), int(user_id)),
                )
            if notification is not None:
                cur.execute(INSERT_SQL, insert_params(notification))
