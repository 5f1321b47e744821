from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ParticipationStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Participant, Participation
from .repository import ParticipationRepository


class MySQLParticipationRepository(ParticipationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, event_id: int, user_id: int) -> Optional[Participation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT participation_id, event_id, user_id, status, created_at, updated_at
                FROM event_participations
                WHERE event_id=%s AND user_id=%s
                """,
                (int(event_id), int(user_id)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Participation(
                participation_id=int(r["participation_id"]),
                event_id=int(r["event_id"]),
                user_id=int(r["user_id"]),
                status=ParticipationStatus(r["status"]),
                created_at=r.get("created_at"),
                updated_at=r.get("updated_at"),
            )

    def create(self, *, event_id: int, user_id: int, status: ParticipationStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO event_participations (event_id, user_id, status) VALUES (%s, %s, %s)",
                (int(event_id), int(user_id), status.value),
            )
            return int(cur.lastrowid)

    def delete(self, participation_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM event_participations WHERE participation_id=%s", (int(participation_id),))
            return cur.rowcount > 0

    def list_for_event(self, event_id: int) -> Sequence[Participant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT p.participation_id, p.event_id, p.user_id, p.status,
                       u.name AS user_name, u.email AS user_email
                FROM event_participations p
                JOIN users u ON u.user_id = p.user_id
                WHERE p.event_id=%s
                ORDER BY u.name ASC
                """,
                (int(event_id),),
            )
            return [
                Participant(
                    participation_id=int(r["participation_id"]),
                    event_id=int(r["event_id"]),
                    user_id=int(r["user_id"]),
                    user_name=r["user_name"],
                    user_email=r["user_email"],
                    status=ParticipationStatus(r["status"]),
                )
                for r in fetchall(cur)
            ]

    def list_user_ids_for_event(self, event_id: int, *, status: ParticipationStatus) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id FROM event_participations WHERE event_id=%s AND status=%s",
                (int(event_id), status.value),
            )
            return [int(r["user_id"]) for r in fetchall(cur)]
