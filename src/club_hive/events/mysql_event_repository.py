from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Event, EventListing
from .repository import EventRepository

_COLUMNS = "event_id, club_id, title, description, venue, event_date, points, created_at"


def _to_event(r: dict) -> Event:
    return Event(
        event_id=int(r["event_id"]),
        club_id=int(r["club_id"]),
        title=r["title"],
        description=r.get("description"),
        venue=r.get("venue"),
        event_date=r["event_date"],
        points=int(r["points"]),
        created_at=r.get("created_at"),
    )


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, event_id: int) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM events WHERE event_id=%s", (int(event_id),))
            r = fetchone(cur)
            return _to_event(r) if r else None

    def list_all(self, *, club_id: Optional[int] = None) -> Sequence[EventListing]:
        sql = """
            SELECT e.event_id, e.club_id, c.name AS club_name, e.title, e.description,
                   e.venue, e.event_date, e.points
            FROM events e
            JOIN clubs c ON c.club_id = e.club_id
        """
        params: tuple = ()
        if club_id is not None:
            sql += " WHERE e.club_id=%s"
            params = (int(club_id),)
        sql += " ORDER BY e.event_date ASC, e.event_id ASC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [
                EventListing(
                    event_id=int(r["event_id"]),
                    club_id=int(r["club_id"]),
                    club_name=r["club_name"],
                    title=r["title"],
                    description=r.get("description"),
                    venue=r.get("venue"),
                    event_date=r["event_date"],
                    points=int(r["points"]),
                )
                for r in fetchall(cur)
            ]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO events (club_id, title, description, venue, event_date, points)
                VALUES (%s, %s, %s, %s, %s, %s)
                """,
                (int(club_id), title, description, venue, event_date, int(points)),
            )
            return int(cur.lastrowid)

    def list_between(self, start: datetime, end: datetime) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM events WHERE event_date BETWEEN %s AND %s ORDER BY event_date",
                (start, end),
            )
            return [_to_event(r) for r in fetchall(cur)]
