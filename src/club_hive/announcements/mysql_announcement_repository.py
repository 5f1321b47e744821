from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Announcement, AnnouncementView
from .repository import AnnouncementRepository

_VIEW_SELECT = """
    SELECT a.announcement_id, a.title, a.content, a.club_id, a.created_by, a.created_at,
           c.name AS club_name, u.name AS author_name, u.email AS author_email
    FROM announcements a
    JOIN users u ON u.user_id = a.created_by
    LEFT JOIN clubs c ON c.club_id = a.club_id
"""


def _to_view(r: dict) -> AnnouncementView:
    return AnnouncementView(
        announcement_id=int(r["announcement_id"]),
        title=r["title"],
        content=r["content"],
        club_id=int(r["club_id"]) if r.get("club_id") is not None else None,
        club_name=r.get("club_name"),
        created_by=int(r["created_by"]),
        author_name=r["author_name"],
        author_email=r["author_email"],
        created_at=r.get("created_at"),
    )


class MySQLAnnouncementRepository(AnnouncementRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, title: str, content: str, club_id: Optional[int], created_by: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO announcements (title, content, club_id, created_by) VALUES (%s, %s, %s, %s)",
                (title, content, club_id, int(created_by)),
            )
            return int(cur.lastrowid)

    def get_by_id(self, announcement_id: int) -> Optional[Announcement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT announcement_id, title, content, club_id, created_by, created_at
                FROM announcements
                WHERE announcement_id=%s
                """,
                (int(announcement_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Announcement(
                announcement_id=int(r["announcement_id"]),
                title=r["title"],
                content=r["content"],
                club_id=int(r["club_id"]) if r.get("club_id") is not None else None,
                created_by=int(r["created_by"]),
                created_at=r.get("created_at"),
            )

    def get_view(self, announcement_id: int) -> Optional[AnnouncementView]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_VIEW_SELECT} WHERE a.announcement_id=%s", (int(announcement_id),))
            r = fetchone(cur)
            return _to_view(r) if r else None

    def list_feed(
        self,
        *,
        club_ids: Optional[Sequence[int]],
        limit: int,
        offset: int,
    ) -> Sequence[AnnouncementView]:
        params: list[object] = []
        where = ""
        if club_ids is not None:
            where = "WHERE a.club_id IS NULL"
            if club_ids:
                where += f" OR a.club_id IN ({in_clause(club_ids)})"
                params.extend(int(c) for c in club_ids)
        params.extend([int(limit), int(offset)])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_VIEW_SELECT} {where} ORDER BY a.created_at DESC, a.announcement_id DESC LIMIT %s OFFSET %s",
                tuple(params),
            )
            return [_to_view(r) for r in fetchall(cur)]

    def list_for_club(self, club_id: int) -> Sequence[AnnouncementView]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_VIEW_SELECT} WHERE a.club_id=%s ORDER BY a.created_at DESC, a.announcement_id DESC",
                (int(club_id),),
            )
            return [_to_view(r) for r in fetchall(cur)]

    def delete(self, announcement_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM announcements WHERE announcement_id=%s", (int(announcement_id),))
            return cur.rowcount > 0
