from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ClubStatus, MembershipStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Club, ClubListing
from .repository import ClubRepository


def _to_club(row: dict) -> Club:
    return Club(
        club_id=int(row["club_id"]),
        name=row["name"],
        description=row.get("description"),
        status=ClubStatus(row["status"]),
        created_at=row.get("created_at"),
    )


class MySQLClubRepository(ClubRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, club_id: int) -> Optional[Club]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT club_id, name, description, status, created_at FROM clubs WHERE club_id=%s",
                (int(club_id),),
            )
            row = fetchone(cur)
            return _to_club(row) if row else None

    def get_by_name(self, name: str) -> Optional[Club]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT club_id, name, description, status, created_at FROM clubs WHERE name=%s",
                (name,),
            )
            row = fetchone(cur)
            return _to_club(row) if row else None

    def list_with_member_counts(self) -> Sequence[ClubListing]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT c.club_id, c.name, c.description, c.status,
                       COUNT(m.membership_id) AS member_count
                FROM clubs c
                LEFT JOIN club_memberships m ON m.club_id = c.club_id AND m.status = %s
                GROUP BY c.club_id, c.name, c.description, c.status
                ORDER BY c.name ASC
                """,
                (MembershipStatus.APPROVED.value,),
            )
            return [
                ClubListing(
                    club_id=int(r["club_id"]),
                    name=r["name"],
                    description=r.get("description"),
                    status=ClubStatus(r["status"]),
                    member_count=int(r["member_count"] or 0),
                )
                for r in fetchall(cur)
            ]

    def create(self, *, name: str, description: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO clubs (name, description, status) VALUES (%s, %s, %s)",
                (name, description, ClubStatus.ACTIVE.value),
            )
            return int(cur.lastrowid)

    def update(self, *, club_id: int, name: str, description: Optional[str], status: ClubStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE clubs SET name=%s, description=%s, status=%s WHERE club_id=%s",
                (name, description, status.value, int(club_id)),
            )
            # MySQL reports 0 affected rows when values are unchanged.
            return cur.rowcount >= 0

    def delete(self, club_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM clubs WHERE club_id=%s", (int(club_id),))
            return cur.rowcount > 0
