from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import MembershipRole, MembershipStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Membership, MembershipDetail
from .repository import MembershipRepository

_DETAIL_SELECT = """
    SELECT m.membership_id, m.user_id, m.club_id, m.role, m.status, m.created_at,
           u.name AS user_name, u.email AS user_email, c.name AS club_name
    FROM club_memberships m
    JOIN users u ON u.user_id = m.user_id
    JOIN clubs c ON c.club_id = m.club_id
"""


def _to_detail(r: dict) -> MembershipDetail:
    return MembershipDetail(
        membership_id=int(r["membership_id"]),
        user_id=int(r["user_id"]),
        club_id=int(r["club_id"]),
        role=MembershipRole(r["role"]),
        status=MembershipStatus(r["status"]),
        user_name=r["user_name"],
        user_email=r["user_email"],
        club_name=r["club_name"],
        created_at=r.get("created_at"),
    )


class MySQLMembershipRepository(MembershipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, user_id: int, club_id: int) -> Optional[Membership]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT membership_id, user_id, club_id, role, status, created_at
                FROM club_memberships
                WHERE user_id=%s AND club_id=%s
                """,
                (int(user_id), int(club_id)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Membership(
                membership_id=int(r["membership_id"]),
                user_id=int(r["user_id"]),
                club_id=int(r["club_id"]),
                role=MembershipRole(r["role"]),
                status=MembershipStatus(r["status"]),
                created_at=r.get("created_at"),
            )

    def create(self, *, user_id: int, club_id: int, role: MembershipRole, status: MembershipStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO club_memberships (user_id, club_id, role, status) VALUES (%s, %s, %s, %s)",
                (int(user_id), int(club_id), role.value, status.value),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        membership_id: int,
        role: Optional[MembershipRole] = None,
        status: Optional[MembershipStatus] = None,
    ) -> bool:
        sets: list[str] = []
        params: list[object] = []
        if role is not None:
            sets.append("role=%s")
            params.append(role.value)
        if status is not None:
            sets.append("status=%s")
            params.append(status.value)
        if not sets:
            return True
        params.append(int(membership_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE club_memberships SET {', '.join(sets)} WHERE membership_id=%s", tuple(params))
            return cur.rowcount >= 0

    def delete(self, membership_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM club_memberships WHERE membership_id=%s", (int(membership_id),))
            return cur.rowcount > 0

    def list_for_club(self, club_id: int, *, status: Optional[MembershipStatus] = None) -> Sequence[MembershipDetail]:
        clauses = ["m.club_id=%s"]
        params: list[object] = [int(club_id)]
        if status is not None:
            clauses.append("m.status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_DETAIL_SELECT} WHERE {' AND '.join(clauses)} ORDER BY m.role DESC, u.name ASC",
                tuple(params),
            )
            return [_to_detail(r) for r in fetchall(cur)]

    def list_for_user(self, user_id: int, *, status: Optional[MembershipStatus] = None) -> Sequence[MembershipDetail]:
        clauses = ["m.user_id=%s"]
        params: list[object] = [int(user_id)]
        if status is not None:
            clauses.append("m.status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_DETAIL_SELECT} WHERE {' AND '.join(clauses)} ORDER BY m.created_at DESC",
                tuple(params),
            )
            return [_to_detail(r) for r in fetchall(cur)]

    def list_user_ids(self, club_id: int, *, status: Optional[MembershipStatus] = None) -> Sequence[int]:
        sql = "SELECT user_id FROM club_memberships WHERE club_id=%s"
        params: list[object] = [int(club_id)]
        if status is not None:
            sql += " AND status=%s"
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + " ORDER BY user_id", tuple(params))
            return [int(r["user_id"]) for r in fetchall(cur)]
