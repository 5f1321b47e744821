from __future__ import annotations

from datetime import datetime
from typing import Dict, Sequence

from ..core.enums import ParticipationStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ActiveMember, AttendedEvent, ClubCounts, ClubMemberCount, MemberCounts, SystemCounts
from .repository import AnalyticsRepository


def _scalar(cur, sql: str, params: tuple = ()) -> int:
    cur.execute(sql, params)
    r = fetchone(cur)
    if not r:
        return 0
    value = next(iter(r.values()))
    return int(value or 0)


class MySQLAnalyticsRepository(AnalyticsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def system_counts(self, *, since: datetime) -> SystemCounts:
        with db_cursor(self._conn_factory) as (_, cur):
            return SystemCounts(
                users=_scalar(cur, "SELECT COUNT(*) AS n FROM users WHERE role <> 'admin'"),
                clubs=_scalar(cur, "SELECT COUNT(*) AS n FROM clubs"),
                events=_scalar(cur, "SELECT COUNT(*) AS n FROM events"),
                active_members=_scalar(
                    cur, "SELECT COUNT(DISTINCT user_id) AS n FROM club_memberships WHERE status='approved'"
                ),
                recent_events=_scalar(cur, "SELECT COUNT(*) AS n FROM events WHERE created_at >= %s", (since,)),
                recent_memberships=_scalar(
                    cur,
                    "SELECT COUNT(*) AS n FROM club_memberships WHERE status='approved' AND created_at >= %s",
                    (since,),
                ),
                participations=_scalar(cur, "SELECT COUNT(*) AS n FROM event_participations"),
                attended=_scalar(cur, "SELECT COUNT(*) AS n FROM event_participations WHERE status='attended'"),
            )

    def top_clubs(self, *, limit: int) -> Sequence[ClubMemberCount]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT c.club_id, c.name, COUNT(m.membership_id) AS member_count
                FROM clubs c
                LEFT JOIN club_memberships m ON m.club_id = c.club_id AND m.status = 'approved'
                GROUP BY c.club_id, c.name
                ORDER BY member_count DESC, c.name ASC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [
                ClubMemberCount(club_id=int(r["club_id"]), name=r["name"], member_count=int(r["member_count"]))
                for r in fetchall(cur)
            ]

    def club_counts(self, club_id: int) -> ClubCounts:
        club_id = int(club_id)
        with db_cursor(self._conn_factory) as (_, cur):
            return ClubCounts(
                members=_scalar(
                    cur,
                    "SELECT COUNT(*) AS n FROM club_memberships WHERE club_id=%s AND status='approved'",
                    (club_id,),
                ),
                board_members=_scalar(
                    cur,
                    "SELECT COUNT(*) AS n FROM club_memberships WHERE club_id=%s AND status='approved' AND role='board'",
                    (club_id,),
                ),
                pending_requests=_scalar(
                    cur,
                    "SELECT COUNT(*) AS n FROM club_memberships WHERE club_id=%s AND status='pending'",
                    (club_id,),
                ),
                events=_scalar(cur, "SELECT COUNT(*) AS n FROM events WHERE club_id=%s", (club_id,)),
                participations=_scalar(
                    cur,
                    """
                    SELECT COUNT(*) AS n FROM event_participations p
                    JOIN events e ON e.event_id = p.event_id
                    WHERE e.club_id=%s
                    """,
                    (club_id,),
                ),
                attended=_scalar(
                    cur,
                    """
                    SELECT COUNT(*) AS n FROM event_participations p
                    JOIN events e ON e.event_id = p.event_id
                    WHERE e.club_id=%s AND p.status='attended'
                    """,
                    (club_id,),
                ),
            )

    def approved_members_before(self, club_id: int, before: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return _scalar(
                cur,
                "SELECT COUNT(*) AS n FROM club_memberships WHERE club_id=%s AND status='approved' AND created_at < %s",
                (int(club_id), before),
            )

    def most_active_members(self, club_id: int, *, limit: int) -> Sequence[ActiveMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.user_id, u.name, u.email, COUNT(p.participation_id) AS events_attended
                FROM club_memberships m
                JOIN users u ON u.user_id = m.user_id
                LEFT JOIN events e ON e.club_id = m.club_id
                LEFT JOIN event_participations p
                       ON p.event_id = e.event_id AND p.user_id = m.user_id AND p.status = 'attended'
                WHERE m.club_id=%s AND m.status='approved'
                GROUP BY u.user_id, u.name, u.email
                ORDER BY events_attended DESC, u.name ASC
                LIMIT %s
                """,
                (int(club_id), int(limit)),
            )
            return [
                ActiveMember(
                    user_id=int(r["user_id"]),
                    name=r["name"],
                    email=r["email"],
                    events_attended=int(r["events_attended"]),
                )
                for r in fetchall(cur)
            ]

    def event_status_counts(self, event_id: int) -> Dict[ParticipationStatus, int]:
        counts = {status: 0 for status in ParticipationStatus}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT status, COUNT(*) AS n FROM event_participations WHERE event_id=%s GROUP BY status",
                (int(event_id),),
            )
            for r in fetchall(cur):
                counts[ParticipationStatus(r["status"])] = int(r["n"])
        return counts

    def member_counts(self, user_id: int) -> MemberCounts:
        user_id = int(user_id)
        with db_cursor(self._conn_factory) as (_, cur):
            return MemberCounts(
                clubs=_scalar(
                    cur,
                    "SELECT COUNT(*) AS n FROM club_memberships WHERE user_id=%s AND status='approved'",
                    (user_id,),
                ),
                registered=_scalar(
                    cur, "SELECT COUNT(*) AS n FROM event_participations WHERE user_id=%s", (user_id,)
                ),
                attended=_scalar(
                    cur,
                    "SELECT COUNT(*) AS n FROM event_participations WHERE user_id=%s AND status='attended'",
                    (user_id,),
                ),
            )

    def points_earned_between(self, user_id: int, start: datetime, end: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return _scalar(
                cur,
                """
                SELECT COALESCE(SUM(e.points), 0) AS n
                FROM event_participations p
                JOIN events e ON e.event_id = p.event_id
                WHERE p.user_id=%s AND p.status='attended' AND p.updated_at >= %s AND p.updated_at < %s
                """,
                (int(user_id), start, end),
            )

    def recent_attended_events(self, user_id: int, *, limit: int) -> Sequence[AttendedEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT e.event_id, e.title, e.event_date, e.points, c.name AS club_name
                FROM event_participations p
                JOIN events e ON e.event_id = p.event_id
                JOIN clubs c ON c.club_id = e.club_id
                WHERE p.user_id=%s AND p.status='attended'
                ORDER BY p.updated_at DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [
                AttendedEvent(
                    event_id=int(r["event_id"]),
                    title=r["title"],
                    event_date=r["event_date"],
                    points=int(r["points"]),
                    club_name=r["club_name"],
                )
                for r in fetchall(cur)
            ]
