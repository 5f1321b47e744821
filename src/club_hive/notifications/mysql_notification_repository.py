from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import NotificationType, RelatedType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import NewNotification, Notification
from .repository import NotificationRepository

_COLUMNS = "notification_id, user_id, type, title, content, is_read, related_id, related_type, created_at"

INSERT_SQL = """
    INSERT INTO notifications (user_id, type, title, content, is_read, related_id, related_type)
    VALUES (%s, %s, %s, %s, 0, %s, %s)
"""


def insert_params(item: NewNotification) -> tuple:
    return (
        int(item.user_id),
        item.type.value,
        item.title,
        item.content,
        item.related_id,
        item.related_type.value if item.related_type else None,
    )


def _to_notification(r: dict) -> Notification:
    return Notification(
        notification_id=int(r["notification_id"]),
        user_id=int(r["user_id"]),
        type=NotificationType(r["type"]),
        title=r["title"],
        content=r["content"],
        is_read=bool(r["is_read"]),
        related_id=int(r["related_id"]) if r.get("related_id") is not None else None,
        related_type=RelatedType(r["related_type"]) if r.get("related_type") else None,
        created_at=r.get("created_at"),
    )


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, item: NewNotification) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(INSERT_SQL, insert_params(item))
            return int(cur.lastrowid)

    def create_many(self, items: Sequence[NewNotification]) -> int:
        if not items:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(INSERT_SQL, [insert_params(i) for i in items])
            return len(items)

    def exists(
        self,
        *,
        user_id: int,
        type: NotificationType,
        related_id: int,
        related_type: RelatedType,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT 1 AS found
                FROM notifications
                WHERE user_id=%s AND type=%s AND related_id=%s AND related_type=%s
                LIMIT 1
                """,
                (int(user_id), type.value, int(related_id), related_type.value),
            )
            return fetchone(cur) is not None

    def get_for_user(self, *, notification_id: int, user_id: int) -> Optional[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM notifications WHERE notification_id=%s AND user_id=%s",
                (int(notification_id), int(user_id)),
            )
            r = fetchone(cur)
            return _to_notification(r) if r else None

    def list_for_user(
        self,
        *,
        user_id: int,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[Notification]:
        where = "user_id=%s" + (" AND is_read=0" if unread_only else "")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM notifications
                WHERE {where}
                ORDER BY created_at DESC, notification_id DESC
                LIMIT %s OFFSET %s
                """,
                (int(user_id), int(limit), int(offset)),
            )
            return [_to_notification(r) for r in fetchall(cur)]

    def count_unread(self, *, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM notifications WHERE user_id=%s AND is_read=0", (int(user_id),))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def mark_read(self, *, notification_id: int, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE notifications SET is_read=1 WHERE notification_id=%s AND user_id=%s",
                (int(notification_id), int(user_id)),
            )
            return cur.rowcount > 0

    def mark_all_read(self, *, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE notifications SET is_read=1 WHERE user_id=%s AND is_read=0", (int(user_id),))
            return int(cur.rowcount)

    def delete(self, *, notification_id: int, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM notifications WHERE notification_id=%s AND user_id=%s",
                (int(notification_id), int(user_id)),
            )
            return cur.rowcount > 0
