from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import NotificationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Notification
from .repository import NotificationRepository

_COLUMNS = "notification_id, user_id, type, message, file_id, created_at, is_read"


def _row_to_notification(row: dict) -> Notification:
    return Notification(
        notification_id=row["notification_id"],
        user_id=row["user_id"],
        type=NotificationType(row["type"]),
        message=row["message"],
        file_id=row.get("file_id"),
        created_at=row["created_at"],
        read=bool(row.get("is_read", False)),
    )


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, notification: Notification) -> Notification:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO notifications({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s)",
                (
                    notification.notification_id,
                    notification.user_id,
                    notification.type.value,
                    notification.message,
                    notification.file_id,
                    notification.created_at,
                    int(notification.read),
                ),
            )
        return notification

    def list_for_user(self, user_id: str) -> Sequence[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM notifications WHERE user_id=%s ORDER BY created_at DESC",
                (user_id,),
            )
            return [_row_to_notification(r) for r in fetchall(cur)]

    def get_for_user(self, *, notification_id: str, user_id: str) -> Optional[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM notifications WHERE notification_id=%s AND user_id=%s",
                (notification_id, user_id),
            )
            row = fetchone(cur)
            return _row_to_notification(row) if row else None

    def mark_read(self, *, notification_id: str, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE notifications SET is_read=1 WHERE notification_id=%s AND user_id=%s",
                (notification_id, user_id),
            )
            return cur.rowcount > 0

    def mark_all_read(self, user_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE notifications SET is_read=1 WHERE user_id=%s AND is_read=0", (user_id,))
            return int(cur.rowcount)

    def delete_for_user(self, *, notification_id: str, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM notifications WHERE notification_id=%s AND user_id=%s",
                (notification_id, user_id),
            )
            return cur.rowcount > 0
