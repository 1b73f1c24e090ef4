from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Notification


class NotificationRepository(Protocol):
    """Repository interface for notifications.

    Every lookup and mutation is keyed by (notification_id, user_id) so a
    caller can only ever reach the recipient's own records.
    """

    def create(self, notification: Notification) -> Notification:
        raise NotImplementedError

    def list_for_user(self, user_id: str) -> Sequence[Notification]:
        """Newest first."""
        raise NotImplementedError

    def get_for_user(self, *, notification_id: str, user_id: str) -> Optional[Notification]:
        raise NotImplementedError

    def mark_read(self, *, notification_id: str, user_id: str) -> bool:
        raise NotImplementedError

    def mark_all_read(self, user_id: str) -> int:
        raise NotImplementedError

    def delete_for_user(self, *, notification_id: str, user_id: str) -> bool:
        raise NotImplementedError
