from __future__ import annotations

import dataclasses
import logging
import uuid
from datetime import datetime
from typing import Callable, List, Optional

from ..common.datetime_utils import now_local
from ..core.enums import NotificationType
from ..core.exceptions import NotFoundError
from ..users.model import User
from .model import Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Use cases: a user's own notification inbox.

    Inbox operations are scoped to the actor; admins get no cross-user access.
    """

    def __init__(self, notifications: NotificationRepository, *, clock: Callable[[], datetime] = now_local):
        self._notifications = notifications
        self._clock = clock

    def notify(
        self,
        *,
        recipient_id: str,
        type: NotificationType,
        message: str,
        file_id: Optional[str] = None,
    ) -> Notification:
        notification = self._notifications.create(
            Notification(
                notification_id=str(uuid.uuid4()),
                user_id=recipient_id,
                type=type,
                message=message,
                file_id=file_id,
                created_at=self._clock(),
            )
        )
        logger.debug("Notification %s (%s) -> %s", notification.notification_id, type.value, recipient_id)
        return notification

    def list(self, actor: User) -> List[Notification]:
        return list(self._notifications.list_for_user(actor.user_id))

    def mark_read(self, actor: User, notification_id: str) -> Notification:
        existing = self._notifications.get_for_user(notification_id=notification_id, user_id=actor.user_id)
        if not existing:
            raise NotFoundError("Notification not found")
        self._notifications.mark_read(notification_id=notification_id, user_id=actor.user_id)
        return dataclasses.replace(existing, read=True)

    def mark_all_read(self, actor: User) -> List[Notification]:
        updated = self._notifications.mark_all_read(actor.user_id)
        logger.debug("Marked %d notifications read for %s", updated, actor.user_id)
        return self.list(actor)

    def delete(self, actor: User, notification_id: str) -> None:
        if not self._notifications.delete_for_user(notification_id=notification_id, user_id=actor.user_id):
            raise NotFoundError("Notification not found")
