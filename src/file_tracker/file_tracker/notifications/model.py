from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import NotificationType


@dataclass(frozen=True)
class Notification:
    notification_id: str
    user_id: str
    type: NotificationType
    message: str
    file_id: Optional[str]
    created_at: datetime
    read: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.notification_id,
            "userId": self.user_id,
            "type": self.type.value,
            "message": self.message,
            "fileId": self.file_id,
            "createdAt": self.created_at.isoformat(),
            "read": self.read,
        }
