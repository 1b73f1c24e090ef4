from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    USER = "user"


class FileStatus(str, Enum):
    """Workflow stage of a file record, stored verbatim in the database."""

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    REJECT = "Reject"
    ARCHIVED = "Archived"
    URGENT = "Urgent"


class FileAction(str, Enum):
    VIEW = "view"
    UPDATE = "update"
    DELETE = "delete"


class NotificationType(str, Enum):
    FILE_CREATED = "file_created"
    FILE_UPDATED = "file_updated"
    FILE_DELETED = "file_deleted"
    STATUS_CHANGED = "status_changed"
