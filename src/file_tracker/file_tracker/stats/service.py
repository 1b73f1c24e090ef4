from __future__ import annotations

from typing import Dict

from ..core.enums import FileStatus
from ..files.repository import FileRepository
from ..users.model import User
from ..users.repository import UserRepository


class StatsService:
    """Use case: dashboard counters, scoped by the actor's role."""

    def __init__(self, files: FileRepository, users: UserRepository):
        self._files = files
        self._users = users

    @staticmethod
    def _breakdown(counts: Dict[FileStatus, int]) -> Dict[str, int]:
        # All six statuses are always reported, even with no files.
        return {status.value: int(counts.get(status, 0)) for status in FileStatus}

    def compute(self, actor: User) -> dict:
        if actor.is_admin:
            return {
                "total_files": self._files.count(),
                "total_users": self._users.count(),
                "status_breakdown": self._breakdown(self._files.count_by_status()),
            }

        return {
            "assigned_files": self._files.count(assigned_to=actor.user_id),
            "uploaded_files": self._files.count(uploaded_by=actor.user_id),
            "status_breakdown": self._breakdown(self._files.count_by_status(assigned_to=actor.user_id)),
        }
