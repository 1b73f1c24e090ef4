from __future__ import annotations

from typing import Dict, Optional, Protocol, Sequence

from ..core.enums import FileStatus
from .model import FileRecord


class FileRepository(Protocol):
    """Repository interface for file records.

    All list methods return records ordered by upload date, newest first.
    """

    def get_by_id(self, file_id: str) -> Optional[FileRecord]:
        raise NotImplementedError

    def get_by_file_number(self, file_number: str) -> Optional[FileRecord]:
        raise NotImplementedError

    def create(self, record: FileRecord) -> FileRecord:
        """Insert; raises ConflictError when the file number is taken."""
        raise NotImplementedError

    def update(self, record: FileRecord) -> bool:
        """Overwrite the mutable fields of the record matched by id."""
        raise NotImplementedError

    def delete(self, file_id: str) -> bool:
        raise NotImplementedError

    def list_assigned_to(self, user_id: str, *, limit: Optional[int] = None) -> Sequence[FileRecord]:
        raise NotImplementedError

    def list_uploaded_by(self, user_id: str, *, limit: Optional[int] = None) -> Sequence[FileRecord]:
        raise NotImplementedError

    def list_all(self, *, limit: Optional[int] = None) -> Sequence[FileRecord]:
        raise NotImplementedError

    def count(self, *, assigned_to: Optional[str] = None, uploaded_by: Optional[str] = None) -> int:
        raise NotImplementedError

    def count_by_status(self, *, assigned_to: Optional[str] = None) -> Dict[FileStatus, int]:
        """Counts per status; statuses with no files may be absent."""
        raise NotImplementedError
