from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..core.enums import FileStatus


@dataclass(frozen=True)
class FileRecord:
    """Domain entity: an administrative dossier routed between users."""

    file_id: str
    file_number: str
    dispatched_date: date
    assigned_to: str
    current_status: FileStatus
    remarks: Optional[str]
    uploaded_by: str
    upload_date: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.file_id,
            "fileNumber": self.file_number,
            "dispatchedDate": self.dispatched_date.isoformat(),
            "to": self.assigned_to,
            "currentStatus": self.current_status.value,
            "remarks": self.remarks,
            "uploadedBy": self.uploaded_by,
            "uploadDate": self.upload_date.isoformat(),
        }


@dataclass(frozen=True)
class FileView:
    """A file record enriched with the display names a client needs."""

    record: FileRecord
    uploaded_by_name: Optional[str] = None
    assigned_to_name: Optional[str] = None

    def to_dict(self) -> dict:
        out = self.record.to_dict()
        if self.uploaded_by_name is not None:
            out["uploadedByName"] = self.uploaded_by_name
        if self.assigned_to_name is not None:
            out["assignedToName"] = self.assigned_to_name
        return out


@dataclass(frozen=True)
class FileFields:
    """Raw client-supplied values for a create or a partial update."""

    file_number: Any = None
    dispatched_date: Any = None
    to: Any = None
    current_status: Any = None
    remarks: Any = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "FileFields":
        return cls(
            file_number=payload.get("fileNumber"),
            dispatched_date=payload.get("dispatchedDate"),
            to=payload.get("to"),
            current_status=payload.get("currentStatus"),
            remarks=payload.get("remarks"),
        )
