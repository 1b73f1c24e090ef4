from __future__ import annotations

import dataclasses
import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from ..common.datetime_utils import now_local, parse_date_field
from ..common.validators import optional_text, require_non_empty
from ..core.enums import FileAction, FileStatus, NotificationType
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..notifications.service import NotificationService
from ..users.model import User, display_name
from ..users.repository import UserRepository
from .model import FileFields, FileRecord, FileView
from .policy import ensure_can_act, ensure_can_list_all
from .repository import FileRepository

logger = logging.getLogger(__name__)

DUPLICATE_FILE = "File already exists"


def parse_status(value: Any) -> FileStatus:
    try:
        return FileStatus(str(value).strip())
    except ValueError:
        allowed = ", ".join(s.value for s in FileStatus)
        raise ValidationError(f"currentStatus must be one of: {allowed}", field="currentStatus")


class FileService:
    """Use cases: the file lifecycle (create, read, update, delete) with notifications."""

    def __init__(
        self,
        files: FileRepository,
        users: UserRepository,
        notifications: NotificationService,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._files = files
        self._users = users
        self._notifications = notifications
        self._clock = clock

    def _name_resolver(self) -> Callable[[str], str]:
        cache: Dict[str, str] = {}

        def resolve(user_id: str) -> str:
            if user_id not in cache:
                cache[user_id] = display_name(self._users.get_by_id(user_id))
            return cache[user_id]

        return resolve

    def _load(self, file_id: str) -> FileRecord:
        record = self._files.get_by_id(file_id)
        if not record:
            raise NotFoundError("File not found")
        return record

    def _notify(self, recipient_id: str, kind: NotificationType, message: str, file_id: str) -> None:
        # The file write already happened; a failed notification must not undo it.
        try:
            self._notifications.notify(recipient_id=recipient_id, type=kind, message=message, file_id=file_id)
        except Exception:
            logger.exception("Could not record %s notification for file %s", kind.value, file_id)

    def create(self, actor: User, fields: FileFields) -> FileRecord:
        file_number = require_non_empty(fields.file_number, "fileNumber")
        if fields.dispatched_date in (None, ""):
            raise ValidationError("dispatchedDate is required", field="dispatchedDate")
        dispatched_date = parse_date_field(fields.dispatched_date, "dispatchedDate")
        assigned_to = require_non_empty(fields.to, "to")
        status = parse_status(fields.current_status) if fields.current_status else FileStatus.PENDING

        if self._files.get_by_file_number(file_number):
            raise ConflictError(DUPLICATE_FILE)

        record = self._files.create(
            FileRecord(
                file_id=str(uuid.uuid4()),
                file_number=file_number,
                dispatched_date=dispatched_date,
                assigned_to=assigned_to,
                current_status=status,
                remarks=optional_text(fields.remarks),
                uploaded_by=actor.user_id,
                upload_date=self._clock(),
            )
        )
        logger.info("File %s (%s) created by %s for %s", record.file_id, file_number, actor.user_id, assigned_to)

        self._notify(
            assigned_to,
            NotificationType.FILE_CREATED,
            f"New file {file_number} has been assigned to you",
            record.file_id,
        )
        return record

    def get(self, actor: User, file_id: str) -> FileView:
        record = self._load(file_id)
        ensure_can_act(actor, FileAction.VIEW, record)
        name_of = self._name_resolver()
        return FileView(record, uploaded_by_name=name_of(record.uploaded_by), assigned_to_name=name_of(record.assigned_to))

    def list_assigned(self, actor: User, limit: Optional[int] = None) -> List[FileView]:
        name_of = self._name_resolver()
        return [
            FileView(r, uploaded_by_name=name_of(r.uploaded_by))
            for r in self._files.list_assigned_to(actor.user_id, limit=limit)
        ]

    def list_uploaded(self, actor: User) -> List[FileView]:
        name_of = self._name_resolver()
        return [
            FileView(r, assigned_to_name=name_of(r.assigned_to))
            for r in self._files.list_uploaded_by(actor.user_id)
        ]

    def list_all(self, actor: User, limit: Optional[int] = None) -> List[FileView]:
        ensure_can_list_all(actor)
        name_of = self._name_resolver()
        return [
            FileView(r, uploaded_by_name=name_of(r.uploaded_by), assigned_to_name=name_of(r.assigned_to))
            for r in self._files.list_all(limit=limit)
        ]

    def update(self, actor: User, file_id: str, patch: FileFields) -> FileView:
        """Apply the truthy fields of ``patch``; absent or falsy values keep the stored value."""
        previous = self._load(file_id)
        ensure_can_act(actor, FileAction.UPDATE, previous)

        changes: Dict[str, Any] = {}
        file_number = optional_text(patch.file_number) if patch.file_number else None
        if file_number:
            if file_number != previous.file_number:
                other = self._files.get_by_file_number(file_number)
                if other and other.file_id != previous.file_id:
                    raise ConflictError(DUPLICATE_FILE)
            changes["file_number"] = file_number
        if patch.dispatched_date:
            changes["dispatched_date"] = parse_date_field(patch.dispatched_date, "dispatchedDate")
        assigned_to = optional_text(patch.to) if patch.to else None
        if assigned_to:
            changes["assigned_to"] = assigned_to
        if patch.current_status:
            changes["current_status"] = parse_status(patch.current_status)
        remarks = optional_text(patch.remarks) if patch.remarks else None
        if remarks:
            changes["remarks"] = remarks

        updated = dataclasses.replace(previous, **changes)
        if not self._files.update(updated):
            raise NotFoundError("File not found")
        logger.info("File %s updated by %s (%s)", file_id, actor.user_id, ", ".join(sorted(changes)) or "no changes")

        if updated.current_status != previous.current_status:
            self._notify(
                previous.uploaded_by,
                NotificationType.FILE_UPDATED,
                f"File {updated.file_number} status changed to {updated.current_status.value}",
                updated.file_id,
            )

        name_of = self._name_resolver()
        return FileView(updated, uploaded_by_name=name_of(updated.uploaded_by), assigned_to_name=name_of(updated.assigned_to))

    def delete(self, actor: User, file_id: str) -> FileRecord:
        record = self._load(file_id)
        ensure_can_act(actor, FileAction.DELETE, record)

        if not self._files.delete(file_id):
            raise NotFoundError("File not found")
        logger.info("File %s (%s) deleted by %s", file_id, record.file_number, actor.user_id)

        self._notify(
            record.assigned_to,
            NotificationType.FILE_DELETED,
            f"File {record.file_number} has been deleted",
            record.file_id,
        )
        return record
