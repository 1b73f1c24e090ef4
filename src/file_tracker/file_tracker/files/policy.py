"""Authorization policy for file records.

Pure decisions: no storage access, so any hypothetical actor/file pair can be
evaluated. Every file endpoint goes through these functions.
"""

from __future__ import annotations

from ..core.enums import FileAction
from ..core.exceptions import AdminRequiredError, AuthorizationError
from ..users.model import User
from .model import FileRecord


def can_act(actor: User, action: FileAction, file: FileRecord) -> bool:
    if actor.is_admin:
        return True
    is_uploader = actor.user_id == file.uploaded_by
    if action == FileAction.DELETE:
        return is_uploader
    if action in (FileAction.VIEW, FileAction.UPDATE):
        return is_uploader or actor.user_id == file.assigned_to
    return False


def can_list_all(actor: User) -> bool:
    return actor.is_admin


def ensure_can_act(actor: User, action: FileAction, file: FileRecord) -> None:
    if not can_act(actor, action, file):
        raise AuthorizationError(f"You are not authorized to {action.value} this file")


def ensure_can_list_all(actor: User) -> None:
    if not can_list_all(actor):
        raise AdminRequiredError("Forbidden: Admins only")
