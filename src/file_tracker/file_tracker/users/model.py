from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import UNKNOWN_DISPLAY_NAME
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: Plain data object (no DB access code).
    """

    user_id: str
    phone_number: str
    password_hash: str
    first_name: str
    last_name: str
    department: str
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def display_name(user: Optional[User]) -> str:
    """Human-readable name: "first last", else phone number, else "Unknown"."""
    if user is None:
        return UNKNOWN_DISPLAY_NAME
    name = f"{user.first_name or ''} {user.last_name or ''}".strip()
    return name or user.phone_number or UNKNOWN_DISPLAY_NAME


def profile_dict(user: User) -> dict:
    return {
        "id": user.user_id,
        "phoneNumber": user.phone_number,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "name": display_name(user),
        "department": user.department,
        "role": user.role.value,
    }
