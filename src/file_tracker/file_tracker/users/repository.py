from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_phone_number(self, phone_number: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, user: User) -> User:
        """Persist a new user; raises ConflictError on a duplicate phone number."""
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
