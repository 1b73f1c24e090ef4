from __future__ import annotations

import logging
import uuid
from datetime import timedelta
from typing import Any, Optional, Sequence

from flask_jwt_extended import create_access_token
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import optional_text, require_min_length, require_non_empty
from ..core.constants import DEFAULT_TOKEN_TTL_MINUTES, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConflictError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """Use cases: register, login and resolving the actor behind a token."""

    def __init__(self, users: UserRepository, *, token_ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES):
        self._users = users
        self._token_ttl = timedelta(minutes=int(token_ttl_minutes))

    def register(
        self,
        *,
        phone_number: Optional[str],
        password: Optional[str],
        first_name: Optional[str],
        last_name: Optional[str],
        department: Optional[str],
    ) -> User:
        phone_number = require_non_empty(phone_number, "phoneNumber")
        require_min_length(password, "password", MIN_PASSWORD_LENGTH)
        first_name = require_non_empty(first_name, "firstName")
        last_name = require_non_empty(last_name, "lastName")
        department = require_non_empty(department, "department")

        if self._users.get_by_phone_number(phone_number):
            raise ConflictError("User already exists")

        user = self._users.create_user(
            User(
                user_id=str(uuid.uuid4()),
                phone_number=phone_number,
                password_hash=generate_password_hash(password),
                first_name=first_name,
                last_name=last_name,
                department=department,
                role=Role.USER,
            )
        )
        logger.info("Registered user %s", user.user_id)
        return user

    def authenticate(self, phone_number: Any, password: Any) -> User:
        user = self._users.get_by_phone_number(optional_text(phone_number) or "")
        if not user or not isinstance(password, str):
            raise AuthenticationError(INVALID_CREDENTIALS)

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError(INVALID_CREDENTIALS)
        return user

    def issue_token(self, user: User) -> str:
        """Signed access token bound to the user id. Requires an app context."""
        return create_access_token(identity=user.user_id, expires_delta=self._token_ttl)

    def resolve_actor(self, user_id: Optional[str]) -> User:
        user = self._users.get_by_id(user_id) if user_id else None
        if not user:
            raise AuthenticationError("Authentication required")
        return user


class UserService:
    """Use case: user directory for assignment pickers."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_directory(self) -> Sequence[User]:
        return list(self._users.list_all())
