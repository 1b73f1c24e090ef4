from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_violation_as
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, phone_number, password_hash, first_name, last_name, department, role"


def _row_to_user(row: dict) -> User:
    return User(
        user_id=row["user_id"],
        phone_number=row["phone_number"],
        password_hash=row["password_hash"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        department=row["department"],
        role=Role(row["role"]),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_phone_number(self, phone_number: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE phone_number=%s", (phone_number,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def create_user(self, user: User) -> User:
        with unique_violation_as("User already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"INSERT INTO users({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s)",
                    (
                        user.user_id,
                        user.phone_number,
                        user.password_hash,
                        user.first_name,
                        user.last_name,
                        user.department,
                        user.role.value,
                    ),
                )
        return user

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY first_name, last_name")
            return [_row_to_user(r) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM users")
            return int(fetchone(cur)["n"])
