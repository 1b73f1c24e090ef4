from __future__ import annotations

import logging
import re
import uuid
from contextlib import closing
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

DEMO_USERS = (
    # phone, password, first name, last name, department, role
    ("9000000001", "admin123", "Demo", "Admin", "Administration", Role.ADMIN),
    ("9000000002", "user1234", "Demo", "Clerk", "Records", Role.USER),
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql usable regardless of the configured database name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal splitter for schema files; ';' inside quotes is not a terminator.
    buf: list[str] = []
    quote = None
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    conn_factory = DatabaseConnection(DBConfig.from_settings(db_config))
    with closing(conn_factory.connect(with_database=False)) as conn:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn_factory = DatabaseConnection(DBConfig.from_settings(db_config))
    with closing(conn_factory.connect()) as conn:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    logger.info("Applied schema from %s", schema_path)


def ensure_demo_users(db_config: dict) -> None:
    """Create or refresh the demo admin and demo user accounts."""
    conn_factory = DatabaseConnection(DBConfig.from_settings(db_config))
    with closing(conn_factory.connect()) as conn:
        cur = conn.cursor(dictionary=True)
        for phone, password, first_name, last_name, department, role in DEMO_USERS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM users WHERE phone_number=%s", (phone,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE users
                    SET password_hash=%s, first_name=%s, last_name=%s, department=%s, role=%s
                    WHERE phone_number=%s
                    """,
                    (password_hash, first_name, last_name, department, role.value, phone),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users (user_id, phone_number, password_hash, first_name, last_name, department, role)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    """,
                    (str(uuid.uuid4()), phone, password_hash, first_name, last_name, department, role.value),
                )
        conn.commit()
    logger.info("Demo users ready (%d accounts)", len(DEMO_USERS))


def list_tables(db_config: dict) -> list[str]:
    conn_factory = DatabaseConnection(DBConfig.from_settings(db_config))
    with closing(conn_factory.connect()) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
