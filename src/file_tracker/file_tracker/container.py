from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_TOKEN_TTL_MINUTES
from .database.connection import DBConfig, DatabaseConnection
from .files.mysql_file_repository import MySQLFileRepository
from .files.repository import FileRepository
from .files.service import FileService
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.repository import NotificationRepository
from .notifications.service import NotificationService
from .stats.service import StatsService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    files_repo: FileRepository
    notifications_repo: NotificationRepository

    auth_service: AuthService
    user_service: UserService
    notification_service: NotificationService
    file_service: FileService
    stats_service: StatsService

    conn: Optional[DatabaseConnection] = None


def wire_services(
    *,
    users_repo: UserRepository,
    files_repo: FileRepository,
    notifications_repo: NotificationRepository,
    token_ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    notification_service = NotificationService(notifications_repo)
    return Container(
        users_repo=users_repo,
        files_repo=files_repo,
        notifications_repo=notifications_repo,
        auth_service=AuthService(users_repo, token_ttl_minutes=token_ttl_minutes),
        user_service=UserService(users_repo),
        notification_service=notification_service,
        file_service=FileService(files_repo, users_repo, notification_service),
        stats_service=StatsService(files_repo, users_repo),
        conn=conn,
    )


def build_container(*, db_config: dict, token_ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))
    return wire_services(
        users_repo=MySQLUserRepository(conn),
        files_repo=MySQLFileRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        token_ttl_minutes=token_ttl_minutes,
        conn=conn,
    )
