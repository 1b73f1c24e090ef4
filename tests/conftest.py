from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta
from typing import Dict, Optional

import pytest
from werkzeug.security import generate_password_hash

from src.file_tracker.file_tracker.core.enums import FileStatus, Role
from src.file_tracker.file_tracker.core.exceptions import ConflictError
from src.file_tracker.file_tracker.files.model import FileRecord
from src.file_tracker.file_tracker.files.service import FileService
from src.file_tracker.file_tracker.notifications.model import Notification
from src.file_tracker.file_tracker.notifications.service import NotificationService
from src.file_tracker.file_tracker.stats.service import StatsService
from src.file_tracker.file_tracker.users.model import User


class InMemoryUsers:
    def __init__(self, *users: User):
        self._by_id: Dict[str, User] = {u.user_id: u for u in users}

    def get_by_id(self, user_id):
        return self._by_id.get(user_id)

    def get_by_phone_number(self, phone_number):
        return next((u for u in self._by_id.values() if u.phone_number == phone_number), None)

    def create_user(self, user):
        if self.get_by_phone_number(user.phone_number):
            raise ConflictError("User already exists")
        self._by_id[user.user_id] = user
        return user

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda u: (u.first_name, u.last_name))

    def count(self):
        return len(self._by_id)


class InMemoryFiles:
    def __init__(self):
        self.rows: Dict[str, FileRecord] = {}

    def _sorted(self, rows, limit=None):
        rows = sorted(rows, key=lambda r: r.upload_date, reverse=True)
        return rows[:limit] if limit else rows

    def get_by_id(self, file_id):
        return self.rows.get(file_id)

    def get_by_file_number(self, file_number):
        return next((r for r in self.rows.values() if r.file_number == file_number), None)

    def create(self, record):
        if self.get_by_file_number(record.file_number):
            raise ConflictError("File already exists")
        self.rows[record.file_id] = record
        return record

    def update(self, record):
        if record.file_id not in self.rows:
            return False
        self.rows[record.file_id] = record
        return True

    def delete(self, file_id):
        return self.rows.pop(file_id, None) is not None

    def list_assigned_to(self, user_id, *, limit=None):
        return self._sorted([r for r in self.rows.values() if r.assigned_to == user_id], limit)

    def list_uploaded_by(self, user_id, *, limit=None):
        return self._sorted([r for r in self.rows.values() if r.uploaded_by == user_id], limit)

    def list_all(self, *, limit=None):
        return self._sorted(self.rows.values(), limit)

    def count(self, *, assigned_to=None, uploaded_by=None):
        return sum(
            1
            for r in self.rows.values()
            if (assigned_to is None or r.assigned_to == assigned_to)
            and (uploaded_by is None or r.uploaded_by == uploaded_by)
        )

    def count_by_status(self, *, assigned_to=None):
        out: Dict[FileStatus, int] = {}
        for r in self.rows.values():
            if assigned_to is None or r.assigned_to == assigned_to:
                out[r.current_status] = out.get(r.current_status, 0) + 1
        return out


class InMemoryNotifications:
    def __init__(self):
        self.rows: Dict[str, Notification] = {}

    def create(self, notification):
        self.rows[notification.notification_id] = notification
        return notification

    def list_for_user(self, user_id):
        items = [n for n in self.rows.values() if n.user_id == user_id]
        return sorted(items, key=lambda n: n.created_at, reverse=True)

    def get_for_user(self, *, notification_id, user_id):
        n = self.rows.get(notification_id)
        return n if n and n.user_id == user_id else None

    def mark_read(self, *, notification_id, user_id):
        n = self.get_for_user(notification_id=notification_id, user_id=user_id)
        if not n:
            return False
        self.rows[notification_id] = dataclasses.replace(n, read=True)
        return True

    def mark_all_read(self, user_id):
        changed = 0
        for n in list(self.rows.values()):
            if n.user_id == user_id and not n.read:
                self.rows[n.notification_id] = dataclasses.replace(n, read=True)
                changed += 1
        return changed

    def delete_for_user(self, *, notification_id, user_id):
        if not self.get_for_user(notification_id=notification_id, user_id=user_id):
            return False
        del self.rows[notification_id]
        return True


class TickingClock:
    """Each call is one second later, so ordering by timestamp is deterministic."""

    def __init__(self, start: Optional[datetime] = None):
        self._now = start or datetime(2026, 3, 1, 9, 0, 0)

    def __call__(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now


def make_user(user_id: str, *, first="", last="", phone=None, role=Role.USER, password="secret123") -> User:
    return User(
        user_id=user_id,
        phone_number=phone or f"90000{user_id[-5:]:0>5}",
        password_hash=generate_password_hash(password),
        first_name=first,
        last_name=last,
        department="Records",
        role=role,
    )


@pytest.fixture
def alice():
    return make_user("user-alice", first="Alice", last="Rao", phone="9000000101")


@pytest.fixture
def bob():
    return make_user("user-bob", first="Bob", last="Nair", phone="9000000102")


@pytest.fixture
def carol():
    return make_user("user-carol", first="Carol", last="Iyer", phone="9000000103")


@pytest.fixture
def admin():
    return make_user("user-admin", first="Root", last="Admin", phone="9000000100", role=Role.ADMIN)


@pytest.fixture
def users_repo(alice, bob, carol, admin):
    return InMemoryUsers(alice, bob, carol, admin)


@pytest.fixture
def files_repo():
    return InMemoryFiles()


@pytest.fixture
def notifications_repo():
    return InMemoryNotifications()


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def notification_service(notifications_repo, clock):
    return NotificationService(notifications_repo, clock=clock)


@pytest.fixture
def file_service(files_repo, users_repo, notification_service, clock):
    return FileService(files_repo, users_repo, notification_service, clock=clock)


@pytest.fixture
def stats_service(files_repo, users_repo):
    return StatsService(files_repo, users_repo)
