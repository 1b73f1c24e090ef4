from __future__ import annotations

from datetime import date

import pytest

from src.file_tracker.file_tracker.core.enums import FileStatus, NotificationType
from src.file_tracker.file_tracker.core.exceptions import (
    AdminRequiredError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.file_tracker.file_tracker.files.model import FileFields
from src.file_tracker.file_tracker.files.service import FileService


def _fields(number="F-100", to="user-bob", dispatched_date="2026-02-10", **kw) -> FileFields:
    return FileFields(file_number=number, dispatched_date=dispatched_date, to=to, **kw)


def _of_type(notifications_repo, kind):
    return [n for n in notifications_repo.rows.values() if n.type == kind]


def test_create_defaults_status_and_notifies_assignee(file_service, notifications_repo, alice, bob):
    record = file_service.create(alice, _fields(remarks="  urgent review  "))

    assert record.uploaded_by == alice.user_id
    assert record.assigned_to == bob.user_id
    assert record.current_status == FileStatus.PENDING
    assert record.dispatched_date == date(2026, 2, 10)
    assert record.remarks == "urgent review"

    created = _of_type(notifications_repo, NotificationType.FILE_CREATED)
    assert len(created) == 1
    assert created[0].user_id == bob.user_id
    assert created[0].file_id == record.file_id
    assert "F-100" in created[0].message


def test_create_duplicate_file_number_conflicts(file_service, files_repo, alice):
    file_service.create(alice, _fields())
    with pytest.raises(ConflictError):
        file_service.create(alice, _fields(to="user-carol"))
    assert len(files_repo.rows) == 1


@pytest.mark.parametrize(
    "fields, field_name",
    [
        (FileFields(dispatched_date="2026-02-10", to="user-bob"), "fileNumber"),
        (FileFields(file_number="F-1", to="user-bob"), "dispatchedDate"),
        (FileFields(file_number="F-1", dispatched_date="2026-02-10"), "to"),
        (FileFields(file_number="F-1", dispatched_date="10/02/2026", to="user-bob"), "dispatchedDate"),
        (FileFields(file_number="F-1", dispatched_date="2026-02-1012", to="user-bob"), "dispatchedDate"),
        (FileFields(file_number="F-1", dispatched_date="2026-02-10123", to="user-bob"), "dispatchedDate"),
        (FileFields(file_number="F-1", dispatched_date="2026-02-10", to="user-bob", current_status="Lost"), "currentStatus"),
    ],
)
def test_create_validation_names_the_field(file_service, files_repo, alice, fields, field_name):
    with pytest.raises(ValidationError) as exc:
        file_service.create(alice, fields)
    assert exc.value.field == field_name
    assert files_repo.rows == {}


def test_create_accepts_iso_timestamp_dates(file_service, alice):
    record = file_service.create(alice, _fields(dispatched_date="2026-02-10T08:30:00.000Z"))
    assert record.dispatched_date == date(2026, 2, 10)


def test_create_does_not_require_assignee_to_exist(file_service, alice):
    record = file_service.create(alice, _fields(to="user-ghost"))
    assert file_service.get(alice, record.file_id).assigned_to_name == "Unknown"


def test_get_enriches_display_names(file_service, alice, bob):
    record = file_service.create(alice, _fields())
    view = file_service.get(bob, record.file_id)
    assert view.uploaded_by_name == "Alice Rao"
    assert view.assigned_to_name == "Bob Nair"
    assert view.to_dict()["fileNumber"] == "F-100"


def test_get_unknown_is_not_found_and_stranger_is_forbidden(file_service, alice, carol, admin):
    record = file_service.create(alice, _fields())
    with pytest.raises(NotFoundError):
        file_service.get(alice, "missing")
    with pytest.raises(AuthorizationError):
        file_service.get(carol, record.file_id)
    assert file_service.get(admin, record.file_id).record.file_id == record.file_id


def test_list_assigned_is_newest_first_and_limited(file_service, alice, bob):
    for n in range(3):
        file_service.create(alice, _fields(number=f"F-{n}"))
    file_service.create(bob, _fields(number="F-own", to="user-alice"))

    views = file_service.list_assigned(bob)
    assert [v.record.file_number for v in views] == ["F-2", "F-1", "F-0"]
    assert all(v.uploaded_by_name == "Alice Rao" for v in views)
    assert [v.record.file_number for v in file_service.list_assigned(bob, limit=2)] == ["F-2", "F-1"]


def test_list_uploaded_carries_assignee_name(file_service, alice):
    file_service.create(alice, _fields(number="F-1"))
    file_service.create(alice, _fields(number="F-2", to="user-carol"))

    views = file_service.list_uploaded(alice)
    assert [(v.record.file_number, v.assigned_to_name) for v in views] == [("F-2", "Carol Iyer"), ("F-1", "Bob Nair")]
    assert views[0].uploaded_by_name is None


def test_list_all_requires_admin(file_service, alice, bob, carol, admin):
    file_service.create(alice, _fields(number="F-1"))
    file_service.create(bob, _fields(number="F-2", to="user-carol"))

    with pytest.raises(AdminRequiredError):
        file_service.list_all(carol)

    views = file_service.list_all(admin)
    assert {v.record.file_number for v in views} == {"F-1", "F-2"}
    assert len(file_service.list_all(admin, limit=1)) == 1


def test_status_change_notifies_uploader_once(file_service, notifications_repo, alice, bob):
    record = file_service.create(alice, _fields())

    view = file_service.update(bob, record.file_id, FileFields(current_status="Completed"))

    assert view.record.current_status == FileStatus.COMPLETED
    updated = _of_type(notifications_repo, NotificationType.FILE_UPDATED)
    assert len(updated) == 1
    assert updated[0].user_id == alice.user_id
    assert "F-100" in updated[0].message and "Completed" in updated[0].message


def test_update_without_status_change_emits_nothing(file_service, notifications_repo, alice, bob):
    record = file_service.create(alice, _fields(current_status="Pending"))
    before = len(notifications_repo.rows)

    file_service.update(bob, record.file_id, FileFields(current_status="Pending", remarks="seen"))
    file_service.update(bob, record.file_id, FileFields(remarks="seen again"))

    assert len(notifications_repo.rows) == before


def test_update_is_partial_and_ignores_falsy_values(file_service, alice):
    record = file_service.create(alice, _fields(remarks="original"))

    view = file_service.update(
        alice,
        record.file_id,
        FileFields(file_number="", dispatched_date=None, to="", current_status=None, remarks=""),
    )
    assert view.record == record

    view = file_service.update(alice, record.file_id, FileFields(dispatched_date="2026-03-01", to="user-carol"))
    assert view.record.dispatched_date == date(2026, 3, 1)
    assert view.record.assigned_to == "user-carol"
    assert view.record.remarks == "original"
    assert view.record.upload_date == record.upload_date
    assert view.assigned_to_name == "Carol Iyer"


def test_update_rename_to_taken_number_conflicts(file_service, alice):
    file_service.create(alice, _fields(number="F-1"))
    second = file_service.create(alice, _fields(number="F-2"))
    with pytest.raises(ConflictError):
        file_service.update(alice, second.file_id, FileFields(file_number="F-1"))


def test_update_authorization(file_service, alice, carol, admin):
    record = file_service.create(alice, _fields())
    with pytest.raises(NotFoundError):
        file_service.update(alice, "missing", FileFields(remarks="x"))
    with pytest.raises(AuthorizationError):
        file_service.update(carol, record.file_id, FileFields(remarks="x"))
    assert file_service.update(admin, record.file_id, FileFields(remarks="x")).record.remarks == "x"


def test_delete_rules_and_notification(file_service, files_repo, notifications_repo, alice, bob):
    record = file_service.create(alice, _fields())

    with pytest.raises(AuthorizationError):
        file_service.delete(bob, record.file_id)
    assert record.file_id in files_repo.rows

    file_service.delete(alice, record.file_id)
    deleted = _of_type(notifications_repo, NotificationType.FILE_DELETED)
    assert [n.user_id for n in deleted] == [bob.user_id]
    with pytest.raises(NotFoundError):
        file_service.get(alice, record.file_id)
    with pytest.raises(NotFoundError):
        file_service.delete(alice, record.file_id)


class _BrokenNotifications:
    def notify(self, **kwargs):
        raise RuntimeError("notification store down")


def test_notification_failure_keeps_the_file(files_repo, users_repo, clock, alice):
    service = FileService(files_repo, users_repo, _BrokenNotifications(), clock=clock)
    record = service.create(alice, _fields())
    assert files_repo.get_by_id(record.file_id) == record


def test_scenario_create_update_delete(file_service, notifications_repo, alice, bob):
    record = file_service.create(alice, _fields(number="F-100"))
    assert [(n.type, n.user_id) for n in notifications_repo.rows.values()] == [
        (NotificationType.FILE_CREATED, bob.user_id)
    ]

    file_service.update(bob, record.file_id, FileFields(current_status="Completed"))
    updated = _of_type(notifications_repo, NotificationType.FILE_UPDATED)
    assert [n.user_id for n in updated] == [alice.user_id]
    assert "F-100" in updated[0].message and "Completed" in updated[0].message

    with pytest.raises(AuthorizationError):
        file_service.delete(bob, record.file_id)

    file_service.delete(alice, record.file_id)
    assert [n.user_id for n in _of_type(notifications_repo, NotificationType.FILE_DELETED)] == [bob.user_id]
    with pytest.raises(NotFoundError):
        file_service.get(alice, record.file_id)
