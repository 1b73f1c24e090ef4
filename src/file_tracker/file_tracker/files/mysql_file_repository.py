from __future__ import annotations

from typing import Dict, Optional, Sequence

from ..core.enums import FileStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, limit_clause, unique_violation_as
from .model import FileRecord
from .repository import FileRepository

_COLUMNS = (
    "file_id, file_number, dispatched_date, assigned_to, current_status, "
    "remarks, uploaded_by, upload_date"
)
_DUPLICATE = "File already exists"


def _row_to_file(row: dict) -> FileRecord:
    return FileRecord(
        file_id=row["file_id"],
        file_number=row["file_number"],
        dispatched_date=row["dispatched_date"],
        assigned_to=row["assigned_to"],
        current_status=FileStatus(row["current_status"]),
        remarks=row.get("remarks"),
        uploaded_by=row["uploaded_by"],
        upload_date=row["upload_date"],
    )


class MySQLFileRepository(FileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str, params: tuple, limit: Optional[int] = None) -> Sequence[FileRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM files {where} ORDER BY upload_date DESC{limit_clause(limit)}",
                params,
            )
            return [_row_to_file(r) for r in fetchall(cur)]

    def get_by_id(self, file_id: str) -> Optional[FileRecord]:
        rows = self._select("WHERE file_id=%s", (file_id,))
        return rows[0] if rows else None

    def get_by_file_number(self, file_number: str) -> Optional[FileRecord]:
        rows = self._select("WHERE file_number=%s", (file_number,))
        return rows[0] if rows else None

    def create(self, record: FileRecord) -> FileRecord:
        with unique_violation_as(_DUPLICATE):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"INSERT INTO files({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s)",
                    (
                        record.file_id,
                        record.file_number,
                        record.dispatched_date,
                        record.assigned_to,
                        record.current_status.value,
                        record.remarks,
                        record.uploaded_by,
                        record.upload_date,
                    ),
                )
        return record

    def update(self, record: FileRecord) -> bool:
        with unique_violation_as(_DUPLICATE):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE files
                    SET file_number=%s, dispatched_date=%s, assigned_to=%s, current_status=%s, remarks=%s
                    WHERE file_id=%s
                    """,
                    (
                        record.file_number,
                        record.dispatched_date,
                        record.assigned_to,
                        record.current_status.value,
                        record.remarks,
                        record.file_id,
                    ),
                )
                # rowcount is 0 when nothing changed, so re-check existence.
                if cur.rowcount > 0:
                    return True
                cur.execute("SELECT 1 AS found FROM files WHERE file_id=%s", (record.file_id,))
                return fetchone(cur) is not None

    def delete(self, file_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM files WHERE file_id=%s", (file_id,))
            return cur.rowcount > 0

    def list_assigned_to(self, user_id: str, *, limit: Optional[int] = None) -> Sequence[FileRecord]:
        return self._select("WHERE assigned_to=%s", (user_id,), limit)

    def list_uploaded_by(self, user_id: str, *, limit: Optional[int] = None) -> Sequence[FileRecord]:
        return self._select("WHERE uploaded_by=%s", (user_id,), limit)

    def list_all(self, *, limit: Optional[int] = None) -> Sequence[FileRecord]:
        return self._select("", (), limit)

    def count(self, *, assigned_to: Optional[str] = None, uploaded_by: Optional[str] = None) -> int:
        clauses, params = [], []
        if assigned_to is not None:
            clauses.append("assigned_to=%s")
            params.append(assigned_to)
        if uploaded_by is not None:
            clauses.append("uploaded_by=%s")
            params.append(uploaded_by)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM files {where}", tuple(params))
            return int(fetchone(cur)["n"])

    def count_by_status(self, *, assigned_to: Optional[str] = None) -> Dict[FileStatus, int]:
        where, params = ("WHERE assigned_to=%s", (assigned_to,)) if assigned_to is not None else ("", ())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT current_status, COUNT(*) AS n FROM files {where} GROUP BY current_status",
                params,
            )
            return {FileStatus(r["current_status"]): int(r["n"]) for r in fetchall(cur)}
