from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

import mysql.connector

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import WorkDayEntry
from .repository import EntryRepository

_COLUMNS = """
    entry_id, employee_id, work_date, shop, sales, penalties, notes, version,
    created_by, created_at, updated_by, updated_at
"""


def _row_to_entry(r: dict) -> WorkDayEntry:
    return WorkDayEntry(
        entry_id=int(r["entry_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        shop=r.get("shop"),
        sales=Decimal(str(r["sales"])),
        penalties=Decimal(str(r["penalties"])),
        notes=r.get("notes"),
        version=int(r["version"]),
        created_by=int(r["created_by"]),
        created_at=r["created_at"],
        updated_by=int(r["updated_by"]) if r.get("updated_by") is not None else None,
        updated_at=r.get("updated_at"),
    )


class MySQLEntryRepository(EntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load_entries(self, employee_id: int, start: date, end: date) -> Sequence[WorkDayEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_day_entries
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC, entry_id ASC
                """,
                (int(employee_id), start, end),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def load_entry(self, employee_id: int, work_date: date) -> Optional[WorkDayEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_day_entries
                WHERE employee_id=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            row = fetchone(cur)
            return _row_to_entry(row) if row else None

    def insert_entry(self, entry: WorkDayEntry) -> WorkDayEntry:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO work_day_entries(
                        employee_id, work_date, shop, sales, penalties, notes, version, created_by, created_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        entry.employee_id,
                        entry.work_date,
                        entry.shop,
                        entry.sales,
                        entry.penalties,
                        entry.notes,
                        entry.version,
                        entry.created_by,
                        entry.created_at,
                    ),
                )
                entry_id = int(cur.lastrowid)
        except mysql.connector.Error as exc:
            if is_duplicate_key(exc):
                raise ConflictError(
                    f"Entry {entry.employee_id}/{entry.work_date.isoformat()} was written concurrently"
                ) from exc
            raise
        return replace(entry, entry_id=entry_id)

    def update_entry(self, entry: WorkDayEntry, *, expected_version: int) -> WorkDayEntry:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE work_day_entries
                SET shop=%s, sales=%s, penalties=%s, notes=%s, version=%s, updated_by=%s, updated_at=%s
                WHERE employee_id=%s AND work_date=%s AND version=%s
                """,
                (
                    entry.shop,
                    entry.sales,
                    entry.penalties,
                    entry.notes,
                    entry.version,
                    entry.updated_by,
                    entry.updated_at,
                    entry.employee_id,
                    entry.work_date,
                    int(expected_version),
                ),
            )
            if cur.rowcount == 0:
                raise ConflictError(
                    f"Entry {entry.employee_id}/{entry.work_date.isoformat()} changed since version {expected_version}"
                )
        return entry

    def delete_for_employee(self, employee_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM work_day_entries WHERE employee_id=%s", (int(employee_id),))
            return int(cur.rowcount)
