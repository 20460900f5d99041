from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import WorkDayEntry


class EntryRepository(Protocol):
    """Persistence contract for work-day entries.

    Writes are atomic per entry. ``insert_entry`` raises ConflictError when a
    row for the same (employee, date) already exists; ``update_entry`` raises
    ConflictError when the stored version is no longer ``expected_version``.
    """

    def load_entries(self, employee_id: int, start: date, end: date) -> Sequence[WorkDayEntry]:
        raise NotImplementedError

    def load_entry(self, employee_id: int, work_date: date) -> Optional[WorkDayEntry]:
        raise NotImplementedError

    def insert_entry(self, entry: WorkDayEntry) -> WorkDayEntry:
        raise NotImplementedError

    def update_entry(self, entry: WorkDayEntry, *, expected_version: int) -> WorkDayEntry:
        raise NotImplementedError

    def delete_for_employee(self, employee_id: int) -> int:
        raise NotImplementedError
