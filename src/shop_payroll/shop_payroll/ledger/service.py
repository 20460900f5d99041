from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import optional_text, require_non_negative
from ..core.constants import DEFAULT_FUTURE_GRACE_DAYS, NOTES_SEPARATOR
from ..core.enums import MergePolicy
from ..core.exceptions import ConflictError, DuplicateDateError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..identity.model import Principal
from .locks import KeyedLockTable
from .model import NewWorkDay, WorkDayEntry
from .repository import EntryRepository

logger = logging.getLogger(__name__)

PATCHABLE_FIELDS = frozenset({"shop", "sales", "penalties", "notes"})


def coerce_date(value: Any, field_name: str = "Date") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_iso_date(value.strip())
    raise ValidationError(f"{field_name} is required")


def _join_notes(first: Optional[str], second: Optional[str]) -> Optional[str]:
    parts = [n for n in (first, second) if n]
    return NOTES_SEPARATOR.join(parts) or None


class LedgerService:
    """Per-employee work-day ledger: append, edit, list.

    The service trusts the access gate to have authorized the call; it only
    records who acted for audit purposes.
    """

    def __init__(
        self,
        entries: EntryRepository,
        employees: EmployeeRepository,
        *,
        merge_policy: MergePolicy = MergePolicy.REJECT,
        future_grace_days: int = DEFAULT_FUTURE_GRACE_DAYS,
        locks: Optional[KeyedLockTable] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._entries = entries
        self._employees = employees
        self._merge_policy = MergePolicy(merge_policy)
        self._future_grace_days = int(future_grace_days)
        self._locks = locks or KeyedLockTable()
        self._clock = clock

    @property
    def merge_policy(self) -> MergePolicy:
        return self._merge_policy

    def _check_date(self, work_date: date) -> date:
        latest = self._clock().date() + timedelta(days=self._future_grace_days)
        if work_date > latest:
            raise ValidationError(f"Date {work_date.isoformat()} is too far in the future")
        return work_date

    def _validate_new(self, entry: Union[NewWorkDay, Mapping[str, Any]]) -> NewWorkDay:
        if isinstance(entry, NewWorkDay):
            raw = {
                "date": entry.work_date,
                "shop": entry.shop,
                "sales": entry.sales,
                "penalties": entry.penalties,
                "notes": entry.notes,
            }
        else:
            raw = dict(entry)
        work_date = raw.get("date", raw.get("work_date"))
        return NewWorkDay(
            work_date=self._check_date(coerce_date(work_date)),
            shop=optional_text(raw.get("shop")),
            sales=require_non_negative(raw.get("sales", 0), "Sales"),
            penalties=require_non_negative(raw.get("penalties", 0), "Penalties"),
            notes=optional_text(raw.get("notes")),
        )

    def _require_employee(self, employee_id: int) -> None:
        if not self._employees.load_employee(employee_id):
            raise NotFoundError(f"Employee {employee_id} does not exist")

    def append_entry(
        self,
        actor: Principal,
        employee_id: int,
        entry: Union[NewWorkDay, Mapping[str, Any]],
    ) -> WorkDayEntry:
        """Record a work day.

        Under the reject policy an entry that already existed when the call
        started raises DuplicateDateError; one written by an overlapping call
        raises ConflictError.
        """
        employee_id = int(employee_id)
        new = self._validate_new(entry)
        self._require_employee(employee_id)
        seen = self._entries.load_entry(employee_id, new.work_date)

        with self._locks.hold(employee_id):
            now = self._clock()
            existing = self._entries.load_entry(employee_id, new.work_date)

            if existing is None:
                saved = self._entries.insert_entry(
                    WorkDayEntry(
                        entry_id=0,
                        employee_id=employee_id,
                        work_date=new.work_date,
                        shop=new.shop,
                        sales=new.sales,
                        penalties=new.penalties,
                        notes=new.notes,
                        version=1,
                        created_by=actor.user_id,
                        created_at=now,
                    )
                )
                logger.info(
                    "Entry %s/%s appended by user %s", employee_id, new.work_date.isoformat(), actor.user_id
                )
                return saved

            if self._merge_policy == MergePolicy.REJECT:
                if seen is None:
                    raise ConflictError(
                        f"Entry {employee_id}/{new.work_date.isoformat()} was written concurrently"
                    )
                raise DuplicateDateError(
                    f"Employee {employee_id} already has an entry for {new.work_date.isoformat()}"
                )

            merged = replace(
                existing,
                shop=existing.shop or new.shop,
                sales=existing.sales + new.sales,
                penalties=existing.penalties + new.penalties,
                notes=_join_notes(existing.notes, new.notes),
                version=existing.version + 1,
                updated_by=actor.user_id,
                updated_at=now,
            )
            saved = self._entries.update_entry(merged, expected_version=existing.version)
            logger.info(
                "Entry %s/%s accumulated by user %s", employee_id, new.work_date.isoformat(), actor.user_id
            )
            return saved

    def edit_entry(
        self,
        actor: Principal,
        employee_id: int,
        work_date: Any,
        patch: Mapping[str, Any],
        *,
        expected_version: Optional[int] = None,
    ) -> WorkDayEntry:
        """Partially update the entry for ``work_date``.

        The edit applies on top of ``expected_version``, or the version read
        when the call starts if none is given. When the stored entry has moved
        on by the time the write lock is held, ConflictError is raised and
        nothing is written.
        """
        employee_id = int(employee_id)
        work_date = coerce_date(work_date)

        unknown = set(patch) - PATCHABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

        changes: dict[str, Any] = {}
        if "shop" in patch:
            changes["shop"] = optional_text(patch["shop"])
        if "sales" in patch:
            changes["sales"] = require_non_negative(patch["sales"], "Sales")
        if "penalties" in patch:
            changes["penalties"] = require_non_negative(patch["penalties"], "Penalties")
        if "notes" in patch:
            changes["notes"] = optional_text(patch["notes"])

        if expected_version is None:
            seen = self._entries.load_entry(employee_id, work_date)
            if seen is None:
                raise NotFoundError(f"No entry for employee {employee_id} on {work_date.isoformat()}")
            expected_version = seen.version

        with self._locks.hold(employee_id):
            existing = self._entries.load_entry(employee_id, work_date)
            if existing is None:
                raise NotFoundError(f"No entry for employee {employee_id} on {work_date.isoformat()}")
            if int(expected_version) != existing.version:
                raise ConflictError(
                    f"Entry {employee_id}/{work_date.isoformat()} changed "
                    f"(expected version {expected_version}, found {existing.version})"
                )

            updated = replace(
                existing,
                **changes,
                version=existing.version + 1,
                updated_by=actor.user_id,
                updated_at=self._clock(),
            )
            saved = self._entries.update_entry(updated, expected_version=existing.version)
            logger.info(
                "Entry %s/%s edited by user %s: %s",
                employee_id,
                work_date.isoformat(),
                actor.user_id,
                sorted(changes),
            )
            return saved

    def get_entry(self, employee_id: int, work_date: Any) -> WorkDayEntry:
        entry = self._entries.load_entry(int(employee_id), coerce_date(work_date))
        if entry is None:
            raise NotFoundError(f"No entry for employee {employee_id} on {work_date}")
        return entry

    def list_entries(self, employee_id: int, start: Any, end: Any) -> Sequence[WorkDayEntry]:
        """Entries within ``[start, end]`` ordered by date; empty tuple when none."""
        start = coerce_date(start, "Start date")
        end = coerce_date(end, "End date")
        if start > end:
            return ()
        rows = self._entries.load_entries(int(employee_id), start, end)
        return tuple(sorted(rows, key=lambda e: (e.work_date, e.entry_id)))
