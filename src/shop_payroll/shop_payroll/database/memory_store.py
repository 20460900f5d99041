"""In-process repositories.

Used for local development (``STORAGE_BACKEND=memory``) and tests. Each
repository is atomic per entity and applies the same duplicate-key and
version checks as the MySQL implementations.
"""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from ..core.enums import Position, Role
from ..core.exceptions import ConflictError
from ..employees.model import Employee
from ..identity.model import Account
from ..ledger.model import WorkDayEntry
from ..rules.model import CompensationRule


class InMemoryAccountRepository:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_username: dict[str, Account] = {}
        self._next_id = 1

    def get_by_username(self, username: str) -> Optional[Account]:
        with self._lock:
            return self._by_username.get(username)

    def create_account(
        self,
        *,
        username: str,
        password_hash: str,
        role: Role,
        employee_id: Optional[int],
    ) -> int:
        with self._lock:
            if username in self._by_username:
                raise ConflictError(f"Username {username!r} already exists")
            user_id = self._next_id
            self._next_id += 1
            self._by_username[username] = Account(
                user_id=user_id,
                username=username,
                password_hash=password_hash,
                role=role,
                employee_id=employee_id,
            )
            return user_id


class InMemoryEmployeeRepository:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_id: dict[int, Employee] = {}
        self._next_id = 1

    def load_employee(self, employee_id: int) -> Optional[Employee]:
        with self._lock:
            return self._by_id.get(int(employee_id))

    def list_employees(self) -> Sequence[Employee]:
        with self._lock:
            return [self._by_id[k] for k in sorted(self._by_id)]

    def add_employee(
        self,
        *,
        full_name: str,
        position: Position,
        base_rate: Optional[Decimal],
        sales_percentage: Optional[Decimal],
    ) -> int:
        with self._lock:
            employee_id = self._next_id
            self._next_id += 1
            self._by_id[employee_id] = Employee(
                employee_id=employee_id,
                full_name=full_name,
                position=position,
                base_rate=base_rate,
                sales_percentage=sales_percentage,
            )
            return employee_id

    def save_employee(self, employee: Employee) -> None:
        with self._lock:
            self._by_id[employee.employee_id] = employee
            self._next_id = max(self._next_id, employee.employee_id + 1)

    def delete_employee(self, employee_id: int) -> bool:
        with self._lock:
            return self._by_id.pop(int(employee_id), None) is not None


class InMemoryEntryRepository:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_key: dict[tuple[int, date], WorkDayEntry] = {}
        self._next_id = 1

    def load_entries(self, employee_id: int, start: date, end: date) -> Sequence[WorkDayEntry]:
        with self._lock:
            rows = [
                e
                for (emp, day), e in self._by_key.items()
                if emp == int(employee_id) and start <= day <= end
            ]
        rows.sort(key=lambda e: (e.work_date, e.entry_id))
        return rows

    def load_entry(self, employee_id: int, work_date: date) -> Optional[WorkDayEntry]:
        with self._lock:
            return self._by_key.get((int(employee_id), work_date))

    def insert_entry(self, entry: WorkDayEntry) -> WorkDayEntry:
        key = (entry.employee_id, entry.work_date)
        with self._lock:
            if key in self._by_key:
                raise ConflictError(
                    f"Entry {entry.employee_id}/{entry.work_date.isoformat()} was written concurrently"
                )
            saved = replace(entry, entry_id=self._next_id)
            self._next_id += 1
            self._by_key[key] = saved
            return saved

    def update_entry(self, entry: WorkDayEntry, *, expected_version: int) -> WorkDayEntry:
        key = (entry.employee_id, entry.work_date)
        with self._lock:
            current = self._by_key.get(key)
            if current is None or current.version != int(expected_version):
                raise ConflictError(
                    f"Entry {entry.employee_id}/{entry.work_date.isoformat()} changed since version {expected_version}"
                )
            self._by_key[key] = entry
            return entry

    def delete_for_employee(self, employee_id: int) -> int:
        with self._lock:
            doomed = [key for key in self._by_key if key[0] == int(employee_id)]
            for key in doomed:
                del self._by_key[key]
            return len(doomed)


class InMemoryRuleSetRepository:
    def __init__(self, rules: Optional[Mapping[Position, CompensationRule]] = None) -> None:
        self._lock = threading.Lock()
        self._rules: dict[Position, CompensationRule] = dict(rules or {})

    def load_rule_set(self) -> Mapping[Position, CompensationRule]:
        with self._lock:
            return dict(self._rules)

    def save_rule(self, rule: CompensationRule) -> None:
        with self._lock:
            self._rules[rule.position] = rule
