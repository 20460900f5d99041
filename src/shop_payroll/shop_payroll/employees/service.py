from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import require_fraction, require_non_empty, require_non_negative
from ..core.enums import Position
from ..core.exceptions import NotFoundError, ValidationError
from ..identity.model import Principal
from ..ledger.repository import EntryRepository
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"full_name", "position", "base_rate", "sales_percentage", "is_active"})


def _parse_position(value: Any) -> Position:
    try:
        return Position(value)
    except ValueError:
        raise ValidationError(f"Unknown position: {value!r}")


class EmployeeService:
    """Use case: administer employees (create, update fields, explicit delete)."""

    def __init__(self, employees: EmployeeRepository, entries: Optional[EntryRepository] = None):
        self._employees = employees
        self._entries = entries

    def get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.load_employee(int(employee_id))
        if not employee:
            raise NotFoundError(f"Employee {employee_id} does not exist")
        return employee

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_employees()

    def create_employee(
        self,
        actor: Principal,
        *,
        full_name: str,
        position: Any,
        base_rate: Any = None,
        sales_percentage: Any = None,
    ) -> Employee:
        fields = {
            "full_name": require_non_empty(full_name, "Full name"),
            "position": _parse_position(position),
            "base_rate": require_non_negative(base_rate, "Base rate") if base_rate is not None else None,
            "sales_percentage": (
                require_fraction(sales_percentage, "Sales percentage") if sales_percentage is not None else None
            ),
        }
        employee_id = self._employees.add_employee(**fields)
        employee = Employee(employee_id=employee_id, **fields)
        logger.info("Employee %s created by user %s", employee.employee_id, actor.user_id)
        return employee

    def update_employee(self, actor: Principal, employee_id: int, fields: Mapping[str, Any]) -> Employee:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        employee = self.get_employee(employee_id)
        changes: dict[str, Any] = {}
        if "full_name" in fields:
            changes["full_name"] = require_non_empty(fields["full_name"], "Full name")
        if "position" in fields:
            changes["position"] = _parse_position(fields["position"])
        if "base_rate" in fields:
            value = fields["base_rate"]
            changes["base_rate"] = require_non_negative(value, "Base rate") if value is not None else None
        if "sales_percentage" in fields:
            value = fields["sales_percentage"]
            changes["sales_percentage"] = require_fraction(value, "Sales percentage") if value is not None else None
        if "is_active" in fields:
            changes["is_active"] = bool(fields["is_active"])

        updated = replace(employee, **changes)
        self._employees.save_employee(updated)
        logger.info("Employee %s updated by user %s: %s", employee_id, actor.user_id, sorted(changes))
        return updated

    def delete_employee(self, actor: Principal, employee_id: int, *, reason: Optional[str] = None) -> None:
        employee = self.get_employee(employee_id)
        if not self._employees.delete_employee(employee.employee_id):
            raise NotFoundError(f"Employee {employee_id} does not exist")
        purged = self._entries.delete_for_employee(employee.employee_id) if self._entries is not None else 0
        logger.warning(
            "Employee %s (%s) deleted by user %s with %d entries; reason=%s",
            employee.employee_id,
            employee.full_name,
            actor.user_id,
            purged,
            reason or "-",
        )
