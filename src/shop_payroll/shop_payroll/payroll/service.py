from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import NotFoundError
from ..employees.repository import EmployeeRepository
from ..ledger.service import LedgerService, coerce_date
from ..rules.service import RuleSetService
from .calculator.base import CompensationCalculator
from .calculator.standard_calculator import StandardCompensationCalculator
from .model import CompensationBreakdown


class CompensationService:
    """Use case: compensation breakdown for one employee over a date range."""

    def __init__(
        self,
        employees: EmployeeRepository,
        ledger: LedgerService,
        rules: RuleSetService,
        *,
        calculator: Optional[CompensationCalculator] = None,
    ):
        self._employees = employees
        self._ledger = ledger
        self._rules = rules
        self._calculator = calculator or StandardCompensationCalculator()

    def compute_breakdown(self, employee_id: int, start: Any, end: Any) -> CompensationBreakdown:
        employee = self._employees.load_employee(int(employee_id))
        if not employee:
            raise NotFoundError(f"Employee {employee_id} does not exist")

        start = coerce_date(start, "Start date")
        end = coerce_date(end, "End date")

        rate = self._rules.resolve_rate(employee)
        entries = self._ledger.list_entries(employee.employee_id, start, end)
        return self._calculator.compute(
            employee_id=employee.employee_id,
            start=start,
            end=end,
            rate=rate,
            entries=entries,
        )
