from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import Position
from .model import Employee


class EmployeeRepository(Protocol):
    def load_employee(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_employees(self) -> Sequence[Employee]:
        raise NotImplementedError

    def add_employee(
        self,
        *,
        full_name: str,
        position: Position,
        base_rate: Optional[Decimal],
        sales_percentage: Optional[Decimal],
    ) -> int:
        raise NotImplementedError

    def save_employee(self, employee: Employee) -> None:
        """Replace the stored fields of an existing employee (atomic per entity)."""

        raise NotImplementedError

    def delete_employee(self, employee_id: int) -> bool:
        raise NotImplementedError
