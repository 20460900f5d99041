from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.enums import Position


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    ``base_rate`` and ``sales_percentage`` are per-employee overrides; ``None``
    means the position default from the rule set applies.
    """

    employee_id: int
    full_name: str
    position: Position
    base_rate: Optional[Decimal] = None
    sales_percentage: Optional[Decimal] = None
    is_active: bool = True
