from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Mapping


@dataclass(frozen=True)
class CompensationBreakdown:
    """Derived figures for one employee over ``[start, end]``. Never persisted."""

    employee_id: int
    start: date
    end: date
    base_rate: Decimal
    sales_percentage: Decimal
    worked_days: int
    total_sales: Decimal
    total_penalties: Decimal
    sales_earnings: Decimal
    period_base_rate: Decimal
    gross_pay: Decimal
    sales_by_shop: Mapping[str, Decimal] = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "base_rate": str(self.base_rate),
            "sales_percentage": str(self.sales_percentage),
            "worked_days": self.worked_days,
            "total_sales": str(self.total_sales),
            "total_penalties": str(self.total_penalties),
            "sales_earnings": str(self.sales_earnings),
            "period_base_rate": str(self.period_base_rate),
            "gross_pay": str(self.gross_pay),
            "sales_by_shop": {shop: str(amount) for shop, amount in self.sales_by_shop.items()},
        }
