from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from ...core.constants import CURRENCY_QUANTUM
from ...ledger.model import WorkDayEntry
from ...rules.model import ResolvedRate
from ..model import CompensationBreakdown
from .base import CompensationCalculator

UNASSIGNED_SHOP = "-"


class StandardCompensationCalculator(CompensationCalculator):
    """Standard rule: base_rate * worked_days + sales * percentage - penalties.

    Intermediate sums stay exact; only gross pay is rounded, half-up to the
    smallest currency unit. A negative gross pay is returned unchanged.
    """

    def __init__(self, *, quantum: Decimal = CURRENCY_QUANTUM, rounding: str = ROUND_HALF_UP):
        self._quantum = quantum
        self._rounding = rounding

    def compute(
        self,
        *,
        employee_id: int,
        start: date,
        end: date,
        rate: ResolvedRate,
        entries: Sequence[WorkDayEntry],
    ) -> CompensationBreakdown:
        worked_dates: set[date] = set()
        total_sales = Decimal("0")
        total_penalties = Decimal("0")
        sales_by_shop: dict[str, Decimal] = {}

        for e in entries:
            worked_dates.add(e.work_date)
            total_sales += e.sales
            total_penalties += e.penalties
            shop = e.shop or UNASSIGNED_SHOP
            sales_by_shop[shop] = sales_by_shop.get(shop, Decimal("0")) + e.sales

        worked_days = len(worked_dates)
        sales_earnings = total_sales * rate.sales_percentage
        period_base_rate = rate.base_rate * worked_days
        gross = period_base_rate + sales_earnings - total_penalties

        return CompensationBreakdown(
            employee_id=employee_id,
            start=start,
            end=end,
            base_rate=rate.base_rate,
            sales_percentage=rate.sales_percentage,
            worked_days=worked_days,
            total_sales=total_sales,
            total_penalties=total_penalties,
            sales_earnings=sales_earnings,
            period_base_rate=period_base_rate,
            gross_pay=gross.quantize(self._quantum, rounding=self._rounding),
            sales_by_shop=dict(sorted(sales_by_shop.items())),
        )
