from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Sequence

from ...ledger.model import WorkDayEntry
from ...rules.model import ResolvedRate
from ..model import CompensationBreakdown


class CompensationCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(
        self,
        *,
        employee_id: int,
        start: date,
        end: date,
        rate: ResolvedRate,
        entries: Sequence[WorkDayEntry],
    ) -> CompensationBreakdown:
        raise NotImplementedError
