from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class NewWorkDay:
    """Validated payload for appending a work-day entry."""

    work_date: date
    shop: Optional[str] = None
    sales: Decimal = Decimal("0")
    penalties: Decimal = Decimal("0")
    notes: Optional[str] = None


@dataclass(frozen=True)
class WorkDayEntry:
    """Domain entity: one employee's record for one calendar day.

    ``entry_id`` grows with insertion order; ``version`` grows with every
    mutation and backs the optimistic write check.
    """

    entry_id: int
    employee_id: int
    work_date: date
    shop: Optional[str]
    sales: Decimal
    penalties: Decimal
    notes: Optional[str]
    version: int
    created_by: int
    created_at: datetime
    updated_by: Optional[int] = None
    updated_at: Optional[datetime] = None

    def as_dict(self) -> dict:
        return {
            "entry_id": self.entry_id,
            "employee_id": self.employee_id,
            "date": self.work_date.isoformat(),
            "shop": self.shop,
            "sales": str(self.sales),
            "penalties": str(self.penalties),
            "notes": self.notes,
            "version": self.version,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat(timespec="seconds"),
            "updated_by": self.updated_by,
            "updated_at": self.updated_at.isoformat(timespec="seconds") if self.updated_at else None,
        }
