from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..common.validators import require_fraction, require_non_negative
from ..core.enums import Position, RateSource


@dataclass(frozen=True)
class CompensationRule:
    """Position default: base rate per worked day and share of sales."""

    position: Position
    base_rate: Decimal
    sales_percentage: Decimal

    @classmethod
    def build(cls, position, base_rate, sales_percentage) -> "CompensationRule":
        return cls(
            position=Position(position),
            base_rate=require_non_negative(base_rate, "Base rate"),
            sales_percentage=require_fraction(sales_percentage, "Sales percentage"),
        )

    def as_dict(self) -> dict:
        return {
            "position": self.position.value,
            "base_rate": str(self.base_rate),
            "sales_percentage": str(self.sales_percentage),
        }


@dataclass(frozen=True)
class ResolvedRate:
    base_rate: Decimal
    sales_percentage: Decimal
    source: RateSource = RateSource.POSITION
