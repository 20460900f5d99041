from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def to_decimal(value: Any, field_name: str) -> Decimal:
    """Convert user input to Decimal without going through float."""
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be a number")
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValidationError(f"{field_name} must be a number")
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be a finite number")
    return result


def require_non_negative(value: Any, field_name: str) -> Decimal:
    amount = to_decimal(value, field_name)
    if amount < 0:
        raise ValidationError(f"{field_name} must be >= 0")
    return amount


def require_fraction(value: Any, field_name: str) -> Decimal:
    amount = to_decimal(value, field_name)
    if amount < 0 or amount > 1:
        raise ValidationError(f"{field_name} must be between 0 and 1")
    return amount


def optional_text(value: Optional[str]) -> Optional[str]:
    text = (value or "").strip()
    return text or None
