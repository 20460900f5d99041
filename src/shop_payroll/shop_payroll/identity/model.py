from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..core.enums import DenyReason, Role
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Principal:
    """Authenticated actor.

    Built at login time from a verified credential; never persisted by the engine.
    """

    user_id: int
    role: Role
    employee_id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.role == Role.EMPLOYEE and self.employee_id is None:
            raise ValidationError("An employee principal must be bound to an employee id")

    def to_session(self) -> dict:
        return {"user_id": self.user_id, "role": self.role.value, "employee_id": self.employee_id}

    @classmethod
    def from_session(cls, data: dict) -> "Principal":
        employee_id = data.get("employee_id")
        return cls(
            user_id=int(data["user_id"]),
            role=Role(data["role"]),
            employee_id=int(employee_id) if employee_id is not None else None,
        )


@dataclass(frozen=True)
class Account:
    """Login account (stored credential)."""

    user_id: int
    username: str
    password_hash: str
    role: Role
    employee_id: Optional[int]
    is_active: bool = True


@dataclass(frozen=True)
class Allowed:
    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class Denied:
    """Authorization outcome, returned as a value and never raised."""

    reason: DenyReason
    operation: Optional[str] = None
    employee_id: Optional[int] = None

    def __bool__(self) -> bool:
        return False


Decision = Union[Allowed, Denied]
