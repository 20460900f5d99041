from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import Account


class AccountRepository(Protocol):
    """Login accounts. Services depend on this interface, not on a concrete DB."""

    def get_by_username(self, username: str) -> Optional[Account]:
        raise NotImplementedError

    def create_account(
        self,
        *,
        username: str,
        password_hash: str,
        role: Role,
        employee_id: Optional[int],
    ) -> int:
        raise NotImplementedError
