from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .model import Principal
from .repository import AccountRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthService:
    """Use case: authenticate an account and produce a principal."""

    def __init__(self, accounts: AccountRepository):
        self._accounts = accounts

    def authenticate(self, username: str, password: str) -> Principal:
        account = self._accounts.get_by_username((username or "").strip())
        if not account or not account.is_active:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(account.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("Failed login for %s", account.username)
            raise AuthenticationError("Invalid username or password")

        return Principal(user_id=account.user_id, role=account.role, employee_id=account.employee_id)

    def register_account(
        self,
        *,
        username: str,
        password: str,
        role: Role,
        employee_id: Optional[int] = None,
    ) -> int:
        username = require_non_empty(username, "Username")
        if password is None or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if self._accounts.get_by_username(username):
            raise ValidationError("Username already exists")
        if role == Role.EMPLOYEE and employee_id is None:
            raise ValidationError("Employee accounts must be bound to an employee")

        return self._accounts.create_account(
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
            employee_id=employee_id,
        )
