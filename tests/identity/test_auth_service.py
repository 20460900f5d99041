from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from src.shop_payroll.shop_payroll.core.enums import Role
from src.shop_payroll.shop_payroll.core.exceptions import AuthenticationError, ValidationError
from src.shop_payroll.shop_payroll.database.memory_store import InMemoryAccountRepository
from src.shop_payroll.shop_payroll.identity.model import Principal
from src.shop_payroll.shop_payroll.identity.service import AuthService


def test_authenticate_returns_principal():
    accounts = InMemoryAccountRepository()
    auth = AuthService(accounts)
    user_id = auth.register_account(username="seller1", password="secret1", role=Role.EMPLOYEE, employee_id=4)

    principal = auth.authenticate("seller1", "secret1")

    assert principal == Principal(user_id=user_id, role=Role.EMPLOYEE, employee_id=4)


def test_wrong_password_raises():
    accounts = InMemoryAccountRepository()
    accounts.create_account(
        username="a", password_hash=generate_password_hash("right"), role=Role.MANAGER, employee_id=None
    )
    auth = AuthService(accounts)

    with pytest.raises(AuthenticationError):
        auth.authenticate("a", "wrong")


def test_unknown_user_raises():
    with pytest.raises(AuthenticationError):
        AuthService(InMemoryAccountRepository()).authenticate("nobody", "pw")


def test_placeholder_hash_never_matches():
    accounts = InMemoryAccountRepository()
    accounts.create_account(username="legacy", password_hash="CHANGE_ME", role=Role.ADMIN, employee_id=None)

    with pytest.raises(AuthenticationError):
        AuthService(accounts).authenticate("legacy", "CHANGE_ME")


def test_register_rejects_short_password_and_unbound_employee():
    auth = AuthService(InMemoryAccountRepository())
    with pytest.raises(ValidationError):
        auth.register_account(username="x", password="123", role=Role.MANAGER)
    with pytest.raises(ValidationError):
        auth.register_account(username="y", password="123456", role=Role.EMPLOYEE)
