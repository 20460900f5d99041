from __future__ import annotations

import pytest

from src.shop_payroll.shop_payroll.core.enums import ADMIN_OPERATIONS, DenyReason, Operation, Role
from src.shop_payroll.shop_payroll.core.exceptions import ValidationError
from src.shop_payroll.shop_payroll.identity.model import Allowed, Denied, Principal
from src.shop_payroll.shop_payroll.identity.policy import authorize


@pytest.mark.parametrize("operation", list(Operation))
def test_admin_is_allowed_everything(operation):
    principal = Principal(user_id=1, role=Role.ADMIN)
    assert isinstance(authorize(principal, operation, 42), Allowed)


@pytest.mark.parametrize(
    "operation",
    [Operation.READ_LEDGER, Operation.APPEND_ENTRY, Operation.EDIT_ENTRY, Operation.COMPUTE_COMPENSATION],
)
def test_manager_can_work_with_any_ledger(operation):
    principal = Principal(user_id=2, role=Role.MANAGER)
    assert authorize(principal, operation, 99)


@pytest.mark.parametrize("operation", sorted(ADMIN_OPERATIONS, key=lambda o: o.value))
def test_manager_denied_administrative_actions(operation):
    decision = authorize(Principal(user_id=2, role=Role.MANAGER), operation, 5)
    assert isinstance(decision, Denied)
    assert decision.reason == DenyReason.INSUFFICIENT_ROLE


def test_employee_reads_own_data():
    me = Principal(user_id=3, role=Role.EMPLOYEE, employee_id=7)
    assert authorize(me, Operation.READ_LEDGER, 7)
    assert authorize(me, Operation.COMPUTE_COMPENSATION, 7)


@pytest.mark.parametrize("operation", [op for op in Operation if op != Operation.READ_RULES])
@pytest.mark.parametrize("target", [1, 8, 1000])
def test_employee_denied_for_any_other_employee(operation, target):
    me = Principal(user_id=3, role=Role.EMPLOYEE, employee_id=7)
    decision = authorize(me, operation, target)
    assert isinstance(decision, Denied)
    assert not decision


@pytest.mark.parametrize(
    "principal",
    [
        Principal(user_id=1, role=Role.ADMIN),
        Principal(user_id=2, role=Role.MANAGER),
        Principal(user_id=3, role=Role.EMPLOYEE, employee_id=7),
    ],
)
def test_every_role_can_read_rules(principal):
    assert isinstance(authorize(principal, Operation.READ_RULES, None), Allowed)


def test_employee_cannot_write_own_ledger():
    me = Principal(user_id=3, role=Role.EMPLOYEE, employee_id=7)
    decision = authorize(me, Operation.APPEND_ENTRY, 7)
    assert decision == Denied(reason=DenyReason.INSUFFICIENT_ROLE, operation="append_entry", employee_id=7)


def test_employee_reading_other_gets_not_owner():
    me = Principal(user_id=3, role=Role.EMPLOYEE, employee_id=7)
    assert authorize(me, Operation.READ_LEDGER, 8).reason == DenyReason.NOT_OWNER


def test_employee_principal_requires_employee_id():
    with pytest.raises(ValidationError):
        Principal(user_id=3, role=Role.EMPLOYEE)


def test_principal_session_roundtrip():
    p = Principal(user_id=3, role=Role.EMPLOYEE, employee_id=7)
    assert Principal.from_session(p.to_session()) == p
