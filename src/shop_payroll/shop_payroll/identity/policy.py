from __future__ import annotations

from typing import Optional

from ..core.enums import (
    ADMIN_OPERATIONS,
    LEDGER_WRITE_OPERATIONS,
    READ_OPERATIONS,
    DenyReason,
    Operation,
    Role,
)
from .model import Allowed, Decision, Denied, Principal

ALLOWED = Allowed()


def authorize(principal: Principal, operation: Operation, target_employee_id: Optional[int]) -> Decision:
    """Decide whether ``principal`` may run ``operation`` on ``target_employee_id``.

    Rules are evaluated in order and the first match wins:

    - any role: reading the rule set, which is not employee data.
    - admin: everything.
    - manager: ledger reads/writes and compensation for any employee; no administrative actions.
    - employee: reads of their own data only.
    """
    operation = Operation(operation)

    def deny(reason: DenyReason) -> Denied:
        return Denied(reason=reason, operation=operation.value, employee_id=target_employee_id)

    if operation == Operation.READ_RULES:
        return ALLOWED

    if principal.role == Role.ADMIN:
        return ALLOWED

    if principal.role == Role.MANAGER:
        if operation in ADMIN_OPERATIONS:
            return deny(DenyReason.INSUFFICIENT_ROLE)
        return ALLOWED

    if principal.role == Role.EMPLOYEE:
        if operation in LEDGER_WRITE_OPERATIONS or operation in ADMIN_OPERATIONS:
            return deny(DenyReason.INSUFFICIENT_ROLE)
        if operation in READ_OPERATIONS and target_employee_id == principal.employee_id:
            return ALLOWED
        return deny(DenyReason.NOT_OWNER)

    return deny(DenyReason.INSUFFICIENT_ROLE)
