from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, Union

from ..core.enums import Operation
from ..employees.service import EmployeeService
from ..identity.model import Denied, Principal
from ..identity.policy import authorize
from ..ledger.service import LedgerService
from ..payroll.service import CompensationService
from ..rules.service import RuleSetService

logger = logging.getLogger(__name__)


class AccessGate:
    """Single entry point for the transport layer.

    Authorization is a hard precondition: when ``authorize`` returns Denied
    the target service is never called and the Denied value is returned.
    """

    def __init__(
        self,
        *,
        ledger: LedgerService,
        compensation: CompensationService,
        employees: EmployeeService,
        rules: RuleSetService,
    ):
        self._handlers: Mapping[Operation, Callable[..., Any]] = {
            Operation.READ_LEDGER: lambda principal, employee_id, **kw: ledger.list_entries(employee_id, **kw),
            Operation.APPEND_ENTRY: lambda principal, employee_id, **kw: ledger.append_entry(
                principal, employee_id, **kw
            ),
            Operation.EDIT_ENTRY: lambda principal, employee_id, **kw: ledger.edit_entry(
                principal, employee_id, **kw
            ),
            Operation.COMPUTE_COMPENSATION: lambda principal, employee_id, **kw: compensation.compute_breakdown(
                employee_id, **kw
            ),
            Operation.CREATE_EMPLOYEE: lambda principal, employee_id, **kw: employees.create_employee(
                principal, **kw
            ),
            Operation.UPDATE_EMPLOYEE: lambda principal, employee_id, **kw: employees.update_employee(
                principal, employee_id, **kw
            ),
            Operation.DELETE_EMPLOYEE: lambda principal, employee_id, **kw: employees.delete_employee(
                principal, employee_id, **kw
            ),
            Operation.READ_RULES: lambda principal, employee_id, **kw: rules.list_rules(),
            Operation.MODIFY_RULES: lambda principal, employee_id, **kw: rules.set_rule(principal, **kw),
        }

    def guarded_call(
        self,
        principal: Principal,
        operation: Union[Operation, str],
        employee_id: Optional[int],
        **args: Any,
    ) -> Any:
        operation = Operation(operation)
        target = int(employee_id) if employee_id is not None else None

        decision = authorize(principal, operation, target)
        if isinstance(decision, Denied):
            logger.warning(
                "Denied %s on employee %s for user %s (%s): %s",
                operation.value,
                target,
                principal.user_id,
                principal.role.value,
                decision.reason.value,
            )
            return decision

        return self._handlers[operation](principal, target, **args)

    def list_entries(self, principal: Principal, employee_id: int, start: Any, end: Any):
        return self.guarded_call(principal, Operation.READ_LEDGER, employee_id, start=start, end=end)

    def append_entry(self, principal: Principal, employee_id: int, entry: Any):
        return self.guarded_call(principal, Operation.APPEND_ENTRY, employee_id, entry=entry)

    def edit_entry(
        self,
        principal: Principal,
        employee_id: int,
        work_date: Any,
        patch: Mapping[str, Any],
        *,
        expected_version: Optional[int] = None,
    ):
        return self.guarded_call(
            principal,
            Operation.EDIT_ENTRY,
            employee_id,
            work_date=work_date,
            patch=patch,
            expected_version=expected_version,
        )

    def compute_breakdown(self, principal: Principal, employee_id: int, start: Any, end: Any):
        return self.guarded_call(principal, Operation.COMPUTE_COMPENSATION, employee_id, start=start, end=end)

    def create_employee(self, principal: Principal, **fields: Any):
        return self.guarded_call(principal, Operation.CREATE_EMPLOYEE, None, **fields)

    def update_employee(self, principal: Principal, employee_id: int, fields: Mapping[str, Any]):
        return self.guarded_call(principal, Operation.UPDATE_EMPLOYEE, employee_id, fields=fields)

    def delete_employee(self, principal: Principal, employee_id: int, *, reason: Optional[str] = None):
        return self.guarded_call(principal, Operation.DELETE_EMPLOYEE, employee_id, reason=reason)

    def list_rules(self, principal: Principal):
        return self.guarded_call(principal, Operation.READ_RULES, None)

    def set_rule(self, principal: Principal, *, position: Any, base_rate: Any, sales_percentage: Any):
        return self.guarded_call(
            principal,
            Operation.MODIFY_RULES,
            None,
            position=position,
            base_rate=base_rate,
            sales_percentage=sales_percentage,
        )
