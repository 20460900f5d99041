from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Principal role used for authorization."""

    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class Position(str, Enum):
    """Job position; keys the compensation rule set."""

    SELLER = "seller"
    ADMIN = "admin"
    MANAGER = "manager"
    COURIER = "courier"


class Operation(str, Enum):
    READ_LEDGER = "read_ledger"
    APPEND_ENTRY = "append_entry"
    EDIT_ENTRY = "edit_entry"
    COMPUTE_COMPENSATION = "compute_compensation"
    CREATE_EMPLOYEE = "create_employee"
    UPDATE_EMPLOYEE = "update_employee"
    DELETE_EMPLOYEE = "delete_employee"
    READ_RULES = "read_rules"
    MODIFY_RULES = "modify_rules"


class DenyReason(str, Enum):
    INSUFFICIENT_ROLE = "insufficient-role"
    NOT_OWNER = "not-owner"


class RateSource(str, Enum):
    """Where a resolved rate came from."""

    EMPLOYEE = "employee"
    POSITION = "position"
    MIXED = "mixed"


class MergePolicy(str, Enum):
    """What append does when an entry for the same date already exists."""

    REJECT = "reject"
    ACCUMULATE = "accumulate"


READ_OPERATIONS = frozenset({Operation.READ_LEDGER, Operation.COMPUTE_COMPENSATION})
LEDGER_WRITE_OPERATIONS = frozenset({Operation.APPEND_ENTRY, Operation.EDIT_ENTRY})
ADMIN_OPERATIONS = frozenset(
    {
        Operation.CREATE_EMPLOYEE,
        Operation.UPDATE_EMPLOYEE,
        Operation.DELETE_EMPLOYEE,
        Operation.MODIFY_RULES,
    }
)
