from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .access.gate import AccessGate
from .core.constants import DEFAULT_FUTURE_GRACE_DAYS
from .core.enums import MergePolicy, Position
from .database.connection import DBConfig, DatabaseConnection
from .database.memory_store import (
    InMemoryAccountRepository,
    InMemoryEmployeeRepository,
    InMemoryEntryRepository,
    InMemoryRuleSetRepository,
)
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .identity.mysql_account_repository import MySQLAccountRepository
from .identity.repository import AccountRepository
from .identity.service import AuthService
from .ledger.locks import KeyedLockTable
from .ledger.mysql_entry_repository import MySQLEntryRepository
from .ledger.repository import EntryRepository
from .ledger.service import LedgerService
from .payroll.service import CompensationService
from .rules.model import CompensationRule
from .rules.mysql_rule_repository import MySQLRuleSetRepository
from .rules.repository import RuleSetRepository
from .rules.service import RuleSetService

STORAGE_MYSQL = "mysql"
STORAGE_MEMORY = "memory"


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    accounts_repo: AccountRepository
    employees_repo: EmployeeRepository
    entries_repo: EntryRepository
    rules_repo: RuleSetRepository

    auth_service: AuthService
    employee_service: EmployeeService
    ledger_service: LedgerService
    rule_service: RuleSetService
    compensation_service: CompensationService
    gate: AccessGate


def parse_default_rules(default_rules: Optional[Mapping[str, Mapping[str, Any]]]) -> dict[Position, CompensationRule]:
    rules = {}
    for position, values in (default_rules or {}).items():
        rule = CompensationRule.build(position, values["base_rate"], values["sales_percentage"])
        rules[rule.position] = rule
    return rules


def build_container(
    *,
    storage_backend: str = STORAGE_MYSQL,
    db_config: Optional[dict] = None,
    merge_policy: str = MergePolicy.REJECT.value,
    future_grace_days: int = DEFAULT_FUTURE_GRACE_DAYS,
    default_rules: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ledger_options: Optional[dict] = None,
) -> Container:
    """Wire repositories and services.

    The connection factory is created here and handed to each repository;
    its lifetime is that of the returned container.
    """
    conn: Optional[DatabaseConnection] = None

    if storage_backend == STORAGE_MEMORY:
        accounts_repo = InMemoryAccountRepository()
        employees_repo = InMemoryEmployeeRepository()
        entries_repo = InMemoryEntryRepository()
        rules_repo = InMemoryRuleSetRepository(parse_default_rules(default_rules))
    elif storage_backend == STORAGE_MYSQL:
        if db_config is None:
            raise ValueError("db_config is required for the mysql storage backend")
        conn = DatabaseConnection(DBConfig.from_dict(db_config))
        accounts_repo = MySQLAccountRepository(conn)
        employees_repo = MySQLEmployeeRepository(conn)
        entries_repo = MySQLEntryRepository(conn)
        rules_repo = MySQLRuleSetRepository(conn)
    else:
        raise ValueError(f"Unknown storage backend: {storage_backend!r}")

    auth_service = AuthService(accounts_repo)
    employee_service = EmployeeService(employees_repo, entries_repo)
    ledger_service = LedgerService(
        entries_repo,
        employees_repo,
        merge_policy=MergePolicy(merge_policy),
        future_grace_days=future_grace_days,
        locks=KeyedLockTable(),
        **(ledger_options or {}),
    )
    rule_service = RuleSetService(rules_repo)
    compensation_service = CompensationService(employees_repo, ledger_service, rule_service)
    gate = AccessGate(
        ledger=ledger_service,
        compensation=compensation_service,
        employees=employee_service,
        rules=rule_service,
    )

    return Container(
        conn=conn,
        accounts_repo=accounts_repo,
        employees_repo=employees_repo,
        entries_repo=entries_repo,
        rules_repo=rules_repo,
        auth_service=auth_service,
        employee_service=employee_service,
        ledger_service=ledger_service,
        rule_service=rule_service,
        compensation_service=compensation_service,
        gate=gate,
    )
