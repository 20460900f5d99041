from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from src.shop_payroll.shop_payroll.core.enums import MergePolicy, Position, Role
from src.shop_payroll.shop_payroll.database.memory_store import (
    InMemoryEmployeeRepository,
    InMemoryEntryRepository,
    InMemoryRuleSetRepository,
)
from src.shop_payroll.shop_payroll.identity.model import Principal
from src.shop_payroll.shop_payroll.ledger.service import LedgerService
from src.shop_payroll.shop_payroll.rules.model import CompensationRule

FIXED_NOW = datetime(2026, 3, 15, 12, 0, 0)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def admin() -> Principal:
    return Principal(user_id=1, role=Role.ADMIN)


@pytest.fixture
def manager() -> Principal:
    return Principal(user_id=2, role=Role.MANAGER)


@pytest.fixture
def employees_repo() -> InMemoryEmployeeRepository:
    repo = InMemoryEmployeeRepository()
    repo.add_employee(full_name="Seller One", position=Position.SELLER, base_rate=None, sales_percentage=None)
    repo.add_employee(full_name="Courier Two", position=Position.COURIER, base_rate=None, sales_percentage=None)
    return repo


@pytest.fixture
def entries_repo() -> InMemoryEntryRepository:
    return InMemoryEntryRepository()


@pytest.fixture
def rules_repo() -> InMemoryRuleSetRepository:
    return InMemoryRuleSetRepository(
        {
            Position.SELLER: CompensationRule(Position.SELLER, Decimal("500"), Decimal("0.1")),
            Position.COURIER: CompensationRule(Position.COURIER, Decimal("400"), Decimal("0")),
        }
    )


@pytest.fixture
def make_ledger(entries_repo, employees_repo):
    def _make(**kwargs) -> LedgerService:
        kwargs.setdefault("clock", lambda: FIXED_NOW)
        kwargs.setdefault("merge_policy", MergePolicy.REJECT)
        return LedgerService(entries_repo, employees_repo, **kwargs)

    return _make


@pytest.fixture
def ledger(make_ledger) -> LedgerService:
    return make_ledger()
