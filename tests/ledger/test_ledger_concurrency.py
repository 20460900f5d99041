from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from src.shop_payroll.shop_payroll.core.enums import MergePolicy
from src.shop_payroll.shop_payroll.core.exceptions import ConflictError, DuplicateDateError
from src.shop_payroll.shop_payroll.database.memory_store import InMemoryEntryRepository
from src.shop_payroll.shop_payroll.ledger.locks import KeyedLockTable
from src.shop_payroll.shop_payroll.ledger.service import LedgerService


class OverlappingReadsRepository(InMemoryEntryRepository):
    """Once armed, the next two single-entry reads wait for each other."""

    def __init__(self) -> None:
        super().__init__()
        self._barrier = threading.Barrier(2, timeout=5)
        self._pending = 0
        self._count_lock = threading.Lock()

    def arm(self) -> None:
        self._pending = 2

    def load_entry(self, employee_id, work_date):
        with self._count_lock:
            wait = self._pending > 0
            if wait:
                self._pending -= 1
        if wait:
            self._barrier.wait()
        return super().load_entry(employee_id, work_date)


@pytest.fixture
def overlapping(employees_repo, fixed_now):
    repo = OverlappingReadsRepository()
    return repo, LedgerService(repo, employees_repo, clock=lambda: fixed_now)


def _run_pair(fn_a, fn_b):
    barrier = threading.Barrier(2)

    def call(fn):
        barrier.wait()
        try:
            return fn()
        except Exception as exc:  # collected for assertions
            return exc

    with ThreadPoolExecutor(max_workers=2) as pool:
        fa = pool.submit(call, fn_a)
        fb = pool.submit(call, fn_b)
        return [fa.result(), fb.result()]


def test_concurrent_edits_on_same_day_exactly_one_wins(ledger, admin, manager):
    ledger.append_entry(admin, 1, {"date": "2026-03-10", "sales": 100})
    seen_version = ledger.get_entry(1, "2026-03-10").version

    results = _run_pair(
        lambda: ledger.edit_entry(admin, 1, "2026-03-10", {"sales": 111}, expected_version=seen_version),
        lambda: ledger.edit_entry(manager, 1, "2026-03-10", {"sales": 222}, expected_version=seen_version),
    )

    conflicts = [r for r in results if isinstance(r, ConflictError)]
    winners = [r for r in results if not isinstance(r, Exception)]
    assert len(conflicts) == 1
    assert len(winners) == 1
    assert ledger.get_entry(1, "2026-03-10").sales == winners[0].sales
    assert winners[0].version == seen_version + 1


def test_unversioned_concurrent_edits_exactly_one_wins(overlapping, admin, manager):
    repo, ledger = overlapping
    ledger.append_entry(admin, 1, {"date": "2026-03-10", "sales": 100})
    repo.arm()

    results = _run_pair(
        lambda: ledger.edit_entry(admin, 1, "2026-03-10", {"sales": 111}),
        lambda: ledger.edit_entry(manager, 1, "2026-03-10", {"sales": 222}),
    )

    conflicts = [r for r in results if isinstance(r, ConflictError)]
    winners = [r for r in results if not isinstance(r, Exception)]
    assert len(conflicts) == 1
    assert len(winners) == 1
    stored = ledger.get_entry(1, "2026-03-10")
    assert stored.sales == winners[0].sales
    assert stored.version == 2


def test_sequential_unversioned_edits_both_apply(ledger, admin):
    ledger.append_entry(admin, 1, {"date": "2026-03-10", "sales": 100})
    ledger.edit_entry(admin, 1, "2026-03-10", {"sales": 111})
    second = ledger.edit_entry(admin, 1, "2026-03-10", {"notes": "checked"})

    assert second.sales == Decimal("111")
    assert second.version == 3


def test_concurrent_appends_same_day_loser_gets_conflict(overlapping, admin, manager):
    repo, ledger = overlapping
    repo.arm()

    results = _run_pair(
        lambda: ledger.append_entry(admin, 1, {"date": "2026-03-10", "sales": 1}),
        lambda: ledger.append_entry(manager, 1, {"date": "2026-03-10", "sales": 2}),
    )

    assert len([r for r in results if isinstance(r, ConflictError)]) == 1
    assert not any(isinstance(r, DuplicateDateError) for r in results)
    assert len(ledger.list_entries(1, "2026-03-10", "2026-03-10")) == 1


def test_append_after_existing_day_is_a_duplicate(overlapping, admin):
    _, ledger = overlapping
    ledger.append_entry(admin, 1, {"date": "2026-03-10"})

    with pytest.raises(DuplicateDateError):
        ledger.append_entry(admin, 1, {"date": "2026-03-10"})


def test_concurrent_accumulate_loses_nothing(make_ledger, admin):
    ledger = make_ledger(merge_policy=MergePolicy.ACCUMULATE)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda _: ledger.append_entry(admin, 1, {"date": "2026-03-10", "sales": 1}), range(40)))

    assert ledger.get_entry(1, "2026-03-10").sales == Decimal("40")


def test_storage_level_version_check_rejects_stale_write(entries_repo, ledger, admin):
    entry = ledger.append_entry(admin, 1, {"date": "2026-03-10"})
    ledger.edit_entry(admin, 1, "2026-03-10", {"notes": "first"})

    with pytest.raises(ConflictError):
        entries_repo.update_entry(entry, expected_version=entry.version)


def test_keyed_locks_are_per_key():
    locks = KeyedLockTable()
    with locks.hold(1):
        acquired = threading.Event()

        def other_key():
            with locks.hold(2):
                acquired.set()

        t = threading.Thread(target=other_key)
        t.start()
        t.join(timeout=2)
        assert acquired.is_set()
