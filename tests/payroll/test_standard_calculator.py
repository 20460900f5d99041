from datetime import date, datetime
from decimal import Decimal

from src.shop_payroll.shop_payroll.ledger.model import WorkDayEntry
from src.shop_payroll.shop_payroll.payroll.calculator.standard_calculator import StandardCompensationCalculator
from src.shop_payroll.shop_payroll.rules.model import ResolvedRate


def _entry(day: int, sales="0", penalties="0", shop=None) -> WorkDayEntry:
    return WorkDayEntry(
        entry_id=day,
        employee_id=1,
        work_date=date(2026, 3, day),
        shop=shop,
        sales=Decimal(sales),
        penalties=Decimal(penalties),
        notes=None,
        version=1,
        created_by=1,
        created_at=datetime(2026, 3, day, 20, 0),
    )


def _compute(rate: ResolvedRate, entries):
    return StandardCompensationCalculator().compute(
        employee_id=1, start=date(2026, 3, 1), end=date(2026, 3, 31), rate=rate, entries=entries
    )


def test_reference_example():
    rate = ResolvedRate(base_rate=Decimal("500"), sales_percentage=Decimal("0.1"))
    b = _compute(rate, [_entry(1, sales="1000", penalties="50"), _entry(2)])

    assert b.worked_days == 2
    assert b.total_sales == Decimal("1000")
    assert b.total_penalties == Decimal("50")
    assert b.sales_earnings == Decimal("100")
    assert b.period_base_rate == Decimal("1000")
    assert b.gross_pay == Decimal("1050.00")


def test_empty_entries_all_zero():
    b = _compute(ResolvedRate(Decimal("500"), Decimal("0.1")), [])

    assert b.worked_days == 0
    assert b.total_sales == 0
    assert b.total_penalties == 0
    assert b.sales_earnings == 0
    assert b.period_base_rate == 0
    assert b.gross_pay == Decimal("0.00")


def test_negative_gross_pay_not_clamped():
    b = _compute(ResolvedRate(Decimal("10"), Decimal("0")), [_entry(1, penalties="25")])
    assert b.gross_pay == Decimal("-15.00")


def test_rounding_happens_once_half_up():
    # 3 x 0.335 = 1.005 exactly; rounding each day first would give 1.02
    rate = ResolvedRate(Decimal("0"), Decimal("0.5"))
    b = _compute(rate, [_entry(1, sales="0.67"), _entry(2, sales="0.67"), _entry(3, sales="0.67")])

    assert b.sales_earnings == Decimal("1.005")
    assert b.gross_pay == Decimal("1.01")


def test_sales_grouped_by_shop():
    rate = ResolvedRate(Decimal("0"), Decimal("0"))
    b = _compute(rate, [_entry(1, "10", shop="B"), _entry(2, "5", shop="A"), _entry(3, "1", shop="B"), _entry(4, "2")])

    assert b.sales_by_shop == {"-": Decimal("2"), "A": Decimal("5"), "B": Decimal("11")}
