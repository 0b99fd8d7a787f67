from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

import pytest

from app.services.billing import billing_range, first_moment_of_day, month_range, summarize_bill


@dataclass
class Expense:
    total_amount: Decimal


def test_march_statement_for_closing_day_17():
    start, end = billing_range(3, 2024, 17)
    assert start == datetime(2024, 2, 17)
    assert end == datetime(2024, 3, 17)


def test_january_statement_reaches_previous_year():
    start, end = billing_range(1, 2024, 10)
    assert start == datetime(2023, 12, 10)
    assert end == datetime(2024, 1, 10)


@pytest.mark.parametrize("closing_day", [1, 5, 17, 28, 30, 31])
@pytest.mark.parametrize("month", range(1, 12))
def test_adjacent_months_tile(month, closing_day):
    assert billing_range(month, 2024, closing_day).end == billing_range(month + 1, 2024, closing_day).start


def test_december_tiles_into_next_january():
    assert billing_range(12, 2023, 15).end == billing_range(1, 2024, 15).start


def test_day_overflow_rolls_into_next_month():
    # April has 30 days
    assert first_moment_of_day(2024, 3, 31) == datetime(2024, 5, 1)
    start, end = billing_range(5, 2024, 31)
    assert start == datetime(2024, 5, 1)
    assert end == datetime(2024, 5, 31)


def test_month_range_covers_whole_month():
    assert month_range(2, 2024) == (datetime(2024, 2, 1), datetime(2024, 3, 1))
    assert month_range(12, 2024) == (datetime(2024, 12, 1), datetime(2025, 1, 1))


def test_summarize_bill_sums_exactly():
    expenses = [Expense(Decimal("0.10")), Expense(Decimal("0.20")), Expense(Decimal("300.00"))]
    bill = summarize_bill(expenses, Decimal("1000.00"))
    assert bill.total == Decimal("300.30")
    assert bill.available == Decimal("699.70")
    assert bill.expenses == expenses


def test_summarize_bill_empty():
    bill = summarize_bill([], Decimal("1000.00"))
    assert bill.total == Decimal("0")
    assert bill.available == Decimal("1000.00")
    assert bill.expenses == []


def test_summarize_bill_can_go_negative():
    bill = summarize_bill([Expense(Decimal("1200.00"))], Decimal("1000.00"))
    assert bill.available == Decimal("-200.00")


def test_summarize_bill_is_idempotent():
    expenses = [Expense(Decimal("300.00")), Expense(Decimal("150.00"))]
    assert summarize_bill(expenses, Decimal("1000")) == summarize_bill(expenses, Decimal("1000"))


def test_summarize_bill_accepts_generators():
    bill = summarize_bill((Expense(Decimal(v)) for v in ("1.00", "2.00")), Decimal("10"))
    assert bill.total == Decimal("3.00")
    assert len(bill.expenses) == 2
