from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Iterable, NamedTuple


class BillingRange(NamedTuple):
    start: datetime
    end: datetime


@dataclass(frozen=True)
class CurrentBill:
    expenses: list[Any]
    total: Decimal
    available: Decimal


def first_moment_of_day(year: int, month_index: int, day: int) -> datetime:
    """Midnight of ``day`` in the zero-based ``month_index`` of ``year``.

    Month indexes outside 0..11 roll the year and days past the end of the
    month overflow into the next one (2024-04-31 is 2024-05-01).
    """
    year += month_index // 12
    month = month_index % 12 + 1
    return datetime(year, month, 1) + timedelta(days=day - 1)


def billing_range(month: int, year: int, closing_day: int) -> BillingRange:
    """Statement period for ``month``: previous closing day up to this closing day, end excluded."""
    return BillingRange(
        start=first_moment_of_day(year, month - 2, closing_day),
        end=first_moment_of_day(year, month - 1, closing_day),
    )


def month_range(month: int, year: int) -> BillingRange:
    return BillingRange(
        start=first_moment_of_day(year, month - 1, 1),
        end=first_moment_of_day(year, month, 1),
    )


def summarize_bill(expenses: Iterable[Any], limit: Decimal) -> CurrentBill:
    """Total the ``total_amount`` of expenses already filtered to one statement."""
    items = list(expenses)
    total = sum((Decimal(str(expense.total_amount)) for expense in items), Decimal("0"))
    return CurrentBill(expenses=items, total=total, available=Decimal(str(limit)) - total)
