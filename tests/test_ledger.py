from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from app.services.ledger import summarize_transactions


@dataclass
class Entry:
    amount: Decimal
    type: str
    date: datetime


def test_summary_totals_and_days():
    entries = [
        Entry(Decimal("1000.00"), "INCOME", datetime(2024, 3, 1, 12)),
        Entry(Decimal("200.00"), "EXPENSE", datetime(2024, 3, 1, 12)),
        Entry(Decimal("50.50"), "EXPENSE", datetime(2024, 3, 5, 12)),
    ]

    summary = summarize_transactions(entries)

    assert summary.income == Decimal("1000.00")
    assert summary.expenses == Decimal("250.50")
    assert summary.result == Decimal("749.50")
    assert [day.date for day in summary.days] == ["2024-03-05", "2024-03-01"]
    assert summary.days[0].balance == Decimal("-50.50")
    assert summary.days[1].balance == Decimal("800.00")
    assert summary.days[1].count == 2


def test_summary_empty():
    summary = summarize_transactions([])
    assert summary.income == Decimal("0")
    assert summary.expenses == Decimal("0")
    assert summary.result == Decimal("0")
    assert summary.days == []
