from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable

from app.db.models import TransactionType
from app.services.dates import to_iso_date_only


@dataclass(frozen=True)
class DayBalance:
    date: str
    balance: Decimal
    count: int


@dataclass(frozen=True)
class LedgerSummary:
    income: Decimal
    expenses: Decimal
    result: Decimal
    days: list[DayBalance]


def signed_amount(transaction: Any) -> Decimal:
    amount = Decimal(str(transaction.amount))
    return amount if transaction.type == TransactionType.INCOME.value else -amount


def summarize_transactions(transactions: Iterable[Any]) -> LedgerSummary:
    income = Decimal("0")
    expenses = Decimal("0")
    balances: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    counts: dict[str, int] = defaultdict(int)

    for transaction in transactions:
        amount = signed_amount(transaction)
        if transaction.type == TransactionType.INCOME.value:
            income += amount
        else:
            expenses -= amount
        day = to_iso_date_only(transaction.date)
        balances[day] += amount
        counts[day] += 1

    days = [DayBalance(date=day, balance=balances[day], count=counts[day]) for day in sorted(balances, reverse=True)]
    return LedgerSummary(income=income, expenses=expenses, result=income - expenses, days=days)
