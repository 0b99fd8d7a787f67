from .credit_card import CreditCard
from .card_expense import CardExpense
from .transaction import Transaction, TransactionType
from .custom_icon import CustomIcon

__all__ = [
    "CreditCard",
    "CardExpense",
    "Transaction",
    "TransactionType",
    "CustomIcon",
]
