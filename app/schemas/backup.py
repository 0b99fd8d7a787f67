from decimal import Decimal
from typing import Any

from pydantic import Field

from app.db.models import TransactionType
from app.schemas.card import CardResponse
from app.schemas.card_expense import CardExpenseResponse
from app.schemas.common import CamelModel
from app.schemas.custom_icon import CustomIconResponse
from app.schemas.transaction import TransactionResponse


class BackupDump(CamelModel):
    transactions: list[TransactionResponse]
    cards: list[CardResponse]
    expenses: list[CardExpenseResponse]
    icons: list[CustomIconResponse]


# Restore records: timestamps in the dump are ignored and reset by the database.
class TransactionRecord(CamelModel):
    id: int | None = None
    description: str
    amount: Decimal = Field(ge=0)
    type: TransactionType
    category: str = "GERAL"
    date: str
    is_recurring: bool = False
    installments: Any | None = None
    group_id: str | None = None
    related_card_id: int | None = None


class CardRecord(CamelModel):
    id: int | None = None
    name: str
    limit: Decimal
    closing_day: int = Field(ge=1, le=31)
    due_day: int = Field(ge=1, le=31)


class CardExpenseRecord(CamelModel):
    id: int | None = None
    card_id: int
    description: str
    total_amount: Decimal = Field(ge=0)
    purchase_date: str
    category: str = "GERAL"
    installments: Any | None = None
    is_recurring: bool = False


class CustomIconRecord(CamelModel):
    id: int | None = None
    keyword: str
    brand_term: str | None = None
    custom_image_url: str | None = None


class BackupRestore(CamelModel):
    transactions: list[TransactionRecord] | None = None
    cards: list[CardRecord] | None = None
    expenses: list[CardExpenseRecord] | None = None
    icons: list[CustomIconRecord] | None = None
