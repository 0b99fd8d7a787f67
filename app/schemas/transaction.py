from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import Field, field_serializer

from app.db.models import TransactionType
from app.schemas.common import CamelModel, Money
from app.services.dates import to_iso_date_only


class TransactionFields(CamelModel):
    description: str | None = None
    amount: Decimal | None = None
    type: str | None = None
    category: str | None = None
    date: str | None = None
    related_card_id: int | None = None


class TransactionCreate(TransactionFields):
    pass


class TransactionUpdate(CamelModel):
    id: int | None = None
    payload: TransactionFields = Field(default_factory=TransactionFields)


class TransactionResponse(CamelModel):
    id: int
    description: str
    amount: Money
    type: TransactionType
    category: str
    date: datetime
    is_recurring: bool = False
    installments: Any | None = None
    group_id: str | None = None
    related_card_id: int | None = None
    created_at: datetime
    updated_at: datetime

    @field_serializer("date")
    def serialize_date(self, value: datetime) -> str:
        return to_iso_date_only(value)
