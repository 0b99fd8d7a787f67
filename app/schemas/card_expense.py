from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import field_serializer

from app.schemas.common import CamelModel, Money
from app.services.dates import to_iso_date_only


class CardExpenseCreate(CamelModel):
    description: str | None = None
    total_amount: Decimal | None = None
    purchase_date: str | None = None
    category: str | None = None
    card_id: int | None = None


class CardExpenseResponse(CamelModel):
    id: int
    card_id: int
    description: str
    total_amount: Money
    purchase_date: datetime
    category: str
    installments: Any | None = None
    is_recurring: bool = False
    created_at: datetime
    updated_at: datetime

    @field_serializer("purchase_date")
    def serialize_purchase_date(self, value: datetime) -> str:
        return to_iso_date_only(value)
