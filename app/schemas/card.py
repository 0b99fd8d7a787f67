from datetime import datetime
from decimal import Decimal

from app.schemas.card_expense import CardExpenseResponse
from app.schemas.common import CamelModel, Money


class CardFields(CamelModel):
    name: str | None = None
    limit: Decimal | None = None
    closing_day: int | None = None
    due_day: int | None = None


class CardCreate(CardFields):
    pass


class CardUpdate(CardFields):
    pass


class CardResponse(CamelModel):
    id: int
    name: str
    limit: Money
    closing_day: int
    due_day: int
    created_at: datetime
    updated_at: datetime


class CurrentBillResponse(CamelModel):
    expenses: list[CardExpenseResponse]
    total: Money
    available: Money


class CardWithBillResponse(CardResponse):
    current_bill: CurrentBillResponse | None = None
