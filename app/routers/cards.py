from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import Period, get_period
from app.core.errors import NotFoundError
from app.crud.card_expense import CardExpenseCRUD
from app.crud.credit_card import CreditCardCRUD
from app.db.models import CreditCard
from app.db.session import get_db
from app.schemas.card import CardCreate, CardResponse, CardUpdate, CardWithBillResponse, CurrentBillResponse
from app.schemas.card_expense import CardExpenseResponse
from app.schemas.common import OkResponse
from app.services.billing import billing_range, summarize_bill
from app.services.validation import require_amount, require_day, require_text

router = APIRouter(prefix="/cards", tags=["cards"])


async def _with_current_bill(db: AsyncSession, card: CreditCard, period: Period | None) -> CardWithBillResponse:
    if period is None:
        return CardWithBillResponse.model_validate(card)
    date_range = billing_range(period.month, period.year, card.closing_day)
    expenses = await CardExpenseCRUD.find_many(db, card_id=card.id, date_range=date_range)
    bill = summarize_bill(expenses, card.limit)
    return CardWithBillResponse(
        **CardResponse.model_validate(card).model_dump(),
        current_bill=CurrentBillResponse(
            expenses=[CardExpenseResponse.model_validate(expense) for expense in bill.expenses],
            total=bill.total,
            available=bill.available,
        ),
    )


async def _get_card_or_404(db: AsyncSession, card_id: int) -> CreditCard:
    card = await CreditCardCRUD.get_by_id(db, card_id)
    if not card:
        raise NotFoundError("card not found")
    return card


@router.get("", response_model=list[CardWithBillResponse], response_model_exclude_unset=True)
async def list_cards(
    period: Period | None = Depends(get_period),
    db: AsyncSession = Depends(get_db),
):
    cards = await CreditCardCRUD.find_many(db)
    return [await _with_current_bill(db, card, period) for card in cards]


@router.post("", response_model=CardResponse, status_code=status.HTTP_201_CREATED)
async def create_card(payload: CardCreate, db: AsyncSession = Depends(get_db)):
    return await CreditCardCRUD.create(
        db,
        name=require_text(payload.name, "name"),
        limit=require_amount(payload.limit, "limit"),
        closing_day=require_day(payload.closing_day, "closingDay"),
        due_day=require_day(payload.due_day, "dueDay"),
    )


@router.get("/{card_id}", response_model=CardWithBillResponse, response_model_exclude_unset=True)
async def get_card(
    card_id: int,
    period: Period | None = Depends(get_period),
    db: AsyncSession = Depends(get_db),
):
    card = await _get_card_or_404(db, card_id)
    return await _with_current_bill(db, card, period)


@router.put("/{card_id}", response_model=CardResponse)
async def update_card(card_id: int, payload: CardUpdate, db: AsyncSession = Depends(get_db)):
    card = await _get_card_or_404(db, card_id)
    sent = payload.model_fields_set
    patch: dict = {}
    if "name" in sent:
        patch["name"] = require_text(payload.name, "name")
    if "limit" in sent:
        patch["limit"] = require_amount(payload.limit, "limit")
    if "closing_day" in sent:
        patch["closing_day"] = require_day(payload.closing_day, "closingDay")
    if "due_day" in sent:
        patch["due_day"] = require_day(payload.due_day, "dueDay")
    return await CreditCardCRUD.update(db, card, **patch)


@router.delete("/{card_id}", response_model=OkResponse)
async def delete_card(card_id: int, db: AsyncSession = Depends(get_db)):
    card = await _get_card_or_404(db, card_id)
    await CreditCardCRUD.delete(db, card)
    return OkResponse()
