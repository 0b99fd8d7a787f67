from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import Period, get_period, parse_id
from app.core.errors import NotFoundError, ValidationError
from app.crud.credit_card import CreditCardCRUD
from app.crud.transaction import TransactionCRUD
from app.db.session import get_db
from app.schemas.common import OkResponse
from app.schemas.transaction import TransactionCreate, TransactionResponse, TransactionUpdate
from app.services.billing import month_range
from app.services.dates import normalize_date
from app.services.validation import normalize_category, require_amount, require_text, require_transaction_type

router = APIRouter(prefix="/transactions", tags=["transactions"])


async def _ensure_card_exists(db: AsyncSession, card_id: int | None) -> None:
    if card_id is not None and await CreditCardCRUD.get_by_id(db, card_id) is None:
        raise NotFoundError("relatedCardId not found")


@router.get("", response_model=list[TransactionResponse])
async def list_transactions(
    period: Period | None = Depends(get_period),
    db: AsyncSession = Depends(get_db),
):
    date_range = month_range(period.month, period.year) if period else None
    return await TransactionCRUD.find_many(db, date_range)


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(payload: TransactionCreate, db: AsyncSession = Depends(get_db)):
    description = require_text(payload.description, "description")
    amount = require_amount(payload.amount, "amount")
    transaction_type = require_transaction_type(payload.type)
    if not payload.date:
        raise ValidationError("date is required")
    date = normalize_date(payload.date)
    await _ensure_card_exists(db, payload.related_card_id)

    return await TransactionCRUD.create(
        db,
        description=description,
        amount=amount,
        type=transaction_type.value,
        category=normalize_category(payload.category),
        date=date,
        related_card_id=payload.related_card_id,
    )


@router.put("", response_model=TransactionResponse)
async def update_transaction(body: TransactionUpdate, db: AsyncSession = Depends(get_db)):
    transaction_id = parse_id(body.id)
    transaction = await TransactionCRUD.get_by_id(db, transaction_id)
    if not transaction:
        raise NotFoundError("transaction not found")

    payload = body.payload
    sent = payload.model_fields_set
    patch: dict = {}
    if "description" in sent:
        patch["description"] = require_text(payload.description, "description")
    if "amount" in sent:
        patch["amount"] = require_amount(payload.amount, "amount")
    if "type" in sent:
        patch["type"] = require_transaction_type(payload.type).value
    if "category" in sent:
        patch["category"] = normalize_category(payload.category)
    if "date" in sent:
        if not payload.date:
            raise ValidationError("date is required")
        patch["date"] = normalize_date(payload.date)
    if "related_card_id" in sent:
        await _ensure_card_exists(db, payload.related_card_id)
        patch["related_card_id"] = payload.related_card_id

    return await TransactionCRUD.update(db, transaction, **patch)


@router.delete("", response_model=OkResponse)
async def delete_transaction(
    id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    transaction = await TransactionCRUD.get_by_id(db, parse_id(id))
    if not transaction:
        raise NotFoundError("transaction not found")
    await TransactionCRUD.delete(db, transaction)
    return OkResponse()
