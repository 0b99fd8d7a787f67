from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import parse_id
from app.core.errors import NotFoundError, ValidationError
from app.crud.card_expense import CardExpenseCRUD
from app.crud.credit_card import CreditCardCRUD
from app.db.session import get_db
from app.schemas.card_expense import CardExpenseCreate, CardExpenseResponse
from app.schemas.common import OkResponse
from app.services.dates import normalize_date
from app.services.validation import normalize_category, require_amount, require_text

router = APIRouter(prefix="/card-expenses", tags=["card-expenses"])


@router.post("", response_model=CardExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_card_expense(payload: CardExpenseCreate, db: AsyncSession = Depends(get_db)):
    description = require_text(payload.description, "description")
    total_amount = require_amount(payload.total_amount, "totalAmount")
    if not payload.purchase_date:
        raise ValidationError("purchaseDate is required")
    purchase_date = normalize_date(payload.purchase_date)
    if payload.card_id is None:
        raise ValidationError("cardId is required")

    if await CreditCardCRUD.get_by_id(db, payload.card_id) is None:
        raise NotFoundError("cardId not found")

    return await CardExpenseCRUD.create(
        db,
        card_id=payload.card_id,
        description=description,
        total_amount=total_amount,
        purchase_date=purchase_date,
        category=normalize_category(payload.category),
    )


@router.delete("", response_model=OkResponse)
async def delete_card_expense(
    id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    expense = await CardExpenseCRUD.get_by_id(db, parse_id(id))
    if not expense:
        raise NotFoundError("card expense not found")
    await CardExpenseCRUD.delete(db, expense)
    return OkResponse()
