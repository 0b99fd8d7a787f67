from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import Period, get_period
from app.crud.transaction import TransactionCRUD
from app.db.session import get_db
from app.schemas.summary import LedgerSummaryResponse
from app.services.billing import month_range
from app.services.ledger import summarize_transactions

router = APIRouter(prefix="/summary", tags=["summary"])


@router.get("", response_model=LedgerSummaryResponse)
async def ledger_summary(
    period: Period | None = Depends(get_period),
    db: AsyncSession = Depends(get_db),
):
    """Income, expenses and per-day balance for a month, or for all time without one."""
    date_range = month_range(period.month, period.year) if period else None
    transactions = await TransactionCRUD.find_many(db, date_range)
    return LedgerSummaryResponse.model_validate(summarize_transactions(transactions))
