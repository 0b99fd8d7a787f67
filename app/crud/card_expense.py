from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging_config import get_logger
from app.db.models import CardExpense
from app.services.billing import BillingRange

logger = get_logger(__name__)


class CardExpenseCRUD:
    @staticmethod
    async def get_by_id(db: AsyncSession, expense_id: int) -> CardExpense | None:
        expense = await db.get(CardExpense, expense_id)
        logger.debug(
            "Fetched card expense by id",
            extra={
                "details": {
                    "event": "card_expense_lookup_id",
                    "extra": {"expense_id": expense_id, "found": bool(expense)},
                }
            },
        )
        return expense

    @staticmethod
    async def find_many(
        db: AsyncSession,
        card_id: int | None = None,
        date_range: BillingRange | None = None,
    ) -> list[CardExpense]:
        stmt = select(CardExpense)
        if card_id is not None:
            stmt = stmt.where(CardExpense.card_id == card_id)
        if date_range is not None:
            stmt = stmt.where(
                CardExpense.purchase_date >= date_range.start,
                CardExpense.purchase_date < date_range.end,
            )
        result = await db.execute(stmt.order_by(CardExpense.purchase_date.desc(), CardExpense.id.desc()))
        expenses = list(result.scalars().all())
        logger.debug(
            "Listed card expenses",
            extra={
                "details": {
                    "event": "card_expense_list",
                    "extra": {
                        "card_id": card_id,
                        "start": date_range.start.isoformat() if date_range else None,
                        "end": date_range.end.isoformat() if date_range else None,
                        "count": len(expenses),
                    },
                }
            },
        )
        return expenses

    @staticmethod
    async def create(db: AsyncSession, **kwargs) -> CardExpense:
        expense = CardExpense(is_recurring=False, installments=None, **kwargs)
        db.add(expense)
        await db.commit()
        await db.refresh(expense)
        logger.info(
            "Card expense created",
            extra={
                "details": {
                    "event": "card_expense_create",
                    "extra": {"expense_id": expense.id, "card_id": expense.card_id},
                }
            },
        )
        return expense

    @staticmethod
    async def delete(db: AsyncSession, expense: CardExpense) -> None:
        await db.delete(expense)
        await db.commit()
        logger.warning(
            "Card expense deleted",
            extra={
                "details": {
                    "event": "card_expense_delete",
                    "extra": {"expense_id": expense.id, "card_id": expense.card_id},
                }
            },
        )
