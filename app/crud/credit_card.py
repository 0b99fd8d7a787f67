from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import PersistenceError
from app.core.logging_config import get_logger
from app.db.models import CardExpense, CreditCard, Transaction

logger = get_logger(__name__)


class CreditCardCRUD:
    @staticmethod
    async def get_by_id(db: AsyncSession, card_id: int) -> CreditCard | None:
        card = await db.get(CreditCard, card_id)
        logger.debug(
            "Fetched card by id",
            extra={"details": {"event": "card_lookup_id", "extra": {"card_id": card_id, "found": bool(card)}}},
        )
        return card

    @staticmethod
    async def find_many(db: AsyncSession) -> list[CreditCard]:
        result = await db.execute(select(CreditCard).order_by(CreditCard.id))
        cards = list(result.scalars().all())
        logger.debug(
            "Listed cards",
            extra={"details": {"event": "card_list", "extra": {"count": len(cards)}}},
        )
        return cards

    @staticmethod
    async def create(db: AsyncSession, **kwargs) -> CreditCard:
        card = CreditCard(**kwargs)
        db.add(card)
        await db.commit()
        await db.refresh(card)
        logger.info(
            "Card created",
            extra={"details": {"event": "card_create", "extra": {"card_id": card.id}}},
        )
        return card

    @staticmethod
    async def update(db: AsyncSession, card: CreditCard, **patch) -> CreditCard:
        for field, value in patch.items():
            setattr(card, field, value)
        await db.commit()
        await db.refresh(card)
        logger.info(
            "Card updated",
            extra={
                "details": {
                    "event": "card_update",
                    "extra": {"card_id": card.id, "updated_fields": sorted(patch)},
                }
            },
        )
        return card

    @staticmethod
    async def delete(db: AsyncSession, card: CreditCard) -> None:
        """Delete the card with its expenses and detach its payments, all or nothing."""
        card_id = card.id
        try:
            expenses = await db.execute(delete(CardExpense).where(CardExpense.card_id == card_id))
            payments = await db.execute(
                update(Transaction).where(Transaction.related_card_id == card_id).values(related_card_id=None)
            )
            await db.execute(delete(CreditCard).where(CreditCard.id == card_id))
            await db.commit()
        except SQLAlchemyError as exc:
            await db.rollback()
            logger.error(
                "Card delete rolled back",
                extra={"details": {"event": "card_delete_failed", "extra": {"card_id": card_id, "error": str(exc)}}},
            )
            raise PersistenceError(str(exc)) from exc
        logger.warning(
            "Card deleted",
            extra={
                "details": {
                    "event": "card_delete",
                    "extra": {
                        "card_id": card_id,
                        "expenses_deleted": expenses.rowcount,
                        "payments_detached": payments.rowcount,
                    },
                }
            },
        )
