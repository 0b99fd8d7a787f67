from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging_config import get_logger
from app.db.models import Transaction
from app.services.billing import BillingRange

logger = get_logger(__name__)


class TransactionCRUD:
    @staticmethod
    async def get_by_id(db: AsyncSession, transaction_id: int) -> Transaction | None:
        transaction = await db.get(Transaction, transaction_id)
        logger.debug(
            "Fetched transaction by id",
            extra={
                "details": {
                    "event": "transaction_lookup_id",
                    "extra": {"transaction_id": transaction_id, "found": bool(transaction)},
                }
            },
        )
        return transaction

    @staticmethod
    async def find_many(db: AsyncSession, date_range: BillingRange | None = None) -> list[Transaction]:
        stmt = select(Transaction)
        if date_range is not None:
            stmt = stmt.where(Transaction.date >= date_range.start, Transaction.date < date_range.end)
        result = await db.execute(stmt.order_by(Transaction.date.desc(), Transaction.id.desc()))
        transactions = list(result.scalars().all())
        logger.debug(
            "Listed transactions",
            extra={
                "details": {
                    "event": "transaction_list",
                    "extra": {
                        "start": date_range.start.isoformat() if date_range else None,
                        "end": date_range.end.isoformat() if date_range else None,
                        "count": len(transactions),
                    },
                }
            },
        )
        return transactions

    @staticmethod
    async def create(db: AsyncSession, **kwargs) -> Transaction:
        transaction = Transaction(is_recurring=False, installments=None, group_id=None, **kwargs)
        db.add(transaction)
        await db.commit()
        await db.refresh(transaction)
        logger.info(
            "Transaction created",
            extra={
                "details": {
                    "event": "transaction_create",
                    "extra": {"transaction_id": transaction.id, "type": transaction.type},
                }
            },
        )
        return transaction

    @staticmethod
    async def update(db: AsyncSession, transaction: Transaction, **patch) -> Transaction:
        for field, value in patch.items():
            setattr(transaction, field, value)
        await db.commit()
        await db.refresh(transaction)
        logger.info(
            "Transaction updated",
            extra={
                "details": {
                    "event": "transaction_update",
                    "extra": {"transaction_id": transaction.id, "updated_fields": sorted(patch)},
                }
            },
        )
        return transaction

    @staticmethod
    async def delete(db: AsyncSession, transaction: Transaction) -> None:
        await db.delete(transaction)
        await db.commit()
        logger.warning(
            "Transaction deleted",
            extra={"details": {"event": "transaction_delete", "extra": {"transaction_id": transaction.id}}},
        )
