from typing import Any

from sqlalchemy import delete, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import PersistenceError
from app.core.logging_config import get_logger
from app.db.models import CardExpense, CreditCard, CustomIcon, Transaction

logger = get_logger(__name__)

# Children before parents when wiping, parents before children when inserting.
WIPE_ORDER = (CardExpense, Transaction, CreditCard, CustomIcon)
RESTORE_ORDER = (CreditCard, Transaction, CardExpense, CustomIcon)


class BackupCRUD:
    @staticmethod
    async def dump(db: AsyncSession) -> dict[str, list[Any]]:
        tables = {}
        for key, model in (
            ("transactions", Transaction),
            ("cards", CreditCard),
            ("expenses", CardExpense),
            ("icons", CustomIcon),
        ):
            result = await db.execute(select(model).order_by(model.id))
            tables[key] = list(result.scalars().all())
        logger.info(
            "Backup exported",
            extra={
                "details": {
                    "event": "backup_export",
                    "extra": {key: len(rows) for key, rows in tables.items()},
                }
            },
        )
        return tables

    @staticmethod
    async def _delete_all(db: AsyncSession) -> None:
        for model in WIPE_ORDER:
            await db.execute(delete(model))

    @staticmethod
    async def _sync_sequences(db: AsyncSession) -> None:
        # Explicit ids do not advance PostgreSQL serial sequences.
        if db.get_bind().dialect.name != "postgresql":
            return
        for model in RESTORE_ORDER:
            table = model.__tablename__
            await db.execute(
                text(
                    f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), "
                    f"COALESCE((SELECT MAX(id) FROM {table}), 0) + 1, false)"
                )
            )

    @staticmethod
    async def wipe(db: AsyncSession) -> None:
        try:
            await BackupCRUD._delete_all(db)
            await db.commit()
        except SQLAlchemyError as exc:
            await db.rollback()
            logger.error(
                "Backup wipe rolled back",
                extra={"details": {"event": "backup_wipe_failed", "extra": {"error": str(exc)}}},
            )
            raise PersistenceError(str(exc)) from exc
        logger.warning("All tables wiped", extra={"details": {"event": "backup_wipe"}})

    @staticmethod
    async def restore(
        db: AsyncSession,
        *,
        cards: list[dict] | None = None,
        transactions: list[dict] | None = None,
        expenses: list[dict] | None = None,
        icons: list[dict] | None = None,
    ) -> dict[str, int]:
        """Replace every table with the given rows in one transaction.

        Empty or missing lists are skipped, so those tables end up empty.
        """
        rows_by_model = {
            CreditCard: cards or [],
            Transaction: transactions or [],
            CardExpense: expenses or [],
            CustomIcon: icons or [],
        }
        try:
            await BackupCRUD._delete_all(db)
            for model in RESTORE_ORDER:
                rows = rows_by_model[model]
                if rows:
                    db.add_all([model(**row) for row in rows])
                    await db.flush()
            await BackupCRUD._sync_sequences(db)
            await db.commit()
        except SQLAlchemyError as exc:
            await db.rollback()
            logger.error(
                "Backup restore rolled back",
                extra={"details": {"event": "backup_restore_failed", "extra": {"error": str(exc)}}},
            )
            raise PersistenceError(str(exc)) from exc

        counts = {model.__tablename__: len(rows) for model, rows in rows_by_model.items()}
        logger.warning(
            "Backup restored",
            extra={"details": {"event": "backup_restore", "extra": counts}},
        )
        return counts
