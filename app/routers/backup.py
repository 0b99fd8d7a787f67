from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.crud.backup import BackupCRUD
from app.db.session import get_db
from app.schemas.backup import (
    BackupDump,
    BackupRestore,
    CardExpenseRecord,
    CardRecord,
    CustomIconRecord,
    TransactionRecord,
)
from app.schemas.card import CardResponse
from app.schemas.card_expense import CardExpenseResponse
from app.schemas.common import OkResponse
from app.schemas.custom_icon import CustomIconResponse
from app.schemas.transaction import TransactionResponse
from app.services.dates import parse_dump_date
from app.services.validation import normalize_category

router = APIRouter(prefix="/backup", tags=["backup"])


def _transaction_row(record: TransactionRecord) -> dict:
    row = record.model_dump(exclude_none=True)
    row.update(
        type=record.type.value,
        category=normalize_category(record.category),
        date=parse_dump_date(record.date),
    )
    return row


def _expense_row(record: CardExpenseRecord) -> dict:
    row = record.model_dump(exclude_none=True)
    row.update(
        category=normalize_category(record.category),
        purchase_date=parse_dump_date(record.purchase_date),
    )
    return row


def _plain_row(record: CardRecord | CustomIconRecord) -> dict:
    return record.model_dump(exclude_none=True)


@router.get("", response_model=BackupDump)
async def export_backup(db: AsyncSession = Depends(get_db)):
    tables = await BackupCRUD.dump(db)
    dump = BackupDump(
        transactions=[TransactionResponse.model_validate(row) for row in tables["transactions"]],
        cards=[CardResponse.model_validate(row) for row in tables["cards"]],
        expenses=[CardExpenseResponse.model_validate(row) for row in tables["expenses"]],
        icons=[CustomIconResponse.model_validate(row) for row in tables["icons"]],
    )
    return JSONResponse(
        content=dump.model_dump(mode="json", by_alias=True),
        headers={"Content-Disposition": f'attachment; filename="{get_settings().backup_filename}"'},
    )


@router.post("", response_model=OkResponse)
async def restore_backup(payload: BackupRestore, db: AsyncSession = Depends(get_db)):
    await BackupCRUD.restore(
        db,
        cards=[_plain_row(record) for record in payload.cards or []],
        transactions=[_transaction_row(record) for record in payload.transactions or []],
        expenses=[_expense_row(record) for record in payload.expenses or []],
        icons=[_plain_row(record) for record in payload.icons or []],
    )
    return OkResponse()


@router.delete("", response_model=OkResponse)
async def wipe_backup(db: AsyncSession = Depends(get_db)):
    await BackupCRUD.wipe(db)
    return OkResponse()
