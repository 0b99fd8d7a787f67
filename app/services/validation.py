from decimal import Decimal

from app.core.config import get_settings
from app.core.errors import ValidationError
from app.db.models import TransactionType


def require_text(value: str | None, field: str) -> str:
    text = str(value or "").strip()
    if not text:
        raise ValidationError(f"{field} is required")
    return text


def require_amount(value: Decimal | None, field: str) -> Decimal:
    if value is None:
        raise ValidationError(f"{field} is required")
    if not value.is_finite():
        raise ValidationError(f"{field} must be a number")
    if value < 0:
        raise ValidationError(f"{field} must be non-negative")
    return value


def require_day(value: int | None, field: str) -> int:
    if value is None or not 1 <= value <= 31:
        raise ValidationError(f"{field} must be 1..31")
    return value


def require_transaction_type(value: str | None) -> TransactionType:
    try:
        return TransactionType(value)
    except ValueError as exc:
        raise ValidationError("type must be INCOME or EXPENSE") from exc


def normalize_category(value: str | None) -> str:
    return str(value or "").strip() or get_settings().default_category
