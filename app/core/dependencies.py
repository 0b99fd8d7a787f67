from typing import NamedTuple

from fastapi import Query

from app.core.errors import ValidationError


class Period(NamedTuple):
    month: int
    year: int


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


async def get_period(
    month: str | None = Query(None, description="Month 1..12"),
    year: str | None = Query(None, description="Year"),
) -> Period | None:
    """Month/year filter; anything that does not parse as integers means no filter."""
    parsed_month = _parse_int(month)
    parsed_year = _parse_int(year)
    if parsed_month is None or parsed_year is None:
        return None
    if not 1 <= parsed_month <= 12:
        raise ValidationError("month must be 1..12")
    # Billing ranges reach one year back, so year 1 cannot be represented.
    if not 2 <= parsed_year <= 9998:
        raise ValidationError("year out of range")
    return Period(parsed_month, parsed_year)


def parse_id(value: str | int | None) -> int:
    if value is None or str(value).strip() == "":
        raise ValidationError("Missing id")
    try:
        return int(str(value).strip())
    except ValueError as exc:
        raise ValidationError("id must be an integer") from exc
