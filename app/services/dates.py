"""Calendar-day handling for dates that travel as ``YYYY-MM-DD`` strings.

A day without a time component is stored at local noon so that any later
timezone conversion (up to +/-12h) stays on the same calendar day.
"""
import re
from datetime import datetime

from app.core.errors import MalformedInputError

DATE_ONLY_PATTERN = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])$")


def parse_date_only_local(value: str) -> datetime:
    text = str(value or "").strip()
    match = DATE_ONLY_PATTERN.match(text)
    if not match:
        raise MalformedInputError("Invalid date", detail=f"Expected YYYY-MM-DD, got {text!r}")
    year, month, day = (int(part) for part in match.groups())
    try:
        return datetime(year, month, day, 12, 0, 0, 0)
    except ValueError as exc:
        raise MalformedInputError("Invalid date", detail=f"{text} is not a calendar day") from exc


def to_iso_date_only(value: datetime) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def normalize_date(value: datetime | str) -> datetime:
    if isinstance(value, datetime):
        return value
    return parse_date_only_local(value)


def parse_dump_date(value: datetime | str) -> datetime:
    """Accept a day or a full ISO timestamp from a backup file.

    Older dumps carry ``2024-02-20T15:00:00.000Z``. The day is read as written,
    before any offset is applied, and stored at local noon like any other day.
    """
    if isinstance(value, datetime) or DATE_ONLY_PATTERN.match(str(value or "").strip()):
        return normalize_date(value)
    text = str(value or "").strip()
    if "T" not in text:
        return parse_date_only_local(text)
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as exc:
        raise MalformedInputError(
            "Invalid date", detail=f"Expected YYYY-MM-DD or an ISO timestamp, got {text!r}"
        ) from exc
    return parse_date_only_local(to_iso_date_only(parsed))
