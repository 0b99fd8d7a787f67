import logging
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from .config import get_settings

REQUEST_ID_HEADER = "X-Request-ID"

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def bind_request_id(value: str | None = None) -> str:
    """Tag every record logged by the current request with ``value`` (or a fresh id)."""
    request_id = (value or "").strip()[:64] or uuid.uuid4().hex
    _request_id.set(request_id)
    return request_id


def current_request_id() -> str | None:
    return _request_id.get()


def _json_default(value: Any) -> Any:
    # Money stays exact in the log line; everything else falls back to str()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


class FinanceJsonFormatter(jsonlogger.JsonFormatter):
    """One JSON object per record.

    ``extra={"details": {"event": ..., "extra": {...}}}`` is the call-site
    convention. The event name is copied to the top level so log queries can
    filter on it without digging into ``details``.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("json_default", _json_default)
        super().__init__(*args, **kwargs)

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        if not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record.setdefault("app", settings.app_name)
        log_record.setdefault("service", settings.service_name)
        log_record.setdefault("module", record.name)
        log_record["level"] = record.levelname.lower()
        details = log_record.get("details")
        if not isinstance(details, dict):
            details = log_record["details"] = {}
        if details.get("event"):
            log_record.setdefault("event", details["event"])
        request_id = current_request_id()
        if request_id:
            log_record.setdefault("request_id", request_id)


settings = get_settings()
_configured = False


def _level() -> int:
    return getattr(logging, settings.log_level.upper(), logging.INFO)


def configure_logging() -> logging.Logger:
    """Install the JSON handler on the root logger.

    Safe to call repeatedly: after the first call only levels and the
    uvicorn loggers are re-tuned, since uvicorn may reset them on startup.
    """
    global _configured
    root_logger = logging.getLogger()
    root_logger.setLevel(_level())
    if _configured:
        _tune_library_loggers()
        return root_logger

    root_logger.handlers.clear()

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(FinanceJsonFormatter("%(timestamp)s %(level)s %(message)s"))
    stream_handler.setLevel(_level())
    root_logger.addHandler(stream_handler)

    _tune_library_loggers()
    # Statement echo would log every amount and description in the ledger
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("alembic").setLevel(logging.INFO)

    _configured = True
    return root_logger


def get_logger(module_name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(module_name)


def _tune_library_loggers() -> None:
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "uvicorn.asgi"):
        lib_logger = logging.getLogger(name)
        lib_logger.disabled = False
        lib_logger.setLevel(_level() if name != "uvicorn.access" else logging.INFO)
        lib_logger.handlers.clear()
        lib_logger.propagate = True

    for name in ("h11", "asyncio", "aiosqlite", "asyncpg"):
        logging.getLogger(name).setLevel(logging.WARNING)
