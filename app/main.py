import asyncio
import time
from pathlib import Path
from typing import Callable

from alembic import command
from alembic.config import Config
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.engine import create_engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.core.errors import AppError
from app.core.logging_config import REQUEST_ID_HEADER, bind_request_id, configure_logging, get_logger
from app.db.base import Base
from app.db.session import engine
from app.routers import backup, card_expenses, cards, custom_icons, summary, transactions

settings = get_settings()
logger = get_logger(__name__)
app = FastAPI(title=settings.app_name, version=settings.app_version)


@app.middleware("http")
async def log_requests(request: Request, call_next: Callable):
    start_time = time.perf_counter()
    request_id = bind_request_id(request.headers.get(REQUEST_ID_HEADER))
    logger.info(
        "HTTP request started",
        extra={
            "details": {
                "event": "request_start",
                "extra": {
                    "method": request.method,
                    "path": request.url.path,
                    "user_agent": request.headers.get("user-agent"),
                    "client_ip": request.client.host if request.client else None,
                },
            }
        },
    )

    try:
        response = await call_next(request)
    except Exception as exc:  # noqa: BLE001
        duration_ms = int((time.perf_counter() - start_time) * 1000)
        logger.error(
            "Unhandled exception in request",
            extra={
                "details": {
                    "event": "request_error",
                    "status_code": 500,
                    "duration_ms": duration_ms,
                    "extra": {
                        "method": request.method,
                        "path": request.url.path,
                        "error": str(exc),
                        "error_type": type(exc).__name__,
                    },
                }
            },
        )
        raise

    duration_ms = int((time.perf_counter() - start_time) * 1000)
    log = logger.error if response.status_code >= 500 else logger.warning if response.status_code >= 400 else logger.info
    log(
        "HTTP request completed",
        extra={
            "details": {
                "event": "request_completed",
                "status_code": response.status_code,
                "duration_ms": duration_ms,
                "extra": {"method": request.method, "path": request.url.path},
            }
        },
    )
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def _log_error(request: Request, status_code: int, error: str, detail: str | None = None) -> None:
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Request failed",
        extra={
            "details": {
                "event": "exception",
                "status_code": status_code,
                "extra": {
                    "method": request.method,
                    "path": request.url.path,
                    "error": error,
                    "detail": detail,
                },
            }
        },
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):  # noqa: ANN201
    _log_error(request, exc.status_code, exc.message, exc.detail)
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):  # noqa: ANN201
    errors = exc.errors()
    first = errors[0] if errors else {}
    fields = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    error = f"{fields[-1]} is invalid" if fields else "Invalid request body"
    detail = first.get("msg")
    _log_error(request, 400, error, detail)
    return JSONResponse(status_code=400, content={"error": error, "detail": detail})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):  # noqa: ANN201
    _log_error(request, exc.status_code, str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):  # noqa: ANN201
    _log_error(request, 500, "Internal error", str(exc))
    return JSONResponse(status_code=500, content={"error": "Internal error", "detail": str(exc)})


@app.exception_handler(Exception)
async def json_exception_handler(request: Request, exc: Exception):  # noqa: ANN201
    _log_error(request, 500, "Internal error", str(exc))
    return JSONResponse(status_code=500, content={"error": "Internal error", "detail": str(exc)})


def get_alembic_config() -> Config:
    root_path = Path(__file__).resolve().parent.parent
    alembic_cfg = Config(str(root_path / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(root_path / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url.replace("%", "%%"))
    redacted_url = make_url(settings.database_url).render_as_string(hide_password=True)
    logger.debug(
        "Alembic configuration prepared",
        extra={"details": {"event": "alembic_config", "extra": {"database_url": redacted_url}}},
    )
    return alembic_cfg


def sanitize_identifier(identifier: str) -> str:
    return identifier.replace('"', '""')


def create_database_if_not_exists() -> None:
    url = make_url(settings.database_url)
    if not url.get_backend_name().startswith("postgresql"):
        return
    database_name = url.database
    if not database_name:
        logger.warning(
            "Database name missing in URL",
            extra={"details": {"event": "database_setup", "extra": {"url": url.render_as_string(hide_password=True)}}},
        )
        return
    admin_url = url.set(database="postgres", drivername=url.drivername.replace("+asyncpg", ""))
    engine_admin = create_engine(admin_url)
    try:
        with engine_admin.connect() as connection:
            result = connection.execute(
                text("SELECT 1 FROM pg_database WHERE datname=:name"), {"name": database_name}
            ).scalar()
            if not result:
                connection.execution_options(isolation_level="AUTOCOMMIT").execute(
                    text(f"CREATE DATABASE \"{sanitize_identifier(database_name)}\"")
                )
                logger.info(
                    "Database created",
                    extra={"details": {"event": "database_setup", "extra": {"database": database_name}}},
                )
            else:
                logger.debug(
                    "Database already exists",
                    extra={"details": {"event": "database_setup", "extra": {"database": database_name}}},
                )
    finally:
        engine_admin.dispose()


async def reset_database() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.execute(text("DROP TABLE IF EXISTS alembic_version"))
    logger.warning("Database reset executed", extra={"details": {"event": "database_reset"}})


async def apply_migrations() -> None:
    alembic_cfg = get_alembic_config()
    await asyncio.to_thread(command.upgrade, alembic_cfg, "head")
    logger.info("Migrations applied", extra={"details": {"event": "database_migrate"}})


@app.on_event("startup")
async def startup_event() -> None:
    logger.info(
        "Startup sequence initiated",
        extra={"details": {"event": "startup", "extra": {"environment": settings.environment, "stage": "init"}}},
    )
    create_database_if_not_exists()
    if settings.reset_db_on_start:
        await reset_database()
    if settings.migrate_on_start:
        await apply_migrations()
    # Uvicorn may have replaced logger handlers while starting
    configure_logging()
    logger.info(
        "Startup completed",
        extra={"details": {"event": "startup", "extra": {"environment": settings.environment}}},
    )


@app.get("/health", tags=["System"])
async def healthcheck():
    logger.info("Health check", extra={"details": {"event": "health"}})
    return {"status": "ok"}


app.include_router(transactions.router)
app.include_router(cards.router)
app.include_router(card_expenses.router)
app.include_router(custom_icons.router)
app.include_router(summary.router)
app.include_router(backup.router)
