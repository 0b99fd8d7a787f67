import os
import sys
from pathlib import Path
from typing import AsyncGenerator

import pytest
from asgi_lifespan import LifespanManager
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Load env vars so tests can read DATABASE_URL_TEST or other overrides
load_dotenv()

# Settings are read once at import time; pin them before importing the app
os.environ["DATABASE_USE"] = "dev"
os.environ["DATABASE_URL_DEV"] = "sqlite+aiosqlite:///:memory:"
os.environ["MIGRATE_ON_START"] = "false"
os.environ["RESET_DB_ON_START"] = "false"

from app.main import app
from app.db.base import Base
from app.db.session import build_engine, get_db


@pytest.fixture()
def test_database_url(tmp_path: Path) -> str:
    env_url = os.getenv("DATABASE_URL_TEST")
    if env_url:
        return env_url
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture()
async def test_engine(test_database_url: str):
    # A fresh engine and schema per test, tied to the current event loop
    eng = build_engine(test_database_url)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield eng
    finally:
        await eng.dispose()


@pytest.fixture()
async def async_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    SessionLocal = async_sessionmaker(bind=test_engine, expire_on_commit=False, autoflush=False)
    async with SessionLocal() as session:
        yield session


@pytest.fixture()
async def client(test_engine) -> AsyncGenerator[AsyncClient, None]:
    # A fresh session per request, as in production
    SessionLocal = async_sessionmaker(bind=test_engine, expire_on_commit=False, autoflush=False)

    async def _get_db_override() -> AsyncGenerator[AsyncSession, None]:
        async with SessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db_override
    async with LifespanManager(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    app.dependency_overrides.clear()


@pytest.fixture()
def make_card(client: AsyncClient):
    async def _make_card(name: str = "Nubank", limit: str = "1000.00", closing_day: int = 17, due_day: int = 25) -> dict:
        res = await client.post(
            "/cards",
            json={"name": name, "limit": limit, "closingDay": closing_day, "dueDay": due_day},
        )
        assert res.status_code == 201, res.text
        return res.json()

    return _make_card


@pytest.fixture()
def make_expense(client: AsyncClient):
    async def _make_expense(card_id: int, total_amount: str, purchase_date: str, description: str = "Compra") -> dict:
        res = await client.post(
            "/card-expenses",
            json={
                "description": description,
                "totalAmount": total_amount,
                "purchaseDate": purchase_date,
                "cardId": card_id,
            },
        )
        assert res.status_code == 201, res.text
        return res.json()

    return _make_expense


@pytest.fixture()
def fail_delete_of(monkeypatch):
    """Make the session raise when it executes a bulk DELETE on the given model's table."""
    from sqlalchemy.exc import OperationalError
    from sqlalchemy.sql.dml import Delete

    def _install(model) -> None:
        original_execute = AsyncSession.execute

        async def _execute(self, statement, *args, **kwargs):
            if isinstance(statement, Delete) and statement.table.name == model.__tablename__:
                raise OperationalError(str(statement), {}, Exception("database is locked"))
            return await original_execute(self, statement, *args, **kwargs)

        monkeypatch.setattr(AsyncSession, "execute", _execute)

    return _install
