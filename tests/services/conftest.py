"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB sessions
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares the one connection
      that holds the schema
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from biblioteca.db.base import Base
import biblioteca.models  # noqa: F401
from biblioteca.infrastructure.database import get_db, DatabaseSessionManager
import biblioteca.infrastructure.database as db_module
from biblioteca.models.book import Book
from biblioteca.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_book(test_db):
    """Insert a book directly; returns a factory so tests pick title and stock."""
    async def _seed(title: str = "Dune", available_copies: int = 3, **fields) -> Book:
        book = Book(title=title, available_copies=available_copies, **fields)
        test_db.add(book)
        await test_db.commit()
        await test_db.refresh(book)
        return book
    return _seed


def rental_payload(title: str = "Dune", quantity: int = 1, **overrides) -> dict:
    """JSON body for POST /libros/alquilar."""
    checkout = datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)
    payload = {
        "title": title,
        "borrower_first_name": "Ana",
        "borrower_last_name": "Gómez",
        "borrower_phone": "+595 981 000000",
        "checkout_date": checkout.isoformat(),
        "due_date": (checkout + timedelta(days=14)).isoformat(),
        "quantity": quantity,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_rental_payload():
    return rental_payload
