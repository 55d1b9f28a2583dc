"""
Shared pytest fixtures.

Settings are read at import time, so the environment is pointed at an
in-memory SQLite database before anything from `webshop` is imported.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["KAFKA_ENABLED"] = "false"
os.environ["CREATE_SCHEMA_ON_STARTUP"] = "false"
os.environ["LOG_JSON"] = "false"

from collections.abc import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from webshop.db import get_db
from webshop.main import app
from webshop.models import Base
from tests.fakes import InMemoryCartRepository, InMemoryOrderRepository


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        class_=AsyncSession,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as s:
        yield s


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[httpx.AsyncClient, None]:
    async def _get_test_db():
        async with session_factory() as s:
            yield s

    app.dependency_overrides[get_db] = _get_test_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def carts() -> InMemoryCartRepository:
    return InMemoryCartRepository()


@pytest.fixture
def orders() -> InMemoryOrderRepository:
    return InMemoryOrderRepository()
