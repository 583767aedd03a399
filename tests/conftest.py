"""Shared test fixtures and configuration."""
import os
from datetime import datetime, timedelta, timezone
from pathlib import Path

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RESTAURANT_NAME", "Test Restaurant")

from dining.main import app
from dining.db.database import Base, get_db
from dining.core.dependencies import get_menu_repository
from dining.services.menu.in_memory_menu import InMemoryMenuProvider
from dining.services.menu.repository import MenuRepository
from dining.services.ordering.service import TableOrderService
from dining.services.persistence.in_memory import InMemoryTableOrderStore, InMemoryTableStore
from dining.services.tables.service import TableService


# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeClock:
    """Clock whose time only moves when a test says so."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 5, 17, 19, 30, tzinfo=timezone.utc))


@pytest.fixture
async def test_db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_db(test_db_engine):
    """Create test database session."""
    async_session = async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def test_menu_path():
    """Return path to test menu YAML file."""
    return Path(__file__).parent / "fixtures" / "test_menu.yaml"


@pytest.fixture
def test_menu_repository(test_menu_path):
    """Create menu repository with test data."""
    provider = InMemoryMenuProvider(menu_file=str(test_menu_path))
    return MenuRepository(provider)


@pytest.fixture
def order_store():
    return InMemoryTableOrderStore()


@pytest.fixture
def table_store():
    return InMemoryTableStore()


@pytest.fixture
def table_service(table_store, order_store, clock):
    return TableService(table_store=table_store, order_store=order_store, clock=clock)


@pytest.fixture
def order_service(order_store, table_store, clock):
    """Table order service over in-memory stores, without a menu."""
    return TableOrderService(order_store=order_store, table_store=table_store, clock=clock)


@pytest.fixture
def override_get_db(test_db):
    """Override get_db dependency with test database."""
    async def _override_get_db():
        yield test_db
    return _override_get_db


@pytest.fixture
def override_get_menu_repository(test_menu_repository):
    """Override get_menu_repository dependency with test menu."""
    def _override_get_menu_repository():
        return test_menu_repository
    return _override_get_menu_repository


@pytest.fixture
async def api_client(override_get_db, override_get_menu_repository):
    """Create an HTTP client talking to the app in-process, with overrides."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_menu_repository] = override_get_menu_repository

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # Clear overrides
    app.dependency_overrides.clear()
