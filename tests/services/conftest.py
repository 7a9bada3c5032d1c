"""Service test fixtures — async DB, fake membership directory and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - db_manager wraps the test session factory (same unit_of_work path as production)
    - app.state collaborators replaced for the duration of the client fixture
    - Assertions read through fresh sessions, never the session under test

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for service and route tests
      (PostgreSQL-specific features not exercised here)
    - FakeMembership over HTTP mocks: orchestrator tests exercise the directory contract,
      the HTTP client has its own tests with httpx.MockTransport
    - Ticking clock: each authoring request gets a later created_at, so listing order
      is deterministic
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from courier.core.domain_types import GroundUser
from courier.db.base import Base
from courier.infrastructure.database import DatabaseSessionManager
from courier.main import app
from courier.models.author import Author
from courier.services.delivery_orchestrator import DeliveryOrchestrator
from courier.services.message_reader import MessageReader


class FakeMembership:
    """In-memory membership directory.

    organizations: ids that exist
    organization_users / region_users: id -> list[GroundUser]
    fail_with: exception raised by every call when set
    """

    def __init__(self):
        self.organizations: set[UUID] = set()
        self.organization_users: dict[UUID, list[GroundUser]] = {}
        self.region_users: dict[UUID, list[GroundUser]] = {}
        self.fail_with: Exception | None = None
        self.calls: list[tuple[str, UUID]] = []

    def add_organization(self, org_id: UUID, *handles: str | None) -> None:
        self.organizations.add(org_id)
        self.organization_users[org_id] = [
            GroundUser(f"g{i}", h) for i, h in enumerate(handles)
        ]

    def add_region(self, region_id: UUID, *handles: str | None) -> None:
        self.region_users[region_id] = [
            GroundUser(f"g{i}", h) for i, h in enumerate(handles)
        ]

    async def organization_exists(self, organization_id: UUID) -> bool:
        self._record("organization_exists", organization_id)
        return organization_id in self.organizations

    async def get_organization_ground_users(self, organization_id: UUID):
        self._record("organization_ground_users", organization_id)
        return list(self.organization_users.get(organization_id, []))

    async def get_region_ground_users(self, region_id: UUID):
        self._record("region_ground_users", region_id)
        return list(self.region_users.get(region_id, []))

    def _record(self, name: str, value: UUID) -> None:
        self.calls.append((name, value))
        if self.fail_with is not None:
            raise self.fail_with


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
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
def db_manager(test_session_factory):
    return DatabaseSessionManager.from_session_factory(test_session_factory)


@pytest.fixture
def membership():
    return FakeMembership()


@pytest.fixture
def clock():
    """Returns a later instant on every call."""
    start = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
    ticks = iter(range(10_000))
    return lambda: start + timedelta(seconds=next(ticks))


@pytest.fixture
def orchestrator(db_manager, membership, clock):
    return DeliveryOrchestrator(db_manager.unit_of_work, membership, clock=clock)


@pytest.fixture
def reader(db_manager):
    return MessageReader(db_manager.unit_of_work)


@pytest.fixture
def seed_authors(test_session_factory):
    """Insert authors by handle; returns {handle: id}."""

    async def _seed(*handles: str) -> dict[str, UUID]:
        async with test_session_factory() as session:
            authors = [Author(handle=h) for h in handles]
            session.add_all(authors)
            await session.commit()
            return {a.handle: a.id for a in authors}

    return _seed


@pytest.fixture
def count_rows(test_session_factory):
    """Row count of an ORM model, read through a fresh session."""

    async def _count(model) -> int:
        async with test_session_factory() as session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar_one()

    return _count


@pytest.fixture
def fetch_all(test_session_factory):
    """All rows of an ORM model, read through a fresh session."""

    async def _fetch(model, *criteria) -> list:
        async with test_session_factory() as session:
            result = await session.execute(select(model).where(*criteria))
            return list(result.scalars().all())

    return _fetch


@pytest.fixture
async def client(db_manager, membership):
    """FastAPI test client with lifespan collaborators replaced."""
    app.state.db_manager = db_manager
    app.state.membership = membership

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    del app.state.db_manager
    del app.state.membership
