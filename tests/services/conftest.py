"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares the one connection,
      so rows committed by a route are visible to the test's own session
    - Ledger concurrency tests build their own file-backed engine (see
      test_funding_ledger.py); a single shared connection cannot interleave transactions
"""

from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

import crowdfund.infrastructure.database as db_module
from crowdfund.config import get_settings
from crowdfund.db.base import Base
from crowdfund.infrastructure.database import DatabaseSessionManager, get_db
from crowdfund.main import app
from crowdfund.models.campaign import Campaign
from crowdfund.models.user import User
from crowdfund.services.auth_tokens import hash_password, issue_token

from tests.helpers import PASSWORD


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
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


async def _create_user(db, username: str, display_name: str) -> User:
    user = User(
        username=username,
        email=f"{username}@example.com",
        password_hash=hash_password(PASSWORD, rounds=4),
        display_name=display_name,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest.fixture
async def seed_user(test_db):
    return await _create_user(test_db, "alice", "Alice")


@pytest.fixture
async def other_user(test_db):
    return await _create_user(test_db, "bob", "Bob")


@pytest.fixture
def auth_headers(seed_user):
    token = issue_token(seed_user.id, get_settings())
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_headers(other_user):
    token = issue_token(other_user.id, get_settings())
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def seed_campaign(test_db, seed_user):
    """An active campaign owned by seed_user with goal 1000."""
    campaign = Campaign(
        user_id=seed_user.id,
        title="Community garden",
        description="Raised beds for the neighbourhood",
        goal_amount=Decimal("1000"),
        current_amount=Decimal("0"),
        category="community",
        status="active",
    )
    test_db.add(campaign)
    await test_db.commit()
    await test_db.refresh(campaign)
    return campaign
