"""
Shared fixtures: an in-memory database per test and a registered user.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from nutshell.infrastructure.local.database import Base
from nutshell.infrastructure.local.task_order_repository import SqliteTaskOrderRepository
from nutshell.infrastructure.local.task_repository import SqliteTaskRepository
from nutshell.infrastructure.local.time_block_repository import SqliteTimeBlockRepository
from nutshell.infrastructure.local.user_repository import SqliteUserRepository
from nutshell.models.user import UserProfileUpdate


@pytest.fixture
async def session_factory():
    """Create in-memory SQLite session factory."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def test_user_id() -> str:
    return "test_user"


@pytest.fixture
def user_repo(session_factory):
    return SqliteUserRepository(session_factory)


@pytest.fixture
def task_repo(session_factory):
    return SqliteTaskRepository(session_factory)


@pytest.fixture
def time_block_repo(session_factory):
    return SqliteTimeBlockRepository(session_factory)


@pytest.fixture
def task_order_repo(session_factory):
    return SqliteTaskOrderRepository(session_factory)


@pytest.fixture
async def registered_user(user_repo, test_user_id):
    """Register the test user so services can resolve it."""
    return await user_repo.upsert(test_user_id, UserProfileUpdate(email="test@example.com"))
