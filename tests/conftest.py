# 📄 File: tests/conftest.py
# 🧭 Purpose (Layman Explanation):
# Shared setup for the tests: an empty throw-away database, ready-made services and
# predictable ids so results can be checked exactly.
# 🧪 Purpose (Technical Summary):
# pytest fixtures: in-memory SQLite engine (aiosqlite) with the ORM schema, a session,
# service builders over that session, a recording in-memory unit of work and a
# deterministic id generator for unit tests with AsyncMock repositories.
# 🔗 Dependencies:
# pytest, pytest-asyncio, SQLAlchemy async, aiosqlite
# 🔄 Connected Modules / Calls From:
# tests/test_*.py

from contextlib import asynccontextmanager
from itertools import count
from typing import Callable, List

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from myhome.modules.community_management.domain.models.user import User
from myhome.modules.community_management.infrastructure.database.user_repository_impl import (
    UserRepositoryImpl,
)
from myhome.shared.infrastructure.database.connection import DatabaseConnectionManager
from myhome.shared.infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork, UnitOfWork

SQLITE_MEMORY_URL = "sqlite+aiosqlite:///:memory:"


class RecordingUnitOfWork(UnitOfWork):
    """In-memory unit of work that counts opened and failed transactions."""

    def __init__(self):
        self.opened = 0
        self.failed = 0

    @asynccontextmanager
    async def transaction(self):
        self.opened += 1
        try:
            yield None
        except Exception:
            self.failed += 1
            raise


def sequential_ids(prefix: str) -> Callable[[], str]:
    counter = count(1)
    return lambda: f"{prefix}-{next(counter)}"


@pytest.fixture
def unit_of_work() -> RecordingUnitOfWork:
    return RecordingUnitOfWork()


@pytest_asyncio.fixture
async def engine():
    manager = DatabaseConnectionManager(SQLITE_MEMORY_URL)
    await manager.initialize()
    await manager.create_tables()
    yield manager.engine
    await manager.close()


@pytest_asyncio.fixture
async def session(engine) -> AsyncSession:
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def make_user(session) -> Callable:
    """Store a user and return it."""

    async def _make_user(user_id: str, name: str = None) -> User:
        async with SqlAlchemyUnitOfWork(session).transaction():
            return await UserRepositoryImpl(session).save(
                User(user_id=user_id, name=name or user_id, email=f"{user_id}@myhome.io")
            )

    return _make_user


def ids_of(entities: List, attribute: str) -> List[str]:
    return [getattr(entity, attribute) for entity in entities]
