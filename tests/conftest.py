"""
Shared test fixtures and configuration for entire test suite.

Provides: file-backed SQLite async database, session factory, seeded users
and images, pipeline component fixtures
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from backend.core.search.models import Candidate

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def build_candidate(**overrides) -> Candidate:
    """Build a Candidate with sensible defaults for scoring tests."""
    values = {
        "id": uuid.uuid4(),
        "image_url": "https://cdn.example.com/image.png",
        "prompt": "",
        "original": None,
        "provider": None,
        "model": None,
        "tags": (),
        "is_public": True,
        "created_at": BASE_TIME,
    }
    values.update(overrides)
    if isinstance(values["tags"], list):
        values["tags"] = tuple(values["tags"])
    return Candidate(**values)


@pytest.fixture
async def engine(tmp_path):
    """
    Create a file-backed SQLite async engine with all tables.

    A file database is used so concurrent sessions get their own
    connections, as they would against PostgreSQL.

    Yields:
        AsyncEngine: Engine with the schema created
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from backend.boundary.db.base import Base
    import backend.boundary.db.models  # noqa: F401 - register models

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'search.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Session factory bound to the test engine."""
    from sqlalchemy.ext.asyncio import async_sessionmaker

    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_async_db(session_factory):
    """
    Async session for tests that seed or inspect data directly.

    Yields:
        AsyncSession: Test database session
    """
    async with session_factory() as session:
        yield session


@pytest.fixture
def seed_user(session_factory):
    """
    Factory fixture inserting a user and returning its id.

    Usage:
        user_id = await seed_user("alice")
    """
    from backend.boundary.db.models import UserModel

    async def _seed(username: str) -> uuid.UUID:
        async with session_factory() as session:
            user = UserModel(username=username)
            session.add(user)
            await session.commit()
            return user.id

    return _seed


@pytest.fixture
def seed_image(session_factory):
    """
    Factory fixture inserting an image and returning its id.

    Each call is one second newer than the previous unless created_at is
    given, so recency ordering is deterministic.

    Usage:
        image_id = await seed_image(prompt="sunset", is_public=True)
    """
    from backend.boundary.db.models import ImageModel

    counter = {"n": 0}

    async def _seed(**fields) -> uuid.UUID:
        counter["n"] += 1
        values = {
            "image_url": f"https://cdn.example.com/{counter['n']}.png",
            "prompt": "untitled",
            "is_public": True,
            "tags": [],
            "created_at": BASE_TIME + timedelta(seconds=counter["n"]),
        }
        values.update(fields)
        async with session_factory() as session:
            image = ImageModel(**values)
            session.add(image)
            await session.commit()
            return image.id

    return _seed


@pytest.fixture
def mock_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def make_candidate():
    """Factory fixture building in-memory Candidates."""
    return build_candidate
