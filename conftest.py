import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as AsyncSessionSQLModel

import app.models  # noqa: F401
from app.core.config import settings
from app.models.follow import Follow
from app.models.user import User
from app.schemas.enums import FollowingType


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio coroutine"
    )


@pytest_asyncio.fixture(scope="function")
async def async_test_engine():
    """Create a fresh database for each test."""
    db_url = settings.TEST_DATABASE_URL or "sqlite+aiosqlite://"

    test_engine = create_async_engine(
        db_url,
        echo=False,
        future=True,
        # One shared connection so the in-memory database survives between sessions
        poolclass=StaticPool,
        connect_args={"check_same_thread": False} if db_url.startswith("sqlite") else {},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await test_engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(async_test_engine):
    """Create a test async session for each test."""
    TestSessionLocal = sessionmaker(
        bind=async_test_engine,
        class_=AsyncSessionSQLModel,
        expire_on_commit=False,
        autoflush=False
    )

    async with TestSessionLocal() as session:
        yield session


@pytest.fixture
def make_user(db_session):
    """Factory persisting a user with sensible defaults"""
    async def _make_user(username: str, **fields) -> User:
        user = User(
            username=username,
            full_name=fields.pop("full_name", f"{username.title()} Tester"),
            email=fields.pop("email", f"{username}@example.com"),
            **fields
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_follow(db_session):
    """Factory persisting a follow edge, optionally with an explicit id"""
    async def _make_follow(
        follower_id: str,
        following_id: str,
        following_type: FollowingType = FollowingType.USER,
        id: int = None
    ) -> Follow:
        follow = Follow(
            id=id,
            follower_id=follower_id,
            following_id=following_id,
            following_type=following_type
        )
        db_session.add(follow)
        await db_session.commit()
        await db_session.refresh(follow)
        return follow

    return _make_follow
