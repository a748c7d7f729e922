"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from uuid import UUID

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from myflix.config import Settings
from myflix.core.security import TokenCodec, hash_password
from myflix.database import get_db
from myflix.main import create_app
from myflix.models import Actor, Base, Movie, User

# Test database URL (use SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# HS256 keys shorter than 32 bytes trigger a PyJWT warning
TEST_SECRET_KEY = "test-secret-key-for-myflix-tokens-0123456789"

# Test user constants
TEST_USER_ID = UUID("00000000-0000-0000-0000-000000000001")
TEST_USERNAME = "testuser1"
TEST_USER_PASSWORD = "TestPassword123!"

OTHER_USER_ID = UUID("00000000-0000-0000-0000-000000000002")
OTHER_USERNAME = "otheruser"
OTHER_USER_PASSWORD = "OtherPassword456!"


@pytest.fixture
def settings() -> Settings:
    """Settings for an isolated test application."""
    return Settings(
        _env_file=None,
        environment="development",
        database_url=TEST_DATABASE_URL,
        create_tables=False,
        secret_key=TEST_SECRET_KEY,
        log_level="WARNING",
    )


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database for each test.

    StaticPool keeps the single in-memory connection alive for the whole
    test, otherwise every checkout would see an empty database.
    """
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Database session shared by fixtures and the app under test."""
    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(settings: Settings, db_session: AsyncSession) -> FastAPI:
    """Application wired to the test database."""
    test_app = create_app(settings)

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    test_app.dependency_overrides[get_db] = override_get_db
    return test_app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client without credentials."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def token_codec(app: FastAPI) -> TokenCodec:
    """The codec the application signs and verifies tokens with."""
    return app.state.token_codec


async def _create_user(
    session: AsyncSession,
    *,
    user_id: UUID,
    username: str,
    password: str,
    name: str,
    email: str,
) -> User:
    user = User(
        id=user_id,
        username=username,
        hashed_password=hash_password(password),
        name=name,
        email=email,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user in the database."""
    return await _create_user(
        db_session,
        user_id=TEST_USER_ID,
        username=TEST_USERNAME,
        password=TEST_USER_PASSWORD,
        name="Test User",
        email="testuser@example.com",
    )


@pytest.fixture
async def other_user(db_session: AsyncSession) -> User:
    """Create a second user who owns nothing the test user may touch."""
    return await _create_user(
        db_session,
        user_id=OTHER_USER_ID,
        username=OTHER_USERNAME,
        password=OTHER_USER_PASSWORD,
        name="Other User",
        email="other@example.com",
    )


@pytest.fixture
def auth_token(test_user: User, token_codec: TokenCodec) -> str:
    """Create an authentication token for the test user."""
    return token_codec.issue(test_user.id)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authentication headers for API requests."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
async def authenticated_client(
    app: FastAPI,
    auth_headers: dict[str, str],
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client that sends the test user's real JWT."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=auth_headers,
    ) as ac:
        yield ac


@pytest.fixture
async def movies(db_session: AsyncSession) -> dict[str, Movie]:
    """Seed a small catalog: two Nolan films sharing one actor, and a comedy."""
    actor = Actor(name="Michael Caine", birth_year=1933)
    inception = Movie(
        title="Inception",
        description="A thief who steals secrets through dream-sharing.",
        release_year=2010,
        director_name="Christopher Nolan",
        director_bio="British-American filmmaker.",
        director_birth_year=1970,
        genre_name="Science Fiction",
        genre_description="Speculative stories built on science and technology.",
        actors=[actor],
    )
    dark_knight = Movie(
        title="The Dark Knight",
        description="Batman faces the Joker.",
        release_year=2008,
        director_name="Christopher Nolan",
        director_bio="British-American filmmaker.",
        director_birth_year=1970,
        genre_name="Action",
        genre_description="Fights, chases and explosions.",
        actors=[actor],
    )
    airplane = Movie(
        title="Airplane!",
        description="A spoof of disaster films.",
        release_year=1980,
        director_name="Jim Abrahams",
        genre_name="Comedy",
        genre_description="Made to make you laugh.",
    )
    db_session.add_all([actor, inception, dark_knight, airplane])
    await db_session.commit()
    return {
        "inception": inception,
        "dark_knight": dark_knight,
        "airplane": airplane,
    }


@pytest.fixture
def test_user_id() -> UUID:
    """Get the test user ID."""
    return TEST_USER_ID


@pytest.fixture
def test_username() -> str:
    """Get the test user's username."""
    return TEST_USERNAME


@pytest.fixture
def test_user_password() -> str:
    """Get the test user password."""
    return TEST_USER_PASSWORD
