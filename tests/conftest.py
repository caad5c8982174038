"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from datetime import datetime
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.database import Base, get_db, get_dialect
from app.core.dialect import SQLITE
from app.main import app
from app.models.book import Book
from app.repositories.book import BookRepository
from app.services.books import BookService

# Use an in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixture books carry this timestamp so refreshes are easy to detect
FIXTURE_TIMESTAMP = datetime(2020, 1, 1, 12, 0, 0)


@pytest.fixture
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session() as session:
        yield session


@pytest.fixture
def repository(test_session: AsyncSession) -> BookRepository:
    """Book repository bound to the test session."""
    return BookRepository(test_session, SQLITE)


@pytest.fixture
def service(repository: BookRepository) -> BookService:
    """Book service bound to the test repository."""
    return BookService(repository)


@pytest.fixture
async def override_get_db(test_session: AsyncSession):
    """Override the get_db dependency for testing."""

    async def _override_get_db():
        yield test_session

    return _override_get_db


@pytest.fixture
async def client(override_get_db) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_dialect] = lambda: SQLITE

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _add_book(session: AsyncSession, **fields) -> Book:
    book = Book(created_at=FIXTURE_TIMESTAMP, updated_at=FIXTURE_TIMESTAMP, **fields)
    session.add(book)
    await session.flush()
    await session.refresh(book)
    return book


@pytest.fixture
async def sample_book(test_session: AsyncSession) -> Book:
    """Create a sample book for testing."""
    return await _add_book(
        test_session,
        title="The Great Gatsby",
        author="F. Scott Fitzgerald",
        isbn="978-0-7432-7356-5",
        price=Decimal("12.99"),
        quantity=50,
    )


@pytest.fixture
async def second_book(test_session: AsyncSession) -> Book:
    """Create a second book with a different ISBN."""
    return await _add_book(
        test_session,
        title="To Kill a Mockingbird",
        author="Harper Lee",
        isbn="978-0-06-112008-4",
        price=Decimal("14.99"),
        quantity=30,
    )
