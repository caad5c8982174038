"""Database engine, session factory and FastAPI dependency."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.core.config import get_settings
from app.core.dialect import Dialect, dialect_for_url

settings = get_settings()

# Chosen once for the lifetime of the process
dialect: Dialect = dialect_for_url(settings.database_url)

engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
    **dialect.engine_options,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all models."""


def get_dialect() -> Dialect:
    """Dependency that provides the active SQL dialect."""
    return dialect


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides a request-scoped database session.

    The session is committed when the request handler returns and rolled
    back if it raises.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create all tables that do not exist yet."""
    # Import models so they register with the metadata
    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
