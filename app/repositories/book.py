"""Data access for the books table."""

from collections.abc import Sequence

from fastapi import Depends
from sqlalchemy import delete, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db, get_dialect
from app.core.dialect import Dialect
from app.models.book import Book


class BookRepository:
    """Repository executing all SQL against the ``books`` table.

    Lookups never raise for missing rows; absence is returned as ``None`` or
    an empty list and the service layer decides whether that is an error.
    """

    def __init__(self, db: AsyncSession, dialect: Dialect) -> None:
        self.db = db
        self.dialect = dialect

    async def find_all(self, skip: int = 0, limit: int | None = None) -> Sequence[Book]:
        """Return books ordered by id, optionally windowed."""
        query = self.dialect.paginate(select(Book).order_by(Book.id), limit, skip)
        result = await self.db.execute(query)
        return result.scalars().all()

    async def find_by_id(self, book_id: int, for_update: bool = False) -> Book | None:
        """Return the book with the given id, optionally row-locked."""
        query = select(Book).where(Book.id == book_id)
        if for_update:
            query = self.dialect.lock(query)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def find_by_isbn(self, isbn: str) -> Book | None:
        result = await self.db.execute(select(Book).where(Book.isbn == isbn))
        return result.scalar_one_or_none()

    async def find_by_author(self, author: str) -> Sequence[Book]:
        result = await self.db.execute(
            select(Book).where(Book.author == author).order_by(Book.id)
        )
        return result.scalars().all()

    async def find_by_title_containing(self, fragment: str) -> Sequence[Book]:
        # LIKE; case sensitivity is whatever the engine does by default
        result = await self.db.execute(
            select(Book).where(Book.title.contains(fragment, autoescape=True)).order_by(Book.id)
        )
        return result.scalars().all()

    async def exists_by_id(self, book_id: int) -> bool:
        result = await self.db.execute(select(Book.id).where(Book.id == book_id).limit(1))
        return result.scalar_one_or_none() is not None

    async def count(self) -> int:
        """Count all stored books."""
        table = self.dialect.quote(Book.__tablename__)
        result = await self.db.execute(text(f"SELECT COUNT(*) FROM {table}"))
        return result.scalar_one()

    async def delete_by_id(self, book_id: int) -> None:
        """Delete a book; deleting a missing id does nothing."""
        await self.db.execute(delete(Book).where(Book.id == book_id))
        await self.db.flush()

    async def save(self, book: Book) -> Book:
        """Insert a new book or update an existing one.

        A book without an id is inserted and gets its id from the store;
        a book with an id is written back to its existing row.
        """
        if book.id is None:
            self.db.add(book)
        else:
            book = await self.db.merge(book)
        await self.db.flush()
        await self.db.refresh(book)
        return book


async def get_book_repository(
    db: AsyncSession = Depends(get_db),
    dialect: Dialect = Depends(get_dialect),
) -> BookRepository:
    """Dependency that provides the book repository."""
    return BookRepository(db, dialect)
