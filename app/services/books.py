"""Book service enforcing inventory business rules."""

import logging
from collections.abc import Sequence
from datetime import datetime, timezone

from fastapi import Depends
from opentelemetry import trace
from sqlalchemy.exc import IntegrityError

from app.api.schemas import BookCreate, BookPatch, BookUpdate
from app.core.exceptions import BookNotFoundError, DuplicateIsbnError
from app.models.book import Book
from app.repositories.book import BookRepository, get_book_repository

logger = logging.getLogger(__name__)

# Get tracer for this module
tracer = trace.get_tracer(__name__)


def utcnow() -> datetime:
    """Current time in UTC."""
    return datetime.now(tz=timezone.utc)


class BookService:
    """Service for managing books on top of the repository.

    ISBN uniqueness is checked here before writing, but that check is only a
    fast path: two concurrent requests can both pass it. The UNIQUE constraint
    on ``books.isbn`` catches the loser, and the resulting ``IntegrityError``
    is reported as a ``DuplicateIsbnError`` just like the fast-path rejection.
    """

    def __init__(self, repository: BookRepository) -> None:
        self.repository = repository

    async def get_all_books(self, skip: int = 0, limit: int | None = None) -> Sequence[Book]:
        return await self.repository.find_all(skip=skip, limit=limit)

    async def count_books(self) -> int:
        return await self.repository.count()

    async def get_book_by_id(self, book_id: int) -> Book | None:
        return await self.repository.find_by_id(book_id)

    async def get_book_by_isbn(self, isbn: str) -> Book | None:
        return await self.repository.find_by_isbn(isbn)

    async def get_books_by_author(self, author: str) -> Sequence[Book]:
        return await self.repository.find_by_author(author)

    async def search_books_by_title(self, title: str) -> Sequence[Book]:
        return await self.repository.find_by_title_containing(title)

    async def book_exists(self, book_id: int) -> bool:
        return await self.repository.exists_by_id(book_id)

    async def create_book(self, data: BookCreate) -> Book:
        """Create a new book.

        Raises:
            DuplicateIsbnError: If another book already uses ``data.isbn``.
        """
        with tracer.start_as_current_span("book_service.create_book") as span:
            if data.isbn is not None:
                span.set_attribute("book.isbn", data.isbn)
                if await self.repository.find_by_isbn(data.isbn) is not None:
                    logger.warning(f"Rejected create: ISBN {data.isbn} already exists")
                    raise DuplicateIsbnError(data.isbn)

            now = utcnow()
            book = Book(
                title=data.title,
                author=data.author,
                isbn=data.isbn,
                price=data.price,
                quantity=data.quantity,
                created_at=now,
                updated_at=now,
            )
            book = await self._save(book)

            span.set_attribute("book.id", book.id)
            logger.info(f"Created book {book.id} '{book.title}'")
            return book

    async def update_book(self, book_id: int, data: BookUpdate) -> Book:
        """Replace all mutable fields of an existing book.

        Raises:
            BookNotFoundError: If no book has ``book_id``.
            DuplicateIsbnError: If the new ISBN belongs to a different book.
        """
        with tracer.start_as_current_span("book_service.update_book") as span:
            span.set_attribute("book.id", book_id)
            book = await self._get_existing(book_id)
            await self._check_isbn_free(book, data.isbn)

            book.title = data.title
            book.author = data.author
            book.isbn = data.isbn
            book.price = data.price
            book.quantity = data.quantity
            book.updated_at = utcnow()
            book = await self._save(book)

            logger.info(f"Updated book {book_id}")
            return book

    async def patch_book(self, book_id: int, data: BookPatch) -> Book:
        """Apply only the fields that were supplied with a non-null value.

        Raises:
            BookNotFoundError: If no book has ``book_id``.
            DuplicateIsbnError: If a supplied ISBN belongs to a different book.
        """
        with tracer.start_as_current_span("book_service.patch_book") as span:
            span.set_attribute("book.id", book_id)
            book = await self._get_existing(book_id)

            changes = data.model_dump(exclude_none=True)
            if "isbn" in changes:
                await self._check_isbn_free(book, changes["isbn"])

            for field, value in changes.items():
                setattr(book, field, value)
            book.updated_at = utcnow()
            book = await self._save(book)

            span.set_attribute("book.patched_fields", sorted(changes))
            logger.info(f"Patched book {book_id}: {', '.join(sorted(changes)) or 'no fields'}")
            return book

    async def delete_book(self, book_id: int) -> None:
        """Delete an existing book.

        Raises:
            BookNotFoundError: If no book has ``book_id``.
        """
        with tracer.start_as_current_span("book_service.delete_book") as span:
            span.set_attribute("book.id", book_id)
            if not await self.repository.exists_by_id(book_id):
                logger.warning(f"Rejected delete: book {book_id} not found")
                raise BookNotFoundError(book_id)

            await self.repository.delete_by_id(book_id)
            logger.info(f"Deleted book {book_id}")

    async def _get_existing(self, book_id: int) -> Book:
        book = await self.repository.find_by_id(book_id, for_update=True)
        if book is None:
            logger.warning(f"Book {book_id} not found")
            raise BookNotFoundError(book_id)
        return book

    async def _check_isbn_free(self, book: Book, isbn: str | None) -> None:
        """Reject ``isbn`` if it is set and belongs to a book other than ``book``."""
        if isbn is None or isbn == book.isbn:
            return
        other = await self.repository.find_by_isbn(isbn)
        if other is not None and other.id != book.id:
            logger.warning(f"Rejected change to book {book.id}: ISBN {isbn} already exists")
            raise DuplicateIsbnError(isbn)

    async def _save(self, book: Book) -> Book:
        try:
            return await self.repository.save(book)
        except IntegrityError as e:
            # Lost a race with a concurrent writer on the UNIQUE isbn column
            logger.warning(f"ISBN constraint violated for {book.isbn}: {e.orig}")
            raise DuplicateIsbnError(book.isbn) from e


async def get_book_service(
    repository: BookRepository = Depends(get_book_repository),
) -> BookService:
    """Dependency that provides the book service."""
    return BookService(repository)
