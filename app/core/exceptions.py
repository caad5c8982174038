"""Domain errors raised by the service layer."""


class BookstoreError(Exception):
    """Base class for bookstore business rule violations."""


class BookNotFoundError(BookstoreError):
    """Raised when a referenced book id has no stored record."""

    def __init__(self, book_id: int) -> None:
        self.book_id = book_id
        super().__init__(f"Book with id {book_id} not found")


class DuplicateIsbnError(BookstoreError):
    """Raised when an ISBN is already used by another book."""

    def __init__(self, isbn: str | None) -> None:
        self.isbn = isbn
        super().__init__(f"Book with ISBN '{isbn}' already exists")
