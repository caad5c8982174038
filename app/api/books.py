"""Book API routes."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.api.schemas import BookCreate, BookPatch, BookResponse, BookUpdate
from app.core.exceptions import BookNotFoundError, DuplicateIsbnError
from app.services.books import BookService, get_book_service

router = APIRouter(prefix="/api/books", tags=["books"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Book not found",
    )


def _duplicate_isbn(error: DuplicateIsbnError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=str(error),
    )


@router.get("", response_model=list[BookResponse])
async def list_books(
    response: Response,
    skip: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1),
    service: BookService = Depends(get_book_service),
) -> list[BookResponse]:
    """List all books."""
    books = await service.get_all_books(skip=skip, limit=limit)
    response.headers["X-Total-Count"] = str(await service.count_books())
    return [BookResponse.model_validate(book) for book in books]


@router.get("/search", response_model=list[BookResponse])
async def search_books(
    title: str = Query(..., min_length=1),
    service: BookService = Depends(get_book_service),
) -> list[BookResponse]:
    """Find books whose title contains the given text."""
    books = await service.search_books_by_title(title)
    return [BookResponse.model_validate(book) for book in books]


@router.get("/isbn/{isbn}", response_model=BookResponse)
async def get_book_by_isbn(
    isbn: str,
    service: BookService = Depends(get_book_service),
) -> BookResponse:
    """Get a book by its ISBN."""
    book = await service.get_book_by_isbn(isbn)
    if not book:
        raise _not_found()
    return BookResponse.model_validate(book)


@router.get("/author/{author}", response_model=list[BookResponse])
async def get_books_by_author(
    author: str,
    service: BookService = Depends(get_book_service),
) -> list[BookResponse]:
    """List books by an author (exact match)."""
    books = await service.get_books_by_author(author)
    return [BookResponse.model_validate(book) for book in books]


@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
async def create_book(
    book_data: BookCreate,
    service: BookService = Depends(get_book_service),
) -> BookResponse:
    """Create a new book."""
    try:
        book = await service.create_book(book_data)
    except DuplicateIsbnError as e:
        raise _duplicate_isbn(e) from e
    return BookResponse.model_validate(book)


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(
    book_id: int,
    service: BookService = Depends(get_book_service),
) -> BookResponse:
    """Get a specific book by ID."""
    book = await service.get_book_by_id(book_id)
    if not book:
        raise _not_found()
    return BookResponse.model_validate(book)


@router.put("/{book_id}", response_model=BookResponse)
async def update_book(
    book_id: int,
    book_data: BookUpdate,
    service: BookService = Depends(get_book_service),
) -> BookResponse:
    """Replace a book's fields."""
    try:
        book = await service.update_book(book_id, book_data)
    except BookNotFoundError as e:
        raise _not_found() from e
    except DuplicateIsbnError as e:
        raise _duplicate_isbn(e) from e
    return BookResponse.model_validate(book)


@router.patch("/{book_id}", response_model=BookResponse)
async def patch_book(
    book_id: int,
    book_data: BookPatch,
    service: BookService = Depends(get_book_service),
) -> BookResponse:
    """Partially update a book."""
    try:
        book = await service.patch_book(book_id, book_data)
    except BookNotFoundError as e:
        raise _not_found() from e
    except DuplicateIsbnError as e:
        raise _duplicate_isbn(e) from e
    return BookResponse.model_validate(book)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(
    book_id: int,
    service: BookService = Depends(get_book_service),
) -> None:
    """Delete a book."""
    try:
        await service.delete_book(book_id)
    except BookNotFoundError as e:
        raise _not_found() from e
