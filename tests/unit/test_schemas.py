"""Unit tests for Pydantic schemas."""

from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.api.schemas import BookCreate, BookPatch, BookResponse, BookUpdate
from app.models.book import Book


class TestBookSchemas:
    """Tests for Book request schemas."""

    def test_book_create_valid(self):
        """Test valid BookCreate schema."""
        book = BookCreate(
            title="1984",
            author="George Orwell",
            isbn="978-0-452-28423-4",
            price=10.99,
            quantity=25,
        )
        assert book.title == "1984"
        assert book.price == Decimal("10.99")
        assert book.quantity == 25

    def test_book_create_minimal(self):
        """Test BookCreate with minimal fields."""
        book = BookCreate(title="Minimal", author="Author")
        assert book.isbn is None
        assert book.price is None
        assert book.quantity == 0

    def test_book_create_empty_title(self):
        """Test BookCreate with empty title fails."""
        with pytest.raises(ValidationError):
            BookCreate(title="", author="Author")

    def test_book_create_empty_author(self):
        """Test BookCreate with empty author fails."""
        with pytest.raises(ValidationError):
            BookCreate(title="Title", author="")

    def test_book_create_negative_quantity(self):
        """Test BookCreate with a negative quantity fails."""
        with pytest.raises(ValidationError):
            BookCreate(title="Title", author="Author", quantity=-1)

    def test_book_create_price_precision(self):
        """Test prices with more than two fractional digits fail."""
        with pytest.raises(ValidationError):
            BookCreate(title="Title", author="Author", price=Decimal("1.234"))

    def test_book_update_requires_title_and_author(self):
        """Test BookUpdate is a full replacement."""
        with pytest.raises(ValidationError):
            BookUpdate(price=Decimal("1.00"))

    def test_book_patch_partial(self):
        """Test BookPatch with partial fields."""
        patch = BookPatch(price=Decimal("20.00"))
        assert patch.model_dump(exclude_none=True) == {"price": Decimal("20.00")}

    def test_book_patch_empty(self):
        """Test BookPatch with no fields."""
        assert BookPatch().model_dump(exclude_none=True) == {}

    def test_book_patch_empty_title(self):
        """Test BookPatch still validates supplied fields."""
        with pytest.raises(ValidationError):
            BookPatch(title="")


class TestBookResponse:
    """Tests for the Book response schema."""

    def test_from_model(self):
        """Test building a response from a model instance."""
        now = datetime(2024, 5, 1, 10, 30)
        book = Book(
            id=3,
            title="1984",
            author="George Orwell",
            isbn="978-0-452-28423-4",
            price=Decimal("10.99"),
            quantity=25,
            created_at=now,
            updated_at=now,
        )
        response = BookResponse.model_validate(book)
        assert response.id == 3
        assert response.created_at == now

    def test_json_uses_camel_case_and_numeric_price(self):
        """Test the wire format of a book."""
        now = datetime(2024, 5, 1, 10, 30)
        response = BookResponse(
            id=1,
            title="T",
            author="A",
            isbn=None,
            price=Decimal("20.00"),
            quantity=0,
            created_at=now,
            updated_at=now,
        )
        data = response.model_dump(mode="json", by_alias=True)
        assert data["price"] == 20.0
        assert "createdAt" in data
        assert "updatedAt" in data
        assert "created_at" not in data
