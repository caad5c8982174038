"""Pydantic schemas for API request/response validation."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# Prices go over the wire as JSON numbers, not strings
Price = Annotated[
    Decimal,
    Field(ge=0, max_digits=10, decimal_places=2),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class BookCreate(BaseModel):
    """Schema for creating a new book."""

    title: str = Field(..., min_length=1, max_length=500)
    author: str = Field(..., min_length=1, max_length=500)
    isbn: str | None = Field(None, min_length=1, max_length=20)
    price: Price | None = None
    quantity: int = Field(0, ge=0)


class BookUpdate(BookCreate):
    """Schema for replacing all mutable fields of a book.

    Omitted optional fields are cleared, not kept.
    """


class BookPatch(BaseModel):
    """Schema for partially updating a book. Null or missing fields are left as they are."""

    title: str | None = Field(None, min_length=1, max_length=500)
    author: str | None = Field(None, min_length=1, max_length=500)
    isbn: str | None = Field(None, min_length=1, max_length=20)
    price: Price | None = None
    quantity: int | None = Field(None, ge=0)


class BookResponse(BaseModel):
    """Schema for book response."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    title: str
    author: str
    isbn: str | None
    price: Price | None
    quantity: int
    created_at: datetime
    updated_at: datetime


class HomeResponse(BaseModel):
    """Schema for the service banner."""

    message: str
    status: str
    timestamp: int


class HealthResponse(BaseModel):
    """Schema for the health check."""

    status: str
