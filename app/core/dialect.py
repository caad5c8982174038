"""SQL dialect adaptation for the configured database engine.

A ``Dialect`` is picked once from the database URL at startup and handed to
the repository layer. It captures the few places where engines disagree:

* how a page of rows is requested
* whether ``SELECT ... FOR UPDATE`` row locking exists at all
* how identifiers are quoted
* which options the engine needs when it is created
"""

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Select
from sqlalchemy.engine import make_url


@dataclass(frozen=True)
class Dialect:
    """Engine-specific SQL behaviour."""

    name: str
    supports_row_locking: bool
    identifier_quote: str = '"'
    engine_options: dict[str, Any] = field(default_factory=dict)

    def quote(self, identifier: str) -> str:
        """Quote an identifier, doubling any embedded quote characters."""
        q = self.identifier_quote
        return f"{q}{identifier.replace(q, q * 2)}{q}"

    def paginate(self, stmt: Select, limit: int | None, offset: int = 0) -> Select:
        """Apply a page window to a select statement."""
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return stmt

    def lock(self, stmt: Select) -> Select:
        """Request a row lock when the engine has one; otherwise leave the statement alone."""
        if self.supports_row_locking:
            return stmt.with_for_update()
        return stmt


SQLITE = Dialect(
    name="sqlite",
    supports_row_locking=False,
    engine_options={"connect_args": {"check_same_thread": False}},
)

POSTGRESQL = Dialect(
    name="postgresql",
    supports_row_locking=True,
    engine_options={"pool_pre_ping": True},
)

MYSQL = Dialect(
    name="mysql",
    supports_row_locking=True,
    identifier_quote="`",
    engine_options={"pool_pre_ping": True},
)

_DIALECTS = {d.name: d for d in (SQLITE, POSTGRESQL, MYSQL)}


def dialect_for_url(database_url: str) -> Dialect:
    """Select the dialect matching a SQLAlchemy database URL.

    Raises:
        ValueError: If the URL names an engine with no known dialect.
    """
    backend = make_url(database_url).get_backend_name()
    try:
        return _DIALECTS[backend]
    except KeyError:
        raise ValueError(f"Unsupported database backend: {backend}") from None
