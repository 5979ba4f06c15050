"""Data store and session contracts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from ..schemas import User


@dataclass(slots=True)
class Query:
    """Backend-neutral select description: equality filters, order and limit."""

    columns: str = "*"
    eq: dict[str, Any] = field(default_factory=dict)
    order_by: str | None = None
    ascending: bool = True
    limit: int | None = None


@runtime_checkable
class DataSource(Protocol):
    """Row-oriented store contract.

    Implementations raise :class:`hirevision.errors.DataSourceError` carrying
    a human-readable message when the store rejects a request.
    """

    async def select(self, collection: str, query: Query | None = None) -> list[dict[str, Any]]:
        """Return rows of ``collection`` matching ``query``."""

    async def insert(self, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        """Insert ``record`` and return the stored row."""

    async def update(self, collection: str, record_id: str, values: dict[str, Any]) -> dict[str, Any] | None:
        """Patch the row identified by ``record_id``; ``None`` if nothing matched."""

    async def delete(self, collection: str, record_id: str) -> None:
        """Delete the row identified by ``record_id``."""


@runtime_checkable
class SessionProvider(Protocol):
    """Signed-in user lookup and sign-out."""

    async def get_current_user(self) -> User | None:
        """Return the current user, or ``None`` when nobody is signed in."""

    async def sign_out(self) -> None:
        """End the current session."""


__all__ = ["DataSource", "Query", "SessionProvider"]
