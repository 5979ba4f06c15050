"""Boundaries to the hosted data store and auth service."""

from __future__ import annotations

from .base import DataSource, Query, SessionProvider
from .rest import RestDataSource, RestSessionProvider

__all__ = [
    "DataSource",
    "Query",
    "RestDataSource",
    "RestSessionProvider",
    "SessionProvider",
]
