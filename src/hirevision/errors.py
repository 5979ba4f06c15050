"""Error taxonomy for dashboard actions.

Every error is terminal for the action that raised it only. Callers render
``user_message`` as a banner and keep the rest of the view usable.
"""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for user-visible dashboard failures."""

    default_message = "Something went wrong."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.user_message = message or self.default_message


class SessionError(DashboardError):
    """Raised when no signed-in recruiter is available."""

    default_message = "You must be signed in to view this page."


class FetchError(DashboardError):
    """Raised when a remote read fails."""

    default_message = "Failed to load data."


class MutationError(DashboardError):
    """Raised when an insert, update or delete is rejected."""

    default_message = "Failed to save changes."


class NetworkError(DashboardError):
    """Raised on transport failures talking to a backend."""

    default_message = "Network error. Try again."


class DataSourceError(Exception):
    """Adapter-level failure carrying the store's human-readable message."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


__all__ = [
    "DashboardError",
    "SessionError",
    "FetchError",
    "MutationError",
    "NetworkError",
    "DataSourceError",
]
