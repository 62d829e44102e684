"""Error types raised by services and translated by the API layer."""

from __future__ import annotations


class PlannerError(Exception):
    """Base class for expected application failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(PlannerError):
    """A referenced identifier does not exist in its collection."""


class ValidationError(PlannerError):
    """Missing required field, unknown foreign key or invalid date range."""


class UpstreamError(PlannerError):
    """The external geocoding provider failed or returned unusable data."""


class StorageError(PlannerError):
    """A collection file exists but cannot be read or parsed."""
