"""
Custom exceptions for Life History.

Exception hierarchy:
    LifeHistoryError (base)
    ├── ConfigurationError
    └── NotFoundError
        ├── MonthNotFoundError
        └── EventNotFoundError

NotFoundError subclasses never cross the mover boundary; move_event converts
them into an unchanged MoveResult.
"""

from __future__ import annotations

from typing import Any


class LifeHistoryError(Exception):
    """Base exception for all Life History errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            details: Additional error details (optional)
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class ConfigurationError(LifeHistoryError):
    """
    Raised when configuration is invalid or missing.

    Examples:
        - Missing explicit config file
        - Invalid YAML syntax
        - Non-numeric max age
    """

    pass


class NotFoundError(LifeHistoryError):
    """Raised when a node referenced by id is absent from the structure."""

    pass


class MonthNotFoundError(NotFoundError):
    """Raised when no month in the structure carries the requested id."""

    def __init__(self, month_id: str, details: dict[str, Any] | None = None):
        super().__init__(f"Month not found: {month_id}", details)
        self.month_id = month_id


class EventNotFoundError(NotFoundError):
    """Raised when an event id is absent from the month it was expected in."""

    def __init__(
        self,
        event_id: str,
        month_id: str,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize event lookup error.

        Args:
            event_id: Id of the missing event
            month_id: Month that was searched ("YYYY-MM")
            details: Additional error details
        """
        super().__init__(f"Event {event_id} not found in month {month_id}", details)
        self.event_id = event_id
        self.month_id = month_id
