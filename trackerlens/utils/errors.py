"""
Error types and helpers for consistent error reporting.

The analysis engines never raise for empty or malformed input.
The only failures that reach callers come from the event store,
wrapped in :class:`StorageReadError` so the HTTP layer and the
coordinator can surface them without inspecting driver-specific
exception types.
"""

from __future__ import annotations


class TrackerLensError(Exception):
    """Base class for errors raised by this package."""


class StorageReadError(TrackerLensError):
    """Reading events from the backing store failed.

    Attributes:
        operation: The store operation that failed, e.g.
            ``"get_recent_events"``.
    """

    def __init__(self, message: str, *, operation: str = "get_recent_events") -> None:
        super().__init__(message)
        self.operation = operation


def get_error_message(error: BaseException | object) -> str:
    """
    Safely extract an error message from an unknown error type.

    Falls back to the exception class name when the exception
    carries no message.
    """
    if isinstance(error, Exception):
        return str(error) or type(error).__name__
    return "Unknown error"
