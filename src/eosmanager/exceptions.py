"""
Exception types raised by the eAPI pipeline.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from typing import Any


class EosManagerError(Exception):
    """Base class for all eosmanager errors."""


class SwitchConnectionError(EosManagerError):
    """Transport-level failure or an API error during the initial connect."""


class NotFoundError(EosManagerError):
    """No active session exists for the requested switch id."""

    def __init__(self, switch_id: str):
        super().__init__(f"No connection found for switch ID: {switch_id}")
        self.switch_id = switch_id


class RemoteCommandError(EosManagerError):
    """The device rejected a command in a sequence.

    Attributes:
        code: eAPI error code, if the device supplied one
        results: Per-command results returned before (and including) the
            failing command
    """

    def __init__(
        self,
        message: str,
        code: int | None = None,
        results: list[dict[str, Any]] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.results = results or []

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "error": self.message,
            "code": self.code,
            "results": self.results,
        }


class IncompleteDataError(EosManagerError):
    """A parser received fewer results than it requires."""


class ValidationError(EosManagerError):
    """User input failed a shape or range check before any remote call."""


def first_error(*results: Any) -> EosManagerError | None:
    """Pick the first failure out of gather(..., return_exceptions=True) results.

    Exceptions outside the EosManagerError hierarchy are re-raised as-is.
    """
    error = None
    for result in results:
        if isinstance(result, BaseException):
            if not isinstance(result, EosManagerError):
                raise result
            if error is None:
                error = result
    return error
