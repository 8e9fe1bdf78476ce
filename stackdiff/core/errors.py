"""Exceptions raised by stackdiff."""

from __future__ import annotations

from typing import Any, Optional


class StackDiffError(Exception):
    """Base exception for stackdiff errors."""

    pass


class InvalidValueError(StackDiffError, TypeError):
    """
    Raised when a value is not JSON-compatible.

    This is an invariant violation: parsed JSON only ever contains
    dicts, lists, strings, numbers, booleans and None. It is never
    recovered from.
    """

    def __init__(self, value: Any, path: Optional[str] = None):
        self.value = value
        self.path = path
        message = f"Unsupported value of type {type(value).__name__}"
        if path:
            message += f" at '{path}'"
        super().__init__(message)


class InvalidOptionsError(StackDiffError, ValueError):
    """Raised when render options contain an unknown key."""

    def __init__(self, message: str, option: Optional[str] = None):
        super().__init__(message)
        self.option = option


class ChangeSetError(StackDiffError):
    """
    Raised when a change set document cannot be interpreted.

    Carries the logical id of the offending resource when known.
    """

    def __init__(self, message: str, logical_id: Optional[str] = None):
        super().__init__(message)
        self.logical_id = logical_id

    def __str__(self) -> str:
        message = super().__str__()
        if self.logical_id:
            return f"{message} (resource={self.logical_id})"
        return message
