"""Exceptions raised by dashboard actions.

The HTTP layer maps UnknownActionError to 400 and every other error to 500;
the message is shown to the dashboard user verbatim.
"""

from __future__ import annotations


class ActionError(Exception):
    """Base exception for dashboard action failures."""
    pass


class InvalidParamsError(ActionError):
    """Raised when a required field is missing or malformed."""
    pass


class NotFoundError(ActionError):
    """Raised when an update/delete targets a row that does not exist."""
    pass


class ConflictError(ActionError):
    """Raised when a write would violate a uniqueness rule."""
    pass


class UnknownActionError(ActionError):
    """Raised when the action name is not registered."""

    def __init__(self, action: str) -> None:
        super().__init__(f"Unknown action: {action}")
        self.action = action
