# ipam_console/errors.py
"""
Error taxonomy for the list screens.

AuthorizationDenied and ValidationError are resolved by the component that
detects them. RemoteFailure and UnexpectedClientError always reach the user.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

GENERIC_FAILURE_MESSAGE = "Something went wrong while processing your request. Please try again."


@dataclass(frozen=True, slots=True)
class ActionError:
    """Structured error returned by a fetch or mutation action."""

    code: str
    user_message: str
    field: Optional[str] = None


class ConsoleError(Exception):
    """Base class for all console errors."""

    code = "CONSOLE_ERROR"

    def __init__(self, message: str, user_message: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message)
        self.user_message = user_message or message
        self.field = field


class AuthorizationDenied(ConsoleError):
    """The acting user lacks the capability; never reaches the network."""

    code = "AUTHORIZATION_DENIED"

    def __init__(self, capability: str, user_message: Optional[str] = None):
        super().__init__(
            f"Missing capability '{capability}'",
            user_message or "You do not have permission to perform this action.",
        )
        self.capability = capability


class ValidationError(ConsoleError):
    """Bad user input, corrected locally."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None, value: object = None, user_message: Optional[str] = None):
        super().__init__(message, user_message, field)
        self.value = value


class RemoteFailure(ConsoleError):
    """A fetch or mutation action reported a structured error."""

    def __init__(self, error: ActionError):
        super().__init__(f"{error.code}: {error.user_message}", error.user_message, error.field)
        self.error = error

    @property
    def code(self) -> str:  # type: ignore[override]
        return self.error.code


class UnexpectedClientError(ConsoleError):
    """Anything else raised while orchestrating a fetch or mutation."""

    code = "UNEXPECTED_CLIENT_ERROR"

    def __init__(self, original: BaseException, action: str = "request"):
        super().__init__(
            f"Unexpected error during {action}: {type(original).__name__} - {original}",
            GENERIC_FAILURE_MESSAGE,
        )
        self.original = original


class RecordInUse(ConsoleError):
    """A record cannot be removed while other records still reference it."""

    code = "RESOURCE_IN_USE"

    def __init__(self, message: str, code: str = "RESOURCE_IN_USE", field: Optional[str] = None):
        super().__init__(message, message, field)
        self.code = code


def describe_error(exc: BaseException) -> str:
    """Return the text the user should see for `exc`."""
    if isinstance(exc, ConsoleError):
        return exc.user_message
    return GENERIC_FAILURE_MESSAGE


def to_action_error(exc: BaseException) -> ActionError:
    """Convert any exception into the structured form actions return."""
    if isinstance(exc, RemoteFailure):
        return exc.error
    if isinstance(exc, ConsoleError):
        return ActionError(code=exc.code, user_message=exc.user_message, field=exc.field)
    return ActionError(code="UNEXPECTED_ACTION_ERROR", user_message=GENERIC_FAILURE_MESSAGE)
