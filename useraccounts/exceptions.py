"""Exceptions."""

from typing import Dict, List, Optional


class DuplicateAccount(RuntimeError):
    """An account with that e-mail address already exists."""


class ValidationFailed(RuntimeError):
    """The e-mail address or password does not meet requirements."""

    def __init__(self, message: str,
                 errors: Optional[Dict[str, List[str]]] = None) -> None:
        super(ValidationFailed, self).__init__(message)
        self.errors = errors or {}


class InvalidCredentials(RuntimeError):
    """The e-mail address or password is not correct."""


class EmailNotConfirmed(RuntimeError):
    """The credentials are correct, but the account is not yet confirmed."""


class Unauthorized(RuntimeError):
    """There is no active session."""


class NotFound(RuntimeError):
    """The requested account does not exist."""


class SessionCreationFailed(RuntimeError):
    """Failed to create a session in the session store."""


class SessionDeletionFailed(RuntimeError):
    """Failed to delete a session in the session store."""


class TokenStoreFailed(RuntimeError):
    """Failed to issue or consume a confirmation token."""


class DeliveryFailed(RuntimeError):
    """Failed to deliver a confirmation token to the user."""


class InvalidToken(RuntimeError):
    """A session cookie is malformed, forged or expired."""


class UnknownSession(RuntimeError):
    """Failed to locate a session in the session store."""
