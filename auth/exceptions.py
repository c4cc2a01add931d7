"""Typed exceptions for auth failures."""


class AuthError(Exception):
    """Base class for authentication errors."""


class NotAuthenticatedError(AuthError):
    """An operation requires a logged-in user and there is none."""


class SessionCorruptedError(AuthError):
    """
    Persisted session data could not be decoded.

    Handled inside SessionStore.load(), which clears the stored session.
    Callers outside the store should never see it.
    """
