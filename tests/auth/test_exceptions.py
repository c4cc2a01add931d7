"""Tests for auth/exceptions.py - Typed exceptions for auth failures."""

from auth.exceptions import AuthError, NotAuthenticatedError, SessionCorruptedError


class TestExceptionInheritance:
    """All auth exceptions should inherit from AuthError."""

    def test_not_authenticated_inherits(self):
        assert issubclass(NotAuthenticatedError, AuthError)

    def test_session_corrupted_inherits(self):
        assert issubclass(SessionCorruptedError, AuthError)

    def test_message_preserved(self):
        assert str(NotAuthenticatedError("Login required")) == "Login required"
