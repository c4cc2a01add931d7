"""Authentication session modules."""

from auth.exceptions import (
    AuthError,
    NotAuthenticatedError,
    SessionCorruptedError,
)
from auth.types import User, UserRole, AuthResult
from auth.config import AuthConfig
from auth.session import SessionStore
