"""Request-scoped middleware for API requests."""

from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

AUTH_COOKIE = "auth_token"


def _bearer_token(request: Request) -> str | None:
    """Token from 'Authorization: Bearer ...', falling back to the auth_token cookie."""
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return request.cookies.get(AUTH_COOKIE) or None


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Assigns a request ID and exposes the caller's EventHub token.

    The token is passed through to the EventHub API untouched; the API
    decides whether it is valid.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid4())
        request.state.request_id = request_id
        request.state.auth_token = _bearer_token(request)
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response
