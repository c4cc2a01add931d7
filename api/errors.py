"""Global exception handlers for FastAPI."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from api.base import error_response, ErrorCodes
from auth.exceptions import NotAuthenticatedError
from clients.eventhub_client import (
    EventHubAuthError,
    EventHubRequestError,
    EventHubResponseError,
    EventHubUnavailableError,
)

logger = logging.getLogger(__name__)


def _error(request: Request, status_code: int, code: str, message: str) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    return JSONResponse(
        status_code=status_code,
        content=error_response(code, message, request_id).model_dump(mode="json"),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the app."""

    @app.exception_handler(NotAuthenticatedError)
    async def not_authenticated_handler(request: Request, exc: NotAuthenticatedError):
        return _error(request, 401, ErrorCodes.NOT_AUTHENTICATED, str(exc))

    @app.exception_handler(EventHubAuthError)
    async def upstream_auth_handler(request: Request, exc: EventHubAuthError):
        return _error(request, 401, ErrorCodes.NOT_AUTHENTICATED, "Session expired. Please log in again.")

    @app.exception_handler(EventHubRequestError)
    async def upstream_request_handler(request: Request, exc: EventHubRequestError):
        code = ErrorCodes.NOT_FOUND if exc.status_code == 404 else ErrorCodes.INVALID_REQUEST
        return _error(request, exc.status_code, code, exc.message)

    @app.exception_handler(EventHubUnavailableError)
    async def upstream_unavailable_handler(request: Request, exc: EventHubUnavailableError):
        logger.error(f"EventHub unavailable: {exc}")
        return _error(
            request, 503, ErrorCodes.SERVICE_UNAVAILABLE,
            "EventHub is unavailable. Please try again.",
        )

    @app.exception_handler(EventHubResponseError)
    async def upstream_response_handler(request: Request, exc: EventHubResponseError):
        logger.error(f"EventHub returned an unexpected response: {exc}")
        return _error(request, 502, ErrorCodes.UPSTREAM_ERROR, "Unexpected response from EventHub")

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        message = str(exc)
        if "not found" in message.lower():
            return _error(request, 404, ErrorCodes.NOT_FOUND, message)
        return _error(request, 400, ErrorCodes.INVALID_REQUEST, message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _error(request, 422, ErrorCodes.VALIDATION_ERROR, str(exc.errors()))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        return _error(request, 500, ErrorCodes.INTERNAL_ERROR, "An internal error occurred")
