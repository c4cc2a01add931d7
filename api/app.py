"""FastAPI application factory."""

import logging

from dotenv import load_dotenv
from fastapi import FastAPI

from api.booking import ClientFactory, create_booking_router
from api.errors import register_error_handlers
from api.middleware import RequestContextMiddleware
from clients.eventhub_client import EventHubClient
from core.config import EventHubConfig

logger = logging.getLogger(__name__)


def create_app(
    config: EventHubConfig | None = None,
    client_factory: ClientFactory | None = None,
) -> FastAPI:
    """
    Build the booking API.

    Args:
        config: Client configuration. Loaded from .env / EVENTHUB_* when omitted.
        client_factory: Builds an EventHubClient for a caller's token.
            Defaults to a client against config.api_base_url.
    """
    if config is None:
        load_dotenv()
        config = EventHubConfig.from_env()

    if client_factory is None:
        def client_factory(token: str | None) -> EventHubClient:
            return EventHubClient(
                config.api_base_url,
                timeout_seconds=config.request_timeout_seconds,
                token_provider=lambda: token,
            )

    app = FastAPI(title="EventHub Booking")
    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(create_booking_router(client_factory, config), prefix="/api")

    logger.info(f"Booking API configured against {config.api_base_url}")
    return app
