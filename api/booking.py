"""Booking endpoints: checkout context, live price quote and submission.

The API is stateless. Each call rebuilds a BookingForm from the request
body, so a quote request behaves exactly like a user typing those values
into the form and pressing "Apply".
"""

from typing import Callable

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from api.base import ErrorCodes, error_response, success_response
from auth.exceptions import NotAuthenticatedError
from clients.eventhub_client import EventHubClient
from core import messages
from core.booking_form import BookingForm
from core.config import EventHubConfig
from core.promotion_gate import PromotionGate, PromotionOutcome
from utils.timezone import format_event_date, format_event_time

ClientFactory = Callable[[str | None], EventHubClient]


class BookingInput(BaseModel):
    quantity: int = 1
    points_to_use: int = 0
    promo_code: str | None = None


def _quote_payload(form: BookingForm) -> dict:
    quote = form.quote
    payload = quote.model_dump(mode="json")
    payload["payable_total"] = str(quote.payable_total)
    payload["points_used"] = quote.points_used
    payload["promo_code"] = form.booking_request().promo_code
    return payload


def create_booking_router(client_factory: ClientFactory, config: EventHubConfig) -> APIRouter:
    router = APIRouter()

    def _client(request: Request) -> EventHubClient:
        token = getattr(request.state, "auth_token", None)
        if not token:
            raise NotAuthenticatedError("Please log in to book tickets")
        return client_factory(token)

    def _form(client: EventHubClient, event_id: str) -> BookingForm:
        event = client.get_event(event_id)
        return BookingForm(
            event,
            client.get_user_points(),
            PromotionGate(client.validate_promotion),
            client.create_booking,
            max_tickets_per_booking=config.max_tickets_per_booking,
        )

    def _fill(form: BookingForm, body: BookingInput) -> PromotionOutcome:
        # Points are clamped against the total, so quantity goes first
        form.set_quantity(body.quantity)
        form.set_points_to_use(body.points_to_use)
        form.set_promo_code(body.promo_code)
        return form.apply_promo_code()

    @router.get("/events/{event_id}/booking")
    def booking_context(request: Request, event_id: str):
        form = _form(_client(request), event_id)
        data = {
            "event": form.event.model_dump(mode="json"),
            "schedule": {
                "date": format_event_date(form.event.start_date, config.display_timezone),
                "time": format_event_time(form.event.start_date, config.display_timezone),
            },
            "points_available": form.points_available,
            "points_enabled": form.points_enabled,
            "promo_enabled": form.promo_enabled,
            "max_quantity": form.max_quantity,
            "quote": _quote_payload(form),
        }
        return success_response(data, request.state.request_id).model_dump(mode="json")

    @router.post("/events/{event_id}/booking/quote")
    def booking_quote(request: Request, event_id: str, body: BookingInput):
        form = _form(_client(request), event_id)
        outcome = _fill(form, body)
        data = {
            "quantity": form.quantity,
            "points_to_use": form.points_to_use,
            "max_points": form.max_points,
            "promotion": outcome.value,
            "error": form.error,
            "notice": form.notice,
            "can_submit": form.can_submit,
            "quote": _quote_payload(form),
        }
        return success_response(data, request.state.request_id).model_dump(mode="json")

    @router.post("/events/{event_id}/booking")
    def submit_booking(request: Request, event_id: str, body: BookingInput):
        form = _form(_client(request), event_id)
        outcome = _fill(form, body)

        # A requested code that did not apply must not turn into a full-price booking
        requested = form.promo_enabled and (body.promo_code or "").strip()
        if requested and outcome != PromotionOutcome.APPLIED:
            if outcome == PromotionOutcome.UNAVAILABLE:
                status_code, code = 503, ErrorCodes.SERVICE_UNAVAILABLE
            else:
                status_code, code = 400, ErrorCodes.PROMOTION_INVALID
            return JSONResponse(
                status_code=status_code,
                content=error_response(
                    code, form.error or messages.PROMO_INVALID, request.state.request_id
                ).model_dump(mode="json"),
            )

        transaction = form.submit()
        if transaction is None:
            if form.insufficient_seats:
                status_code, code = 409, ErrorCodes.INSUFFICIENT_SEATS
            else:
                status_code, code = 400, ErrorCodes.BOOKING_FAILED
            return JSONResponse(
                status_code=status_code,
                content=error_response(
                    code, form.error or "Booking failed", request.state.request_id
                ).model_dump(mode="json"),
            )

        data = {
            "transaction": transaction.model_dump(mode="json"),
            "notice": form.notice,
            "quote": _quote_payload(form),
        }
        return success_response(data, request.state.request_id).model_dump(mode="json")

    return router
