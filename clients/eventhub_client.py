"""
EventHub REST API client.

Thin wrapper over requests. Each endpoint has exactly one canonical response
parser; a payload that lacks the expected shape raises EventHubResponseError
instead of being patched up with fallbacks.

Error mapping:
- transport failure or 5xx  -> EventHubUnavailableError
- 401                       -> EventHubAuthError (after on_unauthorized())
- other 4xx                 -> EventHubRequestError

Covers the customer booking flow plus the organizer side: managing
promotion codes and confirming or rejecting bookings. Reviews are read and
written here too.
"""

import logging
from decimal import Decimal
from typing import Any, Callable

import requests
from pydantic import BaseModel, ValidationError

from auth.types import AuthResult, User
from core.event_filters import EventFilters
from core.models import (
    BookingRequest,
    Event,
    EventPage,
    EventReviews,
    Promotion,
    PromotionInput,
    PromotionUpdate,
    PromotionValidation,
    Review,
    ReviewEligibility,
    ReviewInput,
    Transaction,
    TransactionStatus,
)
from utils.currency import round_amount, to_decimal

logger = logging.getLogger(__name__)


class EventHubError(Exception):
    """Base class for EventHub API failures."""


class EventHubUnavailableError(EventHubError):
    """API could not be reached or failed server-side. Safe to retry later."""


class EventHubAuthError(EventHubError):
    """API rejected the bearer token. The session must be re-established."""


class EventHubRequestError(EventHubError):
    """API rejected the request (4xx other than 401)."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


class EventHubResponseError(EventHubError):
    """API answered 2xx but the body does not have the expected shape."""


class EventHubClient:
    """
    Client for the EventHub REST API.

    Usage:
        client = EventHubClient("http://localhost:5001/api", token_provider=store.current_token)
        event = client.get_event(event_id)
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: int = 10,
        token_provider: Callable[[], str | None] | None = None,
        on_unauthorized: Callable[[], None] | None = None,
    ):
        """
        Args:
            base_url: API root, e.g. http://localhost:5001/api
            timeout_seconds: Per-request timeout
            token_provider: Returns the current bearer token, or None when logged out
            on_unauthorized: Called when the API answers 401 (e.g. clear the session)

        Raises:
            ValueError: If base_url is empty
        """
        if not base_url:
            raise ValueError("base_url is required")

        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._token_provider = token_provider
        self._on_unauthorized = on_unauthorized

    # =========================================================================
    # TRANSPORT
    # =========================================================================

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        token = self._token_provider() if self._token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _request(
        self,
        method: str,
        path: str,
        json: dict | None = None,
        params: dict | None = None,
    ) -> Any:
        """
        Send request and return the decoded JSON body.

        Raises:
            EventHubUnavailableError: Connection failure, timeout or 5xx
            EventHubAuthError: 401
            EventHubRequestError: Other 4xx
            EventHubResponseError: 2xx with a non-JSON body
        """
        url = f"{self.base_url}{path}"

        try:
            response = requests.request(
                method,
                url,
                json=json,
                params=params,
                headers=self._headers(),
                timeout=self.timeout_seconds,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"EventHub {method} {path} connection failed: {e}")
            raise EventHubUnavailableError(f"Connection failed: {e}")

        if response.status_code == 401:
            logger.info(f"EventHub {method} {path} returned 401, clearing session")
            if self._on_unauthorized is not None:
                self._on_unauthorized()
            raise EventHubAuthError("Not authenticated or session expired")

        if response.status_code >= 500:
            logger.error(f"EventHub {method} {path} server error {response.status_code}")
            raise EventHubUnavailableError(f"Server error {response.status_code}")

        try:
            body = response.json()
        except ValueError:
            if response.status_code >= 400:
                raise EventHubRequestError(response.status_code, response.text or "Request failed")
            logger.error(f"EventHub {method} {path} returned invalid JSON: {response.text}")
            raise EventHubResponseError(f"{method} {path}: response is not JSON")

        if response.status_code >= 400:
            message = body.get("message") if isinstance(body, dict) else None
            raise EventHubRequestError(response.status_code, message or "Request failed")

        return body

    # =========================================================================
    # RESPONSE PARSING
    # =========================================================================

    @staticmethod
    def _data(body: Any, endpoint: str) -> Any:
        """Extract the 'data' member of an envelope response."""
        if not isinstance(body, dict) or body.get("data") is None:
            raise EventHubResponseError(f"{endpoint}: expected 'data' in response")
        return body["data"]

    @staticmethod
    def _list(payload: Any, endpoint: str) -> list:
        if not isinstance(payload, list):
            raise EventHubResponseError(f"{endpoint}: expected a list in response")
        return payload

    @staticmethod
    def _model(model: type[BaseModel], payload: Any, endpoint: str):
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            logger.error(f"{endpoint}: unexpected payload shape: {e}")
            raise EventHubResponseError(f"{endpoint}: unexpected payload shape")

    # =========================================================================
    # AUTH
    # =========================================================================

    def login(self, email: str, password: str) -> AuthResult:
        """POST /auth/login. Response: {data: {token, user}}."""
        body = self._request("POST", "/auth/login", json={"email": email, "password": password})
        return self._model(AuthResult, self._data(body, "login"), "login")

    def register(
        self,
        email: str,
        full_name: str,
        password: str,
        role: str | None = None,
    ) -> AuthResult:
        """POST /auth/register. Response: {data: {token, user}}."""
        payload = {"email": email, "fullName": full_name, "password": password}
        if role is not None:
            payload["role"] = role
        body = self._request("POST", "/auth/register", json=payload)
        return self._model(AuthResult, self._data(body, "register"), "register")

    # =========================================================================
    # EVENTS & USERS
    # =========================================================================

    def get_event(self, event_id: str) -> Event:
        """GET /events/{id}. Response: {data: Event}."""
        body = self._request("GET", f"/events/{event_id}")
        return self._model(Event, self._data(body, "get_event"), "get_event")

    def list_events(self, filters: EventFilters | None = None) -> EventPage:
        """GET /events. Response: {data: {events, pagination}}."""
        params = filters.to_query_params() if filters is not None else None
        body = self._request("GET", "/events", params=params or None)
        return self._model(EventPage, self._data(body, "list_events"), "list_events")

    def get_profile(self) -> User:
        """GET /users/profile. Response: the User object itself (not enveloped)."""
        body = self._request("GET", "/users/profile")
        return self._model(User, body, "get_profile")

    def get_user_points(self) -> int:
        """Loyalty point balance of the authenticated user."""
        return self.get_profile().points

    # =========================================================================
    # PROMOTIONS
    # =========================================================================

    def validate_promotion(
        self,
        code: str,
        event_id: str,
        total_amount: Decimal,
    ) -> PromotionValidation:
        """
        POST /promotions/validate. Response: {data: {valid, promotion?}}.

        The API rejects unknown, expired or exhausted codes with a 4xx; that
        is reported as valid=False rather than raised. Transport errors and
        5xx still raise EventHubUnavailableError.
        """
        payload = {
            "code": code,
            "eventId": event_id,
            "totalAmount": int(round_amount(to_decimal(total_amount))),
        }
        try:
            body = self._request("POST", "/promotions/validate", json=payload)
        except EventHubRequestError as e:
            logger.info(f"Promotion {code} rejected for event {event_id}: {e.message}")
            return PromotionValidation(valid=False)

        return self._model(PromotionValidation, self._data(body, "validate_promotion"), "validate_promotion")

    def create_promotion(self, promotion: PromotionInput) -> Promotion:
        """POST /promotions. Response: {success, message, data: Promotion}."""
        body = self._request("POST", "/promotions", json=promotion.to_payload())
        created = self._model(Promotion, self._data(body, "create_promotion"), "create_promotion")
        logger.info(f"Promotion {created.code} created")
        return created

    def get_my_promotions(self) -> list[Promotion]:
        """GET /promotions/my-promotions. Response: {data: [Promotion]}."""
        body = self._request("GET", "/promotions/my-promotions")
        items = self._list(self._data(body, "get_my_promotions"), "get_my_promotions")
        return [self._model(Promotion, item, "get_my_promotions") for item in items]

    def update_promotion(self, promotion_id: str, changes: PromotionUpdate) -> Promotion:
        """PUT /promotions/{id}. Response: {success, message, data: Promotion}."""
        payload = changes.to_payload()
        if not payload:
            raise ValueError("changes must set at least one field")
        body = self._request("PUT", f"/promotions/{promotion_id}", json=payload)
        return self._model(Promotion, self._data(body, "update_promotion"), "update_promotion")

    def delete_promotion(self, promotion_id: str) -> None:
        """DELETE /promotions/{id}. Response: {success, message}."""
        self._request("DELETE", f"/promotions/{promotion_id}")
        logger.info(f"Promotion {promotion_id} deleted")

    # =========================================================================
    # REVIEWS
    # =========================================================================

    def get_event_reviews(self, event_id: str) -> EventReviews:
        """GET /reviews/event/{id}. Response: {reviews, averageRating, totalReviews} (not enveloped)."""
        body = self._request("GET", f"/reviews/event/{event_id}")
        return self._model(EventReviews, body, "get_event_reviews")

    def can_user_review(self, event_id: str) -> ReviewEligibility:
        """GET /reviews/can-review/{id}. Response: {data: {canReview, reason?}}."""
        body = self._request("GET", f"/reviews/can-review/{event_id}")
        return self._model(ReviewEligibility, self._data(body, "can_user_review"), "can_user_review")

    def create_review(self, review: ReviewInput) -> Review:
        """POST /reviews. Response: {data: Review}."""
        body = self._request("POST", "/reviews", json=review.to_payload())
        created = self._model(Review, self._data(body, "create_review"), "create_review")
        logger.info(f"Review {created.id} created for event {review.event_id}")
        return created

    # =========================================================================
    # TRANSACTIONS
    # =========================================================================

    def create_booking(self, request: BookingRequest) -> Transaction:
        """POST /transactions. Response: {data: Transaction}."""
        body = self._request("POST", "/transactions", json=request.to_payload())
        transaction = self._model(Transaction, self._data(body, "create_booking"), "create_booking")
        logger.info(f"Booking {transaction.id} created for event {request.event_id}")
        return transaction

    def get_my_transactions(self) -> list[Transaction]:
        """GET /transactions/my-transactions. Response: {data: {data: [Transaction], pagination}}."""
        body = self._request("GET", "/transactions/my-transactions")
        page = self._data(body, "get_my_transactions")
        if not isinstance(page, dict) or not isinstance(page.get("data"), list):
            raise EventHubResponseError("get_my_transactions: expected 'data.data' list in response")
        return [self._model(Transaction, item, "get_my_transactions") for item in page["data"]]

    def get_transaction(self, transaction_id: str) -> Transaction:
        """GET /transactions/{id}. Response: {data: Transaction}."""
        body = self._request("GET", f"/transactions/{transaction_id}")
        return self._model(Transaction, self._data(body, "get_transaction"), "get_transaction")

    def upload_payment_proof(self, transaction_id: str, proof_url: str) -> Transaction:
        """POST /transactions/{id}/payment-proof. Response: {data: Transaction}."""
        if not proof_url:
            raise ValueError("proof_url is required")
        body = self._request(
            "POST",
            f"/transactions/{transaction_id}/payment-proof",
            json={"paymentProof": proof_url},
        )
        return self._model(Transaction, self._data(body, "upload_payment_proof"), "upload_payment_proof")

    def get_my_tickets(self) -> list[Transaction]:
        """GET /transactions/my-tickets. Response: {data: [Transaction]}."""
        body = self._request("GET", "/transactions/my-tickets")
        items = self._list(self._data(body, "get_my_tickets"), "get_my_tickets")
        return [self._model(Transaction, item, "get_my_tickets") for item in items]

    def update_transaction_status(self, transaction_id: str, status: TransactionStatus) -> Transaction:
        """PUT /transactions/{id}/status. Organizers confirm (DONE) or reject a booking."""
        body = self._request(
            "PUT",
            f"/transactions/{transaction_id}/status",
            json={"status": TransactionStatus(status).value},
        )
        transaction = self._model(
            Transaction, self._data(body, "update_transaction_status"), "update_transaction_status"
        )
        logger.info(f"Transaction {transaction_id} set to {transaction.status.value}")
        return transaction
