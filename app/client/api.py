import logging
from typing import Optional

import httpx

from app.client.widget import PaymentConfirmation
from app.core.errors import InvalidSignature, OrderCreationFailed, PaymentError, VerificationFailed
from app.schemas.payment import CreateOrderResponse

logger = logging.getLogger(__name__)


class PaymentsApi:
    """Calls the two payment endpoints. Works with any httpx.Client, including FastAPI's TestClient."""

    def __init__(self, http: httpx.Client, prefix: str = "/api"):
        self.http = http
        self.prefix = prefix.rstrip("/")

    def create_order(self, amount: int) -> CreateOrderResponse:
        response = self.http.post(f"{self.prefix}/create-order", json={"amount": amount})
        try:
            data = response.json()
        except ValueError:
            logger.error(f"create-order returned a non-JSON body (status {response.status_code})")
            raise OrderCreationFailed()

        if response.is_error:
            raise OrderCreationFailed(data.get("error") if isinstance(data, dict) else None)
        return CreateOrderResponse(**data)

    def verify_payment(self, confirmation: PaymentConfirmation) -> Optional[PaymentError]:
        """
        None when the server confirmed the signature, otherwise the rejection it
        answered with: 4xx as InvalidSignature, 5xx as VerificationFailed.
        Raises VerificationFailed when no usable answer came back.
        """
        try:
            response = self.http.post(f"{self.prefix}/verify-payment", json=confirmation.model_dump())
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise VerificationFailed() from e
        if isinstance(data, dict) and data.get("success") is True:
            return None

        message = data.get("error") if isinstance(data, dict) else None
        if response.status_code >= 500:
            return VerificationFailed(message)
        return InvalidSignature(message)
