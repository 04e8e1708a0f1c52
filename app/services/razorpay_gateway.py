import logging
import time
import uuid
from typing import Any, Dict

import razorpay
from fastapi import Depends

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


def generate_receipt(strategy: str = "timestamp") -> str:
    """
    Receipt label sent with each order. The timestamp form is only unique per
    millisecond; "random" adds a uuid fragment for concurrent callers.
    """
    millis = int(time.time() * 1000)
    if strategy == "random":
        return f"receipt_{millis}_{uuid.uuid4().hex[:8]}"
    return f"receipt_{millis}"


class RazorpayGateway:
    """Thin wrapper over the Razorpay SDK client for the calls this service makes."""

    def __init__(self, settings: Settings, client: Any = None):
        self.settings = settings
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = razorpay.Client(
                auth=(self.settings.razorpay_key_id, self.settings.razorpay_key_secret)
            )
        return self._client

    def create_order(self, amount_minor: int) -> Dict[str, Any]:
        order_params = {
            "amount": amount_minor,
            "currency": self.settings.currency,
            "receipt": generate_receipt(self.settings.receipt_strategy),
        }
        logger.info(f"Creating Razorpay order: amount={amount_minor} currency={order_params['currency']} receipt={order_params['receipt']}")
        order = self.client.order.create(data=order_params)
        logger.info(f"Razorpay order {order.get('id')} created")
        return order


def get_gateway(settings: Settings = Depends(get_settings)) -> RazorpayGateway:
    return RazorpayGateway(settings)
