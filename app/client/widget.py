import abc
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

import httpx
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class PaymentConfirmation(BaseModel):
    """What the hosted checkout hands back after a successful payment."""
    razorpay_payment_id: str
    razorpay_order_id: str
    razorpay_signature: str


@dataclass
class CheckoutOptions:
    key: str
    amount: int
    currency: str
    name: str
    description: str
    order_id: str
    on_success: Callable[[PaymentConfirmation], None]
    on_dismiss: Callable[[], None]
    theme_color: str = "#6366f1"
    prefill: dict = field(default_factory=lambda: {"name": "", "email": "", "contact": ""})


class CheckoutWidget(abc.ABC):
    """
    The processor's hosted checkout, built from CheckoutOptions. Once opened it
    reports back through exactly one of options.on_success / options.on_dismiss.
    """

    def __init__(self, options: CheckoutOptions):
        self.options = options

    @abc.abstractmethod
    def open(self) -> None:
        ...


WidgetFactory = Callable[[CheckoutOptions], CheckoutWidget]


class ScriptLoader(abc.ABC):
    """
    Makes the checkout script available at most once. A failed load is not
    remembered, so the next submit tries again.
    """

    def __init__(self, url: str):
        self.url = url
        self.loaded = False

    def ensure_loaded(self) -> bool:
        if self.loaded:
            return True
        self.loaded = self._load()
        return self.loaded

    @abc.abstractmethod
    def _load(self) -> bool:
        ...


class HttpScriptLoader(ScriptLoader):
    """Fetches the checkout script over HTTP."""

    def __init__(self, url: str, http: Optional[httpx.Client] = None, timeout: float = 10.0):
        super().__init__(url)
        self._http = http
        self._timeout = timeout

    def _load(self) -> bool:
        try:
            if self._http is not None:
                response = self._http.get(self.url)
            else:
                response = httpx.get(self.url, timeout=self._timeout)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Could not load checkout script from {self.url}: {e}")
            return False
        logger.info(f"Checkout script loaded from {self.url}")
        return True
