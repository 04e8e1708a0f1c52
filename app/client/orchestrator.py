import logging
from enum import Enum
from typing import Optional

from app.client.api import PaymentsApi
from app.client.widget import CheckoutOptions, PaymentConfirmation, ScriptLoader, WidgetFactory
from app.core.errors import InvalidAmount, PaymentError, ScriptLoadFailed, UserCancelled

logger = logging.getLogger(__name__)

PRESET_AMOUNTS = [100, 500, 1000, 5000]

INVALID_AMOUNT_MESSAGE = "Please enter a valid amount"
SUCCESS_MESSAGE = "Payment successful! Thank you."
VERIFICATION_REJECTED_MESSAGE = "Payment verification failed"
VERIFICATION_ERROR_MESSAGE = "Error verifying payment"
GENERIC_ERROR_MESSAGE = "Something went wrong"


class CheckoutState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    AWAITING_USER_ACTION = "awaiting_user_action"


class Outcome(str, Enum):
    NONE = "none"
    SUCCESS = "success"
    ERROR = "error"


def format_inr(amount: int) -> str:
    """Indian digit grouping: 500000 -> '5,00,000'."""
    digits = str(amount)
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


class CheckoutOrchestrator:
    """
    Drives one payment at a time: validate the amount, load the checkout script,
    create the order, open the hosted widget, then verify what the widget returns.

    Every path ends back in IDLE; `outcome` and `message` describe how the last
    attempt went. Dismissing the widget leaves no message behind.
    """

    def __init__(
        self,
        api: PaymentsApi,
        script_loader: ScriptLoader,
        widget_factory: WidgetFactory,
        merchant_name: str = "Premium Payments",
    ):
        self.api = api
        self.script_loader = script_loader
        self.widget_factory = widget_factory
        self.merchant_name = merchant_name

        self.state = CheckoutState.IDLE
        self.outcome = Outcome.NONE
        self.message = ""
        self.amount_text = ""
        self.selected_preset: Optional[int] = None
        self.last_error: Optional[PaymentError] = None
        self._active_order_id: Optional[str] = None

    @property
    def amount(self) -> Optional[int]:
        return int(self.amount_text) if self.amount_text else None

    @property
    def is_loading(self) -> bool:
        return self.state != CheckoutState.IDLE

    def enter_amount(self, text: str) -> None:
        self.amount_text = "".join(ch for ch in text if ch in "0123456789")
        self.selected_preset = None

    def select_preset(self, preset: int) -> None:
        self.amount_text = str(preset)
        self.selected_preset = preset

    def reset_status(self) -> None:
        if self.state == CheckoutState.IDLE:
            self.outcome = Outcome.NONE
            self.message = ""

    def submit(self) -> None:
        if self.state != CheckoutState.IDLE:
            logger.warning(f"Submit ignored while {self.state.value}")
            return

        amount = self.amount
        if not amount or amount < 1:
            self._finish(Outcome.ERROR, INVALID_AMOUNT_MESSAGE, InvalidAmount(INVALID_AMOUNT_MESSAGE))
            return

        self.state = CheckoutState.SUBMITTING
        self.outcome = Outcome.NONE
        self.message = ""

        try:
            if not self.script_loader.ensure_loaded():
                raise ScriptLoadFailed()

            order = self.api.create_order(amount)
            widget = self.widget_factory(CheckoutOptions(
                key=order.keyId,
                amount=order.amount,
                currency=order.currency,
                name=self.merchant_name,
                description=f"Payment of ₹{format_inr(amount)}",
                order_id=order.orderId,
                on_success=self._on_payment_success,
                on_dismiss=self._on_dismiss,
            ))

            self._active_order_id = order.orderId
            self.state = CheckoutState.AWAITING_USER_ACTION
            logger.info(f"Opening checkout for order {order.orderId}")
            widget.open()
        except PaymentError as e:
            logger.warning(f"Checkout could not start: {e.message}")
            self._finish(Outcome.ERROR, e.message, e)
        except Exception as e:
            logger.error(f"Unexpected error starting checkout: {e}", exc_info=True)
            self._finish(Outcome.ERROR, GENERIC_ERROR_MESSAGE)

    def _on_payment_success(self, confirmation: PaymentConfirmation) -> None:
        if self.state != CheckoutState.AWAITING_USER_ACTION or confirmation.razorpay_order_id != self._active_order_id:
            logger.warning(
                f"Ignoring confirmation for order {confirmation.razorpay_order_id}; "
                f"state={self.state.value}, open order={self._active_order_id}"
            )
            self._finish(Outcome.ERROR, VERIFICATION_REJECTED_MESSAGE)
            return

        try:
            rejection = self.api.verify_payment(confirmation)
        except PaymentError as e:
            logger.error(f"Verification call failed for order {confirmation.razorpay_order_id}: {e}", exc_info=True)
            self._finish(Outcome.ERROR, VERIFICATION_ERROR_MESSAGE, e)
            return

        if rejection is None:
            self.amount_text = ""
            self.selected_preset = None
            self._finish(Outcome.SUCCESS, SUCCESS_MESSAGE)
        else:
            logger.warning(f"Payment for order {confirmation.razorpay_order_id} rejected: {rejection.message}")
            self._finish(Outcome.ERROR, VERIFICATION_REJECTED_MESSAGE, rejection)

    def _on_dismiss(self) -> None:
        if self.state != CheckoutState.AWAITING_USER_ACTION:
            return
        logger.info(f"Checkout dismissed for order {self._active_order_id}")
        self._finish(Outcome.NONE, "", UserCancelled())

    def _finish(self, outcome: Outcome, message: str, error: Optional[PaymentError] = None) -> None:
        self.state = CheckoutState.IDLE
        self.outcome = outcome
        self.message = message
        self.last_error = error
        self._active_order_id = None
