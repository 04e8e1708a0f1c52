from typing import Optional


class PaymentError(Exception):
    """
    Base class for payment flow failures.
    `message` is safe to show to the caller; internal detail goes to the logs only.
    """
    status_code: int = 500
    default_message: str = "Something went wrong"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidAmount(PaymentError):
    status_code = 400
    default_message = "Invalid amount"


class MisconfiguredCredentials(PaymentError):
    status_code = 500
    default_message = "Razorpay credentials not configured"


class MissingFields(PaymentError):
    status_code = 400
    default_message = "Missing required fields"


class InvalidSignature(PaymentError):
    status_code = 400
    default_message = "Invalid signature"


class OrderCreationFailed(PaymentError):
    status_code = 500
    default_message = "Failed to create order"


class VerificationFailed(PaymentError):
    status_code = 500
    default_message = "Failed to verify payment"


# Client side only

class ScriptLoadFailed(PaymentError):
    default_message = "Failed to load Razorpay SDK"


class UserCancelled(PaymentError):
    """The checkout widget was dismissed. Not a failure; never shown to the user."""
    default_message = ""
