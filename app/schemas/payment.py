# app/schemas/payment.py
from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, field_validator
from typing import Any, Optional, Union


class CreateOrderRequest(BaseModel):
    """
    Amount in major currency units (rupees). Anything that is not a JSON number
    is treated as missing so the endpoint can answer with "Invalid amount".
    """
    model_config = ConfigDict(extra="ignore")

    amount: Optional[Union[StrictInt, StrictFloat]] = None

    @field_validator("amount", mode="before")
    @classmethod
    def drop_non_numeric(cls, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return value


class CreateOrderResponse(BaseModel):
    orderId: str
    amount: int  # minor units (paise)
    currency: str
    keyId: str


class VerifyPaymentRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    razorpay_payment_id: Optional[str] = None
    razorpay_order_id: Optional[str] = None
    razorpay_signature: Optional[str] = None

    @field_validator("razorpay_payment_id", "razorpay_order_id", "razorpay_signature", mode="before")
    @classmethod
    def drop_non_string(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return None
        return value

    @property
    def is_complete(self) -> bool:
        return bool(self.razorpay_payment_id and self.razorpay_order_id and self.razorpay_signature)


class VerifyPaymentResponse(BaseModel):
    success: bool = True
    message: str = "Payment verified successfully"
    paymentId: str
    orderId: str


class ErrorResponse(BaseModel):
    error: str
    success: Optional[bool] = None
