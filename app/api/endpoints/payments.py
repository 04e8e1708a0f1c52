# app/api/endpoints/payments.py
import logging
import math
from typing import Optional, Union

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.core.config import Settings, get_settings
from app.core.errors import (
    InvalidAmount,
    InvalidSignature,
    MisconfiguredCredentials,
    MissingFields,
    OrderCreationFailed,
    PaymentError,
    VerificationFailed,
)
from app.core.signature import verify_signature
from app.schemas.payment import (
    CreateOrderRequest,
    CreateOrderResponse,
    ErrorResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from app.services.razorpay_gateway import RazorpayGateway, get_gateway

logger = logging.getLogger(__name__)
router = APIRouter()

CREDENTIALS_MISSING_MESSAGE = (
    "Razorpay credentials not configured. "
    "Please add RAZORPAY_KEY_ID and RAZORPAY_KEY_SECRET to your .env file."
)
SECRET_MISSING_MESSAGE = "Razorpay secret not configured"

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def to_minor_units(amount: Optional[Union[int, float]]) -> int:
    """Whole rupees in, paise out. Anything else is an invalid amount."""
    if amount is None:
        raise InvalidAmount()
    if isinstance(amount, float):
        if not math.isfinite(amount) or not amount.is_integer():
            raise InvalidAmount()
        amount = int(amount)
    if amount < 1:
        raise InvalidAmount()
    return amount * 100


@router.post("/create-order", response_model=CreateOrderResponse, responses=ERROR_RESPONSES)
def create_order_endpoint(
    payload: Optional[CreateOrderRequest] = None,
    settings: Settings = Depends(get_settings),
    gateway: RazorpayGateway = Depends(get_gateway),
):
    try:
        amount_minor = to_minor_units(payload.amount if payload else None)

        if not settings.has_api_credentials:
            logger.error("Razorpay key id/secret missing from environment. Cannot create order.")
            raise MisconfiguredCredentials(CREDENTIALS_MISSING_MESSAGE)

        order = gateway.create_order(amount_minor)
        return CreateOrderResponse(
            orderId=order["id"],
            amount=order["amount"],
            currency=order["currency"],
            keyId=settings.razorpay_key_id,
        )
    except PaymentError as e:
        return JSONResponse(status_code=e.status_code, content={"error": e.message})
    except Exception as e:
        logger.error(f"Error creating order: {e}", exc_info=True)
        failure = OrderCreationFailed()
        return JSONResponse(status_code=failure.status_code, content={"error": failure.message})


@router.post("/verify-payment", response_model=VerifyPaymentResponse, responses=ERROR_RESPONSES)
def verify_payment_endpoint(
    payload: Optional[VerifyPaymentRequest] = None,
    settings: Settings = Depends(get_settings),
):
    try:
        if payload is None or not payload.is_complete:
            raise MissingFields()

        if not settings.has_signing_secret:
            logger.error("Razorpay key secret missing from environment. Cannot verify payment.")
            raise MisconfiguredCredentials(SECRET_MISSING_MESSAGE)

        order_id = payload.razorpay_order_id
        payment_id = payload.razorpay_payment_id
        if not verify_signature(settings.razorpay_key_secret, order_id, payment_id, payload.razorpay_signature):
            logger.warning(f"Signature mismatch for order {order_id}, payment {payment_id}")
            raise InvalidSignature()

        logger.info(f"Payment {payment_id} verified for order {order_id}")
        return VerifyPaymentResponse(paymentId=payment_id, orderId=order_id)
    except PaymentError as e:
        return JSONResponse(status_code=e.status_code, content={"success": False, "error": e.message})
    except Exception as e:
        logger.error(f"Error verifying payment: {e}", exc_info=True)
        failure = VerificationFailed()
        return JSONResponse(status_code=failure.status_code, content={"success": False, "error": failure.message})
