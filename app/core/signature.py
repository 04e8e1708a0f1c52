import hashlib
import hmac


def compute_signature(secret: str, order_id: str, payment_id: str) -> str:
    """
    Razorpay checkout signature: hex HMAC-SHA256 of "<order_id>|<payment_id>",
    keyed with the account's key secret.
    """
    message = f"{order_id}|{payment_id}"
    return hmac.new(
        secret.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def verify_signature(secret: str, order_id: str, payment_id: str, signature: str) -> bool:
    expected_signature = compute_signature(secret, order_id, payment_id)
    # compare_digest needs both sides to be ASCII str or bytes
    return hmac.compare_digest(
        expected_signature.encode("utf-8"),
        signature.encode("utf-8"),
    )
