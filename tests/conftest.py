import pytest
from fastapi.testclient import TestClient
import os

# Add project root to sys.path to allow imports from app
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))


from app.main import app
from app.core.config import Settings, get_settings
from app.core.signature import compute_signature
from app.services.razorpay_gateway import RazorpayGateway, get_gateway

TEST_KEY_ID = "rzp_test_1DP5mmOlF5G5ag"
TEST_KEY_SECRET = "thisisthetestsecret"


class FakeOrders:
    """Stands in for razorpay.Client().order; records every create() call."""

    def __init__(self):
        self.calls = []
        self.error = None

    def create(self, data=None, **kwargs):
        self.calls.append(data)
        if self.error is not None:
            raise self.error
        return {
            "id": f"order_Test{len(self.calls):010d}",
            "entity": "order",
            "amount": data["amount"],
            "amount_paid": 0,
            "currency": data["currency"],
            "receipt": data["receipt"],
            "status": "created",
        }


class FakeRazorpayClient:
    def __init__(self):
        self.order = FakeOrders()


@pytest.fixture(scope="function")
def test_settings() -> Settings:
    return Settings(_env_file=None, razorpay_key_id=TEST_KEY_ID, razorpay_key_secret=TEST_KEY_SECRET, currency="INR")


@pytest.fixture(scope="function")
def fake_razorpay() -> FakeRazorpayClient:
    return FakeRazorpayClient()


@pytest.fixture(scope="function")
def client(test_settings: Settings, fake_razorpay: FakeRazorpayClient):
    """
    TestClient with settings and the Razorpay gateway overridden.
    Tests may mutate `test_settings` (e.g. blank out keys) before making requests.
    """
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_gateway] = lambda: RazorpayGateway(test_settings, client=fake_razorpay)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def sign(test_settings: Settings):
    """Signs "order_id|payment_id" the way Razorpay checkout does."""
    def _sign(order_id: str, payment_id: str) -> str:
        return compute_signature(test_settings.razorpay_key_secret or TEST_KEY_SECRET, order_id, payment_id)
    return _sign
