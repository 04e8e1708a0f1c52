from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CHECKOUT_SCRIPT_URL = "https://checkout.razorpay.com/v1/checkout.js"


class Settings(BaseSettings):
    """
    Runtime configuration from environment variables and `.env`.
    Missing Razorpay keys are allowed here; the payment endpoints report them.
    """
    razorpay_key_id: Optional[str] = None
    razorpay_key_secret: Optional[str] = None
    currency: str = Field(default="INR", validation_alias=AliasChoices("PAYMENT_CURRENCY", "currency"))
    receipt_strategy: str = "timestamp"  # "timestamp" or "random"
    log_level: str = "INFO"
    checkout_script_url: str = DEFAULT_CHECKOUT_SCRIPT_URL
    merchant_name: str = "Premium Payments"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("razorpay_key_id", "razorpay_key_secret", mode="before")
    @classmethod
    def blank_is_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("receipt_strategy")
    @classmethod
    def lower_strategy(cls, value: str) -> str:
        return value.lower()

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, value: str) -> str:
        return value.upper()

    @property
    def has_api_credentials(self) -> bool:
        return bool(self.razorpay_key_id) and bool(self.razorpay_key_secret)

    @property
    def has_signing_secret(self) -> bool:
        return bool(self.razorpay_key_secret)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
