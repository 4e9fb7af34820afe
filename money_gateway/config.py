from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings


class Currency(str, Enum):
    """Currencies accepted by the payment provider for orders."""

    INR = "INR"
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    SGD = "SGD"
    AED = "AED"


class Settings(BaseSettings):
    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["http://localhost:5174"]

    # Razorpay
    razorpay_key_id: Optional[str] = None
    razorpay_key_secret: Optional[str] = None
    razorpay_base_url: str = "https://api.razorpay.com"
    payment_currency: Currency = Currency.INR
    upstream_timeout: float = 30.0

    # Gemini
    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("gemini_api_key", "google_api_key"),
    )
    llm_model: str = "gemini-1.5-flash"

    # Notifications
    notification_queue_size: int = 100

    # App settings
    log_level: str = "INFO"

    @field_validator("razorpay_base_url")
    @classmethod
    def razorpay_base_url_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("RAZORPAY_BASE_URL cannot be empty")
        return v.rstrip("/")

    @field_validator("notification_queue_size")
    @classmethod
    def queue_size_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("NOTIFICATION_QUEUE_SIZE must be positive")
        return v

    @property
    def payments_configured(self) -> bool:
        """Both halves of the Razorpay key pair are present."""
        return bool(self.razorpay_key_id and self.razorpay_key_secret)

    @property
    def generator_configured(self) -> bool:
        return bool(self.gemini_api_key)

    class Config:
        env_file = ".env"
        case_sensitive = False
        frozen = True
        populate_by_name = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
