"""
Tests for Settings loading.
"""
import pydantic
import pytest

from money_gateway.config import Currency, Settings

ENV_VARS = [
    "PORT",
    "HOST",
    "RAZORPAY_KEY_ID",
    "RAZORPAY_KEY_SECRET",
    "RAZORPAY_BASE_URL",
    "PAYMENT_CURRENCY",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "LLM_MODEL",
    "NOTIFICATION_QUEUE_SIZE",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    """Tests for environment-driven configuration."""

    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.port == 3000
        assert settings.payment_currency is Currency.INR
        assert settings.llm_model == "gemini-1.5-flash"
        assert settings.razorpay_base_url == "https://api.razorpay.com"
        assert settings.payments_configured is False
        assert settings.generator_configured is False

    def test_reads_environment(self, clean_env):
        clean_env.setenv("PORT", "8080")
        clean_env.setenv("RAZORPAY_KEY_ID", "rzp_live_x")
        clean_env.setenv("RAZORPAY_KEY_SECRET", "secret")
        clean_env.setenv("GEMINI_API_KEY", "gem-key")

        settings = Settings(_env_file=None)

        assert settings.port == 8080
        assert settings.payments_configured is True
        assert settings.gemini_api_key == "gem-key"

    def test_google_api_key_fallback(self, clean_env):
        clean_env.setenv("GOOGLE_API_KEY", "google-key")

        settings = Settings(_env_file=None)

        assert settings.gemini_api_key == "google-key"
        assert settings.generator_configured is True

    def test_half_configured_payments(self, clean_env):
        clean_env.setenv("RAZORPAY_KEY_ID", "rzp_live_x")

        assert Settings(_env_file=None).payments_configured is False

    def test_settings_are_immutable(self, clean_env):
        settings = Settings(_env_file=None)

        with pytest.raises(pydantic.ValidationError):
            settings.port = 9000

    def test_base_url_trailing_slash_removed(self, clean_env):
        clean_env.setenv("RAZORPAY_BASE_URL", "https://example.test/")

        assert Settings(_env_file=None).razorpay_base_url == "https://example.test"

    def test_invalid_queue_size(self, clean_env):
        clean_env.setenv("NOTIFICATION_QUEUE_SIZE", "0")

        with pytest.raises(pydantic.ValidationError):
            Settings(_env_file=None)
