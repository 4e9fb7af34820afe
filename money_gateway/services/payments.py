import logging
import math
import time
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

import httpx

from money_gateway.config import Currency, Settings
from money_gateway.errors import ConfigurationError, UpstreamError, ValidationError
from money_gateway.models.payment import Order

logger = logging.getLogger(__name__)


def to_minor_units(amount: Any) -> int:
    """
    Convert a major-unit amount (rupees, dollars) into minor units.

    Multiplies by 100 and rounds half up. Anything that is not a positive,
    finite number, or that rounds down to zero, is rejected.
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
        raise ValidationError("Invalid amount")
    if not math.isfinite(amount) or amount <= 0:
        raise ValidationError("Invalid amount")

    try:
        minor = (Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # more digits than the decimal context can hold
        raise ValidationError("Invalid amount")
    if minor <= 0:
        raise ValidationError("Invalid amount")
    return int(minor)


class RazorpayService:
    """Async client for the Razorpay REST API using key id/secret basic auth."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._settings = settings
        self._transport = transport
        self.base_url = settings.razorpay_base_url

    @property
    def key_id(self) -> Optional[str]:
        """Public key id handed to checkout clients."""
        return self._settings.razorpay_key_id

    def _ensure_configured(self) -> httpx.BasicAuth:
        if not self._settings.payments_configured:
            logger.error("Razorpay keys not configured")
            raise ConfigurationError("Razorpay keys not configured")
        return httpx.BasicAuth(
            self._settings.razorpay_key_id,
            self._settings.razorpay_key_secret,
        )

    async def _request(
        self,
        method: str,
        path: str,
        failure_message: str,
        json: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Any:
        """Make an authenticated request; provider failures become UpstreamError."""
        auth = self._ensure_configured()
        url = f"{self.base_url}{path}"

        async with httpx.AsyncClient(transport=self._transport) as client:
            try:
                response = await client.request(
                    method=method,
                    url=url,
                    json=json,
                    params=params,
                    auth=auth,
                    timeout=self._settings.upstream_timeout,
                )
            except httpx.RequestError as e:
                logger.error("Razorpay connection error on %s %s: %s", method, path, e)
                raise UpstreamError(failure_message) from e

        if response.status_code >= 400:
            logger.error(
                "Razorpay %s %s failed with %d: %s",
                method,
                path,
                response.status_code,
                _describe_error(response),
            )
            raise UpstreamError(failure_message)

        try:
            return response.json()
        except ValueError as e:
            logger.error("Razorpay returned a non-JSON body for %s %s", method, path)
            raise UpstreamError(failure_message) from e

    # ==================== Orders ====================

    async def create_order(self, amount: Any, currency: Optional[Currency] = None) -> Order:
        """
        Create an order for a major-unit amount.

        Raises:
            ConfigurationError: key id or secret missing.
            ValidationError: amount is not a positive number.
            UpstreamError: the provider rejected the call or was unreachable.
        """
        self._ensure_configured()
        amount_minor_units = to_minor_units(amount)
        currency = currency or self._settings.payment_currency

        payload = {
            "amount": amount_minor_units,
            "currency": currency.value,
            "receipt": f"rcpt_{int(time.time() * 1000)}",
        }
        data = await self._request("POST", "/v1/orders", "Failed to create order", json=payload)

        try:
            order = Order(
                id=data["id"],
                amount_minor_units=data.get("amount", amount_minor_units),
                currency=data.get("currency", currency.value),
                created_at=_parse_timestamp(data.get("created_at")),
                receipt=data.get("receipt"),
                status=data.get("status"),
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Unexpected order payload from Razorpay: %s", e)
            raise UpstreamError("Failed to create order") from e

        logger.info("Created order %s for %d %s", order.id, order.amount_minor_units, order.currency.value)
        return order

    # ==================== Payments ====================

    async def list_payments(self, count: int = 20) -> dict:
        """Fetch the most recent payments, passed through as returned."""
        return await self._request(
            "GET",
            "/v1/payments",
            "Failed to fetch payments",
            params={"count": count},
        )


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    return datetime.now(tz=timezone.utc)


def _describe_error(response: httpx.Response) -> str:
    try:
        error = response.json().get("error", {})
        return error.get("description") or response.text
    except (ValueError, AttributeError):
        return response.text or "Unknown error"
