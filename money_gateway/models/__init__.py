"""Models package for the money gateway."""

from money_gateway.models.payment import (
    PAYMENT_VERIFIED,
    Order,
    PaymentVerifiedEvent,
)

__all__ = [
    "PAYMENT_VERIFIED",
    "Order",
    "PaymentVerifiedEvent",
]
