"""
Payment Models.

Orders returned to callers and events broadcast to live listeners.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from money_gateway.config import Currency

PAYMENT_VERIFIED = "payment:verified"


class Order(BaseModel):
    """
    Order created at the payment provider.

    Immutable once built. The gateway hands it back to the caller and keeps
    no copy.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str
    amount_minor_units: int = Field(gt=0)
    currency: Currency
    created_at: datetime
    receipt: Optional[str] = None
    status: Optional[str] = None


@dataclass(frozen=True)
class PaymentVerifiedEvent:
    """A payment confirmation whose signature checked out."""

    order_id: str
    reference_id: str

    def to_message(self) -> dict[str, Any]:
        """Wire shape sent to real-time listeners."""
        return {
            "type": PAYMENT_VERIFIED,
            "data": {
                "orderId": self.order_id,
                "referenceId": self.reference_id,
            },
        }
