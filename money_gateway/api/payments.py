"""
Payment API endpoints.

Order creation and payment listing go to the provider. Verification is
local: a matching signature is broadcast to live listeners.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from money_gateway.api.dependencies import get_app_settings, get_dispatcher, get_payments
from money_gateway.config import Settings
from money_gateway.errors import ConfigurationError
from money_gateway.models.payment import Order, PaymentVerifiedEvent
from money_gateway.services.dispatcher import NotificationDispatcher
from money_gateway.services.payments import RazorpayService
from money_gateway.services.signature import verify_signature

logger = logging.getLogger(__name__)
router = APIRouter(tags=["payments"])


class CreateOrderRequest(BaseModel):
    """Amount in major currency units."""

    amount: Optional[float] = None


class CreateOrderResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    order: Order
    public_key_id: str


class VerifyPaymentRequest(BaseModel):
    """
    Payment confirmation from the checkout client.

    Accepts the Razorpay checkout field names as well.
    """

    order_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("orderId", "order_id", "razorpay_order_id"),
    )
    reference_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("referenceId", "reference_id", "razorpay_payment_id"),
    )
    supplied_signature: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("suppliedSignature", "supplied_signature", "razorpay_signature"),
    )


class VerifyPaymentResponse(BaseModel):
    success: bool


@router.post("/orders", response_model=CreateOrderResponse)
async def create_order(
    body: CreateOrderRequest,
    payments: RazorpayService = Depends(get_payments),
) -> CreateOrderResponse:
    """Create a provider order and return it with the public key id for checkout."""
    order = await payments.create_order(body.amount)
    return CreateOrderResponse(order=order, public_key_id=payments.key_id)


@router.get("/payments")
async def list_payments(
    payments: RazorpayService = Depends(get_payments),
) -> dict:
    """Most recent payments as reported by the provider."""
    return await payments.list_payments(count=20)


@router.post("/payments/verify", response_model=VerifyPaymentResponse)
async def verify_payment(
    body: VerifyPaymentRequest,
    settings: Settings = Depends(get_app_settings),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> VerifyPaymentResponse:
    """
    Check a payment signature.

    A mismatch is not an error: the answer is `{"success": false}`.
    On a match, one payment:verified event is published before responding.
    """
    if not settings.razorpay_key_secret:
        raise ConfigurationError("Razorpay keys not configured")

    is_valid = verify_signature(
        body.order_id,
        body.reference_id,
        body.supplied_signature,
        settings.razorpay_key_secret,
    )

    if is_valid:
        dispatcher.publish(
            PaymentVerifiedEvent(order_id=body.order_id, reference_id=body.reference_id)
        )
        logger.info("Payment %s verified for order %s", body.reference_id, body.order_id)
    else:
        logger.warning("Signature mismatch for order %s", body.order_id)

    return VerifyPaymentResponse(success=is_valid)
