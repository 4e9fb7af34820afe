"""
Payment signature verification.

The payment provider signs `order_id|payment_id` with the merchant key
secret using HMAC-SHA256 and hands the hex digest to the checkout client,
which forwards it to us for confirmation.
"""
import hashlib
import hmac

from money_gateway.errors import ValidationError


def compute_signature(order_id: str, reference_id: str, secret: str) -> str:
    """Hex HMAC-SHA256 of `order_id|reference_id` keyed with `secret`."""
    payload = f"{order_id}|{reference_id}"
    return hmac.new(
        secret.encode("utf-8"),
        payload.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def verify_signature(
    order_id: str,
    reference_id: str,
    supplied_signature: str,
    secret: str,
) -> bool:
    """
    Check a supplied signature against the one we compute.

    Raises:
        ValidationError: if any argument is missing or empty. This happens
            before the HMAC is computed.

    Returns:
        True when the signatures match. The comparison is constant-time.
    """
    if not order_id or not reference_id or not supplied_signature or not secret:
        raise ValidationError("Missing fields")

    expected = compute_signature(order_id, reference_id, secret)
    return hmac.compare_digest(
        expected.encode("utf-8"),
        supplied_signature.encode("utf-8"),
    )
