"""
WebSocket endpoint for real-time payment notifications.
"""
import asyncio
import contextlib
import logging

from fastapi import APIRouter, Depends, WebSocket

from money_gateway.api.dependencies import get_dispatcher
from money_gateway.services.dispatcher import NotificationDispatcher, Subscription

logger = logging.getLogger(__name__)

router = APIRouter()


async def _forward(websocket: WebSocket, subscription: Subscription) -> None:
    """Send queued events to the client until the subscription closes."""
    try:
        async for event in subscription:
            await websocket.send_json(event.to_message())
    except Exception as e:
        # Socket went away mid-send; the dispatcher drops it on next publish.
        logger.info("Listener send failed: %s", e)
        subscription.close()


@router.websocket("/ws")
async def payment_notifications(
    websocket: WebSocket,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """
    Listener channel.

    Outgoing messages:
    - {"type": "payment:verified", "data": {"orderId": "...", "referenceId": "..."}}

    Incoming messages are read and ignored.
    """
    # Registered before accept so the client never sees an open socket
    # that could still miss an event.
    subscription = dispatcher.subscribe()
    forwarder = None

    try:
        await websocket.accept()
        forwarder = asyncio.create_task(_forward(websocket, subscription), name="ws-forward")
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    finally:
        dispatcher.unsubscribe(subscription)
        if forwarder is not None:
            forwarder.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await forwarder
