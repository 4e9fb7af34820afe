"""
Streaming Services Module.

Relays LLM output to HTTP clients as Server-Sent Events.

Architecture:
- StreamSession: per-request state and lifecycle
- StreamRelay: pulls fragments from a TextGenerator and yields SSE frames
- events: SSE frame formatting

Usage:
    from money_gateway.services.streaming import StreamRelay

    relay = StreamRelay(generator)
    session = relay.open_session(prompt)
    return StreamingResponse(relay.stream(session), media_type="text/event-stream")
"""

from .types import (
    SessionLifecycle,
    SessionState,
    StreamSession,
)
from .events import sse_event, text_event, done_event, error_event
from .relay import StreamRelay, validate_prompt

__all__ = [
    # Types
    "SessionLifecycle",
    "SessionState",
    "StreamSession",
    # Events
    "sse_event",
    "text_event",
    "done_event",
    "error_event",
    # Services
    "StreamRelay",
    "validate_prompt",
]
