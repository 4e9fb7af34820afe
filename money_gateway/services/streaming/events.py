"""Server-Sent-Events framing for the generation stream."""
import json
from typing import Optional

STREAM_FAILED = "Streaming failed"


def sse_event(data: dict, event: Optional[str] = None) -> str:
    """Serialize one SSE frame. JSON keeps the payload on a single data line."""
    frame = f"event: {event}\n" if event else ""
    return frame + "data: " + json.dumps(data, ensure_ascii=False) + "\n\n"


def text_event(text: str) -> str:
    return sse_event({"text": text})


def done_event() -> str:
    return sse_event({}, event="done")


def error_event(reason: str = STREAM_FAILED) -> str:
    return sse_event({"error": reason})
