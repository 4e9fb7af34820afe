"""
Text generation endpoints.

/chat returns one completion. /generate relays the completion as it is
produced, over Server-Sent Events.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from pydantic import BaseModel
from starlette.types import Receive, Scope, Send

from money_gateway.ai.generator import TextGenerator
from money_gateway.api.dependencies import get_generator, get_relay
from money_gateway.errors import ConfigurationError
from money_gateway.services.streaming import StreamRelay, validate_prompt

logger = logging.getLogger(__name__)
router = APIRouter(tags=["generation"])


class PromptRequest(BaseModel):
    prompt: Optional[str] = None


class ChatResponse(BaseModel):
    text: str


class RelayResponse(StreamingResponse):
    """
    StreamingResponse that always closes its body iterator.

    On client disconnect Starlette stops iterating but leaves the generator
    suspended. Closing it here lets the relay cancel the session and release
    the upstream stream right away.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            await self.body_iterator.aclose()


def _require_generator(generator: TextGenerator) -> None:
    if not generator.is_configured:
        raise ConfigurationError("GEMINI_API_KEY not configured")


@router.post("/chat", response_model=ChatResponse)
async def chat(
    body: PromptRequest,
    generator: TextGenerator = Depends(get_generator),
) -> ChatResponse:
    """Single upstream call, no partial output."""
    _require_generator(generator)
    prompt = validate_prompt(body.prompt)

    text = await generator.complete(prompt)
    return ChatResponse(text=text)


@router.post("/generate")
async def generate(
    body: PromptRequest,
    generator: TextGenerator = Depends(get_generator),
    relay: StreamRelay = Depends(get_relay),
) -> RelayResponse:
    """
    Stream a completion as SSE.

    Configuration and prompt problems are answered with JSON before the
    stream opens. Once it is open the status is 200 and failures arrive
    as the final `data: {"error": ...}` frame.
    """
    _require_generator(generator)
    session = relay.open_session(body.prompt)
    logger.info("Opening stream %s", session.session_id)

    return RelayResponse(
        relay.stream(session),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
