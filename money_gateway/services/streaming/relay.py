"""
Streaming Relay.

Relays an upstream fragment iterator to the client as SSE frames.

The relay is itself an async generator: the transport pulls a frame, writes
it, and only then pulls the next one, so a slow client throttles the
upstream. Closing or cancelling the generator is how a client disconnect
reaches the relay.
"""
import asyncio
import logging
from typing import AsyncIterator

from money_gateway.ai.generator import TextGenerator
from money_gateway.errors import ValidationError

from .events import done_event, error_event, text_event
from .types import SessionState, StreamSession

logger = logging.getLogger(__name__)


class StreamRelay:
    """Turns a generator's fragments into a terminal-status SSE stream."""

    def __init__(self, generator: TextGenerator):
        self._generator = generator

    def open_session(self, prompt: object) -> StreamSession:
        """
        Validate the prompt and create a session.

        Raises:
            ValidationError: prompt is not a non-empty string. Nothing has
                been sent upstream or to the client at this point.
        """
        return StreamSession(prompt=validate_prompt(prompt))

    async def stream(self, session: StreamSession) -> AsyncIterator[str]:
        """
        Yield SSE frames for a session.

        Frames:
        - data: {"text": ...} for every non-empty fragment, in upstream order
        - event: done, once the upstream is exhausted
        - data: {"error": ...}, once, if the upstream fails

        Text already sent stays sent; the error frame follows it.
        """
        if session.state is not SessionState.INIT:
            raise RuntimeError(f"Session {session.session_id} was already streamed")

        try:
            upstream = self._generator.stream(session.prompt)
        except Exception as e:
            logger.exception("Stream %s could not start: %s", session.session_id, e)
            session.lifecycle.fail()
            yield error_event()
            return

        try:
            while True:
                try:
                    fragment = await anext(upstream)
                except StopAsyncIteration:
                    break
                except Exception as e:
                    logger.exception("Stream %s failed upstream: %s", session.session_id, e)
                    session.lifecycle.fail()
                    yield error_event()
                    return

                if session.state is SessionState.INIT:
                    session.lifecycle.begin()
                if not fragment:
                    continue

                session.fragments_sent += 1
                yield text_event(fragment)

            session.lifecycle.finish()
            logger.info(
                "Stream %s completed after %d fragment(s)",
                session.session_id,
                session.fragments_sent,
            )
            yield done_event()

        except (asyncio.CancelledError, GeneratorExit):
            if not session.is_terminal:
                session.lifecycle.cancel()
                logger.info(
                    "Stream %s cancelled by client after %d fragment(s)",
                    session.session_id,
                    session.fragments_sent,
                )
            raise

        finally:
            await self._release(upstream, session)

    async def _release(self, upstream: AsyncIterator[str], session: StreamSession) -> None:
        aclose = getattr(upstream, "aclose", None)
        if aclose is None:
            return
        try:
            await aclose()
        except Exception:
            logger.warning(
                "Failed to release upstream for stream %s",
                session.session_id,
                exc_info=True,
            )


def validate_prompt(prompt: object) -> str:
    """Return the prompt if it is a non-empty string, else raise ValidationError."""
    if not isinstance(prompt, str) or not prompt:
        raise ValidationError("Invalid prompt")
    return prompt
