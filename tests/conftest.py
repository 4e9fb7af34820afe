"""
Pytest configuration for gateway tests.

Adds the project root to Python path so imports like
'from money_gateway.xxx import ...' work without installing the package,
and provides fakes for both upstream providers.
"""
import asyncio
import json
import sys
from pathlib import Path
from typing import Callable, Optional

import pytest

# Add project root to path
root_dir = Path(__file__).parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

import httpx  # noqa: E402

from money_gateway.config import Settings  # noqa: E402
from money_gateway.errors import UpstreamError  # noqa: E402

TEST_KEY_ID = "rzp_test_key"
TEST_KEY_SECRET = "test_secret"


class FakeGenerator:
    """
    Scripted stand-in for the text generator.

    Yields `fragments` in order, then raises `error` if one is set. Records
    how many fragments were pulled and whether the stream was closed.
    """

    def __init__(
        self,
        fragments: Optional[list[str]] = None,
        error: Optional[Exception] = None,
        reply: str = "Hello from the model",
        configured: bool = True,
        gate: Optional[asyncio.Event] = None,
    ):
        self.fragments = fragments or []
        self.error = error
        self.reply = reply
        self.configured = configured
        self.gate = gate
        self.prompts: list[str] = []
        self.pulled = 0
        self.closed = False

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def stream(self, prompt: str):
        self.prompts.append(prompt)
        try:
            for fragment in self.fragments:
                await asyncio.sleep(0)
                self.pulled += 1
                yield fragment
            if self.gate is not None:
                await self.gate.wait()
            if self.error is not None:
                raise self.error
        finally:
            self.closed = True

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise UpstreamError("Failed to generate response")
        return self.reply


class FakeRazorpay:
    """httpx MockTransport handler that records requests."""

    def __init__(self, responder: Optional[Callable[[httpx.Request], httpx.Response]] = None):
        self.requests: list[httpx.Request] = []
        self._responder = responder or self.default_response

    @staticmethod
    def default_response(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/v1/orders":
            payload = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "id": "order_test_123",
                    "entity": "order",
                    "amount": payload["amount"],
                    "currency": payload["currency"],
                    "receipt": payload["receipt"],
                    "status": "created",
                    "created_at": 1700000000,
                },
            )
        if request.url.path == "/v1/payments":
            return httpx.Response(200, json={"entity": "collection", "count": 0, "items": []})
        return httpx.Response(404, json={"error": {"description": "not found"}})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def make_settings(**overrides) -> Settings:
    values = {
        "razorpay_key_id": TEST_KEY_ID,
        "razorpay_key_secret": TEST_KEY_SECRET,
        "gemini_api_key": "test-gemini-key",
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def fake_razorpay() -> FakeRazorpay:
    return FakeRazorpay()


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator(fragments=["Hel", "lo"])
