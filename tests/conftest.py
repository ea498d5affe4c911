"""Root pytest fixtures for openai-lite-python tests."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import AsyncMock

import httpx
import pytest

from openai_lite.transport import Session

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def fake_session() -> AsyncMock:
    """Session stand-in that records calls and performs no I/O."""
    return AsyncMock(spec=Session)


@pytest.fixture
def make_session() -> Callable[[Handler], Session]:
    """Build a real Session whose HTTP traffic is served by a handler function."""

    def _make(handler: Handler) -> Session:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return Session(api_key="sk-test", http_client=http_client)

    return _make


@pytest.fixture
def completion_body() -> dict:
    """A minimal chat completion response body."""
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-3.5-turbo",
        "choices": [
            {
                "message": {"role": "assistant", "content": "hi"},
                "index": 0,
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 5, "completion_tokens": 1, "total_tokens": 6},
    }
