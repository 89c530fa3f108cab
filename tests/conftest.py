"""
Shared fixtures: a scripted fake LLM server and weather-tool conversations.
"""

import json
from typing import Any, Callable, Union

import httpx
import pytest

from ragllm.core import Conversation, ToolRegistry
from ragllm.tools import weather

Reply = Union[httpx.Response, Callable[[httpx.Request], httpx.Response], Exception]


class FakeServer:
    """Scripted HTTP server for httpx.MockTransport.

    Replies are served in order; once exhausted, ``default`` (if set) is
    repeated. Every request is recorded.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.replies: list[Reply] = []
        self.default: Reply | None = None

    def reply_json(self, payload: Any, status: int = 200) -> "FakeServer":
        self.replies.append(httpx.Response(status, json=payload))
        return self

    def reply_text(self, text: str, status: int = 200) -> "FakeServer":
        self.replies.append(httpx.Response(status, text=text))
        return self

    def raise_error(self, error: Exception) -> "FakeServer":
        self.replies.append(error)
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.replies:
            reply = self.replies.pop(0)
        elif self.default is not None:
            reply = self.default
        else:
            raise AssertionError(f"unexpected request: {request.method} {request.url}")

        if isinstance(reply, Exception):
            raise reply
        if callable(reply) and not isinstance(reply, httpx.Response):
            return reply(request)
        return reply

    @property
    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    @property
    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


@pytest.fixture
def server():
    """Scripted fake LLM server."""
    return FakeServer()


@pytest.fixture
def weather_conversation():
    """System + user conversation with the weather tool registered."""
    registry = ToolRegistry()
    registry.register(weather)
    conv = Conversation(tools=registry)
    conv.add_message(
        "system",
        "You are a weather reporter. Use the weather tool to answer questions.",
    )
    conv.add_message("user", "What is the weather in London?")
    return conv
