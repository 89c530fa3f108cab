"""
OpenAI backend (``/v1/chat/completions``, ``/v1/embeddings``).

Also works with OpenAI-compatible servers through ``base_url``.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import httpx

from ragllm.backends.base import (
    DEFAULT_TIMEOUT,
    Backend,
    ChatReply,
    float_vector,
    optional_text,
    require_key,
    require_text,
)
from ragllm.core import Conversation, DecodeError, Message, ToolCall
from ragllm.core.helpers import parse_json_object

if TYPE_CHECKING:
    from ragllm.config import Config

CHAT_ENDPOINT = "/v1/chat/completions"
EMBED_ENDPOINT = "/v1/embeddings"


class OpenAIBackend(Backend):
    """Backend for the OpenAI API."""

    name = "openai"
    default_base_url = "https://api.openai.com"
    chat_endpoint = CHAT_ENDPOINT

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
        logger: logging.Logger | None = None,
    ):
        super().__init__(model, base_url=base_url, timeout=timeout, client=client, logger=logger)
        self.api_key = api_key

    @classmethod
    def from_config(
        cls,
        config: Config,
        purpose: str = "generation",
        **kwargs: Any,
    ) -> OpenAIBackend:
        model = config.openai.emb_model if purpose == "embeddings" else config.openai.gen_model
        kwargs.setdefault("timeout", config.timeout)
        return cls(
            api_key=config.openai.api_key or "",
            model=model,
            base_url=config.openai.base_url,
            **kwargs,
        )

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _completion_body(self, conversation: Conversation) -> dict[str, Any]:
        body: dict[str, Any] = {
            "model": self.model,
            "messages": conversation.as_wire_messages(),
            "stream": False,
        }
        body.update(conversation.parameters.to_request())
        return body

    @staticmethod
    def _first_message(data: Any) -> dict[str, Any]:
        choices = require_key(data, "choices", "OpenAI chat response")
        if not isinstance(choices, list) or not choices:
            raise DecodeError("unexpected OpenAI chat response: no choices")
        message = require_key(choices[0], "message", "OpenAI chat choice")
        if not isinstance(message, dict):
            raise DecodeError("unexpected OpenAI chat choice: 'message' is not an object")
        return message

    # ------------------------------------------------------------------
    # Chat
    # ------------------------------------------------------------------

    def _chat_request(
        self,
        conversation: Conversation,
        tools: list[dict[str, Any]],
    ) -> dict[str, Any]:
        body = self._completion_body(conversation)
        if tools:
            body["tools"] = tools
        return body

    def _parse_chat_response(self, data: Any) -> ChatReply:
        message = self._first_message(data)
        reply = ChatReply(content=optional_text(message, "content", "OpenAI chat message"))

        tool_calls = message.get("tool_calls") or []
        if not isinstance(tool_calls, list):
            raise DecodeError("unexpected OpenAI chat message: 'tool_calls' is not a list")
        for raw in tool_calls:
            function = require_key(raw, "function", "OpenAI tool call")
            name = require_text(function, "name", "OpenAI tool call")
            # The result message must reference the call id
            call_id = require_text(raw, "id", f"OpenAI tool call {name}")
            arguments = function.get("arguments") or "{}"
            if isinstance(arguments, str):
                arguments = parse_json_object(arguments, f"arguments of tool {name}")
            elif not isinstance(arguments, dict):
                raise DecodeError(f"arguments of tool {name} must be a JSON object")
            call = ToolCall(name=name, arguments=arguments, id=call_id)
            reply.tool_calls.append((call, raw))
        return reply

    def _tool_messages(self, call: ToolCall, envelope: dict[str, Any]) -> list[Message]:
        # The API only accepts a tool result that follows the assistant
        # message carrying the matching call id.
        echoed = {
            "id": call.id,
            "type": envelope.get("type", "function"),
            "function": {
                "name": call.name,
                "arguments": _arguments_text(envelope),
            },
        }
        return [
            Message(role="assistant", content="", fields={"tool_calls": [echoed]}),
            Message(role="tool", content=call.result or "", fields={"tool_call_id": call.id}),
        ]

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------

    def generate(self, conversation: Conversation, *, timeout: float | None = None) -> str:
        data = self._post(CHAT_ENDPOINT, self._completion_body(conversation), timeout=timeout)
        return optional_text(self._first_message(data), "content", "OpenAI chat message")

    # ------------------------------------------------------------------
    # Embeddings
    # ------------------------------------------------------------------

    def embed(self, text: str, *, timeout: float | None = None) -> list[float]:
        data = self._post(EMBED_ENDPOINT, {"model": self.model, "input": text}, timeout=timeout)
        items = require_key(data, "data", "OpenAI embeddings response")
        if not isinstance(items, list) or not items:
            raise DecodeError("unexpected OpenAI embeddings response: no data")
        embedding = require_key(items[0], "embedding", "OpenAI embedding item")
        return float_vector(embedding, "OpenAI embedding item")


def _arguments_text(envelope: dict[str, Any]) -> str:
    arguments = envelope.get("function", {}).get("arguments", "{}")
    return arguments if isinstance(arguments, str) else json.dumps(arguments)
