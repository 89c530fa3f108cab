"""
Ollama backend (``/api/chat``, ``/api/generate``, ``/api/embeddings``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ragllm.backends.base import (
    Backend,
    ChatReply,
    float_vector,
    optional_text,
    require_key,
    require_text,
)
from ragllm.core import Conversation, DecodeError, Message, Parameters, ToolCall
from ragllm.core.helpers import parse_json_object

if TYPE_CHECKING:
    from ragllm.config import Config

CHAT_ENDPOINT = "/api/chat"
GENERATE_ENDPOINT = "/api/generate"
EMBED_ENDPOINT = "/api/embeddings"

# Parameters field -> Ollama ``options`` key
_OPTION_NAMES = {
    "max_tokens": "num_predict",
    "temperature": "temperature",
    "top_p": "top_p",
    "frequency_penalty": "frequency_penalty",
    "presence_penalty": "presence_penalty",
}


class OllamaBackend(Backend):
    """Backend for a local or remote Ollama server."""

    name = "ollama"
    default_base_url = "http://localhost:11434"
    chat_endpoint = CHAT_ENDPOINT

    @classmethod
    def from_config(
        cls,
        config: Config,
        purpose: str = "generation",
        **kwargs: Any,
    ) -> OllamaBackend:
        model = config.ollama.emb_model if purpose == "embeddings" else config.ollama.gen_model
        kwargs.setdefault("timeout", config.timeout)
        return cls(model=model, base_url=config.ollama.host, **kwargs)

    @staticmethod
    def _options(parameters: Parameters) -> dict[str, Any]:
        return {_OPTION_NAMES[k]: v for k, v in parameters.to_request().items()}

    # ------------------------------------------------------------------
    # Chat
    # ------------------------------------------------------------------

    def _chat_request(
        self,
        conversation: Conversation,
        tools: list[dict[str, Any]],
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            "model": self.model,
            "messages": conversation.as_wire_messages(),
            "stream": False,
        }
        if tools:
            body["tools"] = tools
        options = self._options(conversation.parameters)
        if options:
            body["options"] = options
        return body

    def _parse_chat_response(self, data: Any) -> ChatReply:
        message = require_key(data, "message", "Ollama chat response")
        if not isinstance(message, dict):
            raise DecodeError("unexpected Ollama chat response: 'message' is not an object")

        reply = ChatReply(content=optional_text(message, "content", "Ollama chat message"))
        tool_calls = message.get("tool_calls") or []
        if not isinstance(tool_calls, list):
            raise DecodeError("unexpected Ollama chat message: 'tool_calls' is not a list")
        for raw in tool_calls:
            function = require_key(raw, "function", "Ollama tool call")
            name = require_text(function, "name", "Ollama tool call")
            arguments = function.get("arguments") or {}
            # Some Ollama-compatible servers send arguments as a JSON string
            if isinstance(arguments, str):
                arguments = parse_json_object(arguments, f"arguments of tool {name}")
            if not isinstance(arguments, dict):
                raise DecodeError(f"arguments of tool {name} must be an object")
            reply.tool_calls.append((ToolCall(name=name, arguments=arguments), raw))
        return reply

    def _tool_messages(self, call: ToolCall, envelope: dict[str, Any]) -> list[Message]:
        return [
            Message(role="assistant", content="", fields={"tool_calls": [envelope]}),
            Message(role="tool", content=call.result or "", fields={"tool_name": call.name}),
        ]

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------

    def generate(self, conversation: Conversation, *, timeout: float | None = None) -> str:
        """Generate a completion from the conversation flattened into one prompt.

        Each message becomes a ``"role: content"`` line.
        """
        prompt = "".join(f"{m.role}: {m.content}\n" for m in conversation.messages)
        body: dict[str, Any] = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
        }
        options = self._options(conversation.parameters)
        if options:
            body["options"] = options

        data = self._post(GENERATE_ENDPOINT, body, timeout=timeout)
        return require_text(data, "response", "Ollama generate response")

    # ------------------------------------------------------------------
    # Embeddings
    # ------------------------------------------------------------------

    def embed(self, text: str, *, timeout: float | None = None) -> list[float]:
        data = self._post(EMBED_ENDPOINT, {"model": self.model, "prompt": text}, timeout=timeout)
        embedding = require_key(data, "embedding", "Ollama embeddings response")
        return float_vector(embedding, "Ollama embeddings response")
