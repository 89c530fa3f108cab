"""
Backend base class: HTTP plumbing and the conversation driver.

Every provider adapter subclasses ``Backend`` and supplies the wire format
(request body, response parsing, tool-call envelope). The driver logic in
``converse`` is shared:

    send request
      -> no tool calls: append assistant reply, return it
      -> tool calls: execute all, append results, return them
      -> unknown tool on the first attempt: re-send once without tools
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

import httpx

from ragllm.core import (
    BackendHTTPError,
    Conversation,
    DecodeError,
    Message,
    PromptResponse,
    RequestMarshalError,
    ToolCall,
    ToolExecutionError,
    ToolNotFoundError,
    TransportError,
)
from ragllm.core.helpers import encode_result

if TYPE_CHECKING:
    from ragllm.config import Config

DEFAULT_TIMEOUT = 30.0


@dataclass
class ChatReply:
    """Provider-neutral view of one chat response.

    Each tool call keeps the raw provider envelope so it can be echoed back.
    """

    content: str
    tool_calls: list[tuple[ToolCall, dict[str, Any]]] = field(default_factory=list)


class Backend(ABC):
    """An LLM provider integration."""

    name: ClassVar[str] = "backend"
    default_base_url: ClassVar[str] = ""
    chat_endpoint: ClassVar[str] = ""

    def __init__(
        self,
        model: str,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
        logger: logging.Logger | None = None,
    ):
        self.model = model
        self.base_url = (base_url or self.default_base_url).rstrip("/")
        self.timeout = timeout or DEFAULT_TIMEOUT
        self.logger = logger or logging.getLogger(type(self).__module__)
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=self.timeout)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    @abstractmethod
    def from_config(
        cls,
        config: Config,
        purpose: str = "generation",
        **kwargs: Any,
    ) -> Backend:
        """Build a backend for ``purpose`` ("generation" or "embeddings")."""

    # ------------------------------------------------------------------
    # Provider hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _chat_request(
        self,
        conversation: Conversation,
        tools: list[dict[str, Any]],
    ) -> dict[str, Any]:
        """Build the chat request body. ``tools`` is empty when disabled."""

    @abstractmethod
    def _parse_chat_response(self, data: Any) -> ChatReply:
        """Decode a chat response body, raising DecodeError on bad shapes."""

    @abstractmethod
    def _tool_messages(self, call: ToolCall, envelope: dict[str, Any]) -> list[Message]:
        """Messages recording one executed tool call in the conversation."""

    @abstractmethod
    def generate(self, conversation: Conversation, *, timeout: float | None = None) -> str:
        """Single-shot generation without tools. Does not modify the conversation."""

    @abstractmethod
    def embed(self, text: str, *, timeout: float | None = None) -> list[float]:
        """Embedding vector for ``text``."""

    # ------------------------------------------------------------------
    # Conversation driver
    # ------------------------------------------------------------------

    def converse(
        self,
        conversation: Conversation,
        *,
        timeout: float | None = None,
    ) -> PromptResponse:
        """Run one conversational turn, executing any requested tools.

        Returns an assistant reply, or a ``role="tool"`` response listing the
        executed calls. Tool results are appended to the conversation; call
        ``converse`` again to have the model answer from them.

        Some models request tools even when the prompt has nothing to do with
        them and invent tool names. If that happens the request is sent once
        more with tools left out. There is no second retry.

        Raises:
            ToolNotFoundError: The retry also asked for an unknown tool.
            ToolExecutionError: A tool raised.
            BackendError: HTTP, transport or decoding failure.
        """
        try:
            return self._converse_round_trip(conversation, disable_tools=False, timeout=timeout)
        except ToolNotFoundError as e:
            self.logger.warning(
                "%s requested unknown tool %r, retrying without tools", self.name, e.name
            )
            return self._converse_round_trip(conversation, disable_tools=True, timeout=timeout)

    def _converse_round_trip(
        self,
        conversation: Conversation,
        disable_tools: bool,
        timeout: float | None,
    ) -> PromptResponse:
        tools = [] if disable_tools else conversation.tools.describe()
        body = self._chat_request(conversation, tools)
        data = self._post(self.chat_endpoint, body, timeout=timeout)
        reply = self._parse_chat_response(data)

        if not reply.tool_calls:
            conversation.add_message("assistant", reply.content)
            return PromptResponse(role="assistant", content=reply.content)

        return self._execute_tool_calls(conversation, reply)

    def _execute_tool_calls(self, conversation: Conversation, reply: ChatReply) -> PromptResponse:
        """Execute every call, then append all results in one go.

        A failure anywhere in the batch leaves the conversation untouched.
        """
        pending: list[Message] = []
        executed: list[ToolCall] = []

        for call, envelope in reply.tool_calls:
            # ToolNotFoundError here means the model named an unregistered tool;
            # anything the executor raises is a ToolExecutionError.
            tool = conversation.tools.get(call.name)
            self.logger.debug("Executing tool %s with %s", call.name, call.arguments)
            try:
                output = encode_result(tool.executor(call.arguments))
            except Exception as e:
                raise ToolExecutionError(call.name, e) from e

            done = call.model_copy(update={"result": output})
            pending.extend(self._tool_messages(done, envelope))
            executed.append(done)

        conversation.extend(pending)
        return PromptResponse(role="tool", tool_calls=executed)

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json"}

    def _post(self, endpoint: str, body: dict[str, Any], timeout: float | None = None) -> Any:
        """POST a JSON body and return the decoded JSON response."""
        url = self.base_url + endpoint
        try:
            payload = json.dumps(body)
        except (TypeError, ValueError) as e:
            raise RequestMarshalError(f"failed to marshal request body: {e}") from e

        self.logger.debug("POST %s (model=%s)", url, self.model)
        try:
            resp = self._client.post(
                url,
                content=payload,
                headers=self._headers(),
                timeout=timeout if timeout is not None else self.timeout,
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"HTTP request to {url} timed out: {e}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP request to {url} failed: {e}") from e

        if not resp.is_success:
            raise BackendHTTPError(resp.status_code, resp.text, backend=self.name)

        try:
            return resp.json()
        except ValueError as e:
            raise DecodeError(f"failed to decode response: {e}") from e

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the HTTP client if this backend created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> Backend:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self.model!r}, base_url={self.base_url!r})"


def require_key(data: Any, key: str, what: str) -> Any:
    """Fetch ``data[key]`` from a decoded JSON object or raise DecodeError."""
    if not isinstance(data, dict) or key not in data:
        raise DecodeError(f"unexpected {what}: missing {key!r}")
    return data[key]


def require_text(data: Any, key: str, what: str) -> str:
    """Fetch a string value from a decoded JSON object or raise DecodeError."""
    value = require_key(data, key, what)
    if not isinstance(value, str):
        raise DecodeError(f"unexpected {what}: {key!r} is not a string")
    return value


def optional_text(data: dict[str, Any], key: str, what: str) -> str:
    """Like ``require_text``, but a missing or null value reads as ``""``."""
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"unexpected {what}: {key!r} is not a string")
    return value


def float_vector(values: Any, what: str) -> list[float]:
    """Validate a JSON array of numbers and return it as floats."""
    if not isinstance(values, list) or not all(
        isinstance(x, (int, float)) and not isinstance(x, bool) for x in values
    ):
        raise DecodeError(f"unexpected {what}: expected an array of numbers")
    return [float(x) for x in values]
