"""
Conversation model: ordered messages, generation parameters and tools.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from ragllm.core.datamodels import Message, Parameters, Role
from ragllm.core.registry import ToolRegistry


class Conversation:
    """Message log for one logical dialogue.

    Messages are only ever appended. The conversation owns its tool
    registry; the registry is thread-safe, the message list is not, so a
    conversation must not be driven from two threads at once.

    Usage:
        conv = Conversation()
        conv.add_message("system", "You are terse.").add_message("user", "Hi")
    """

    def __init__(
        self,
        system_prompt: str | None = None,
        tools: ToolRegistry | None = None,
        parameters: Parameters | None = None,
    ):
        self._messages: list[Message] = []
        self.parameters = parameters or Parameters()
        self.tools = tools if tools is not None else ToolRegistry()
        if system_prompt:
            self.add_message("system", system_prompt)

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def last_message(self) -> Optional[Message]:
        return self._messages[-1] if self._messages else None

    def add_message(self, role: Role, content: str) -> Conversation:
        """Append a plain message and return self for chaining."""
        self._messages.append(Message(role=role, content=content))
        return self

    def append_message(self, message: Message) -> Conversation:
        """Append a message that carries provider-specific fields."""
        self._messages.append(message)
        return self

    def extend(self, messages: Iterable[Message]) -> Conversation:
        """Append several messages; nothing is appended if any is invalid."""
        batch = list(messages)
        for msg in batch:
            if not isinstance(msg, Message):
                raise TypeError(f"expected Message, got {type(msg).__name__}")
        self._messages.extend(batch)
        return self

    def set_parameters(self, parameters: Parameters) -> Conversation:
        """Replace the generation parameters wholesale."""
        self.parameters = parameters
        return self

    def as_wire_messages(self) -> list[dict[str, Any]]:
        """Messages as ``{role, content, **fields}`` dicts."""
        return [msg.to_wire() for msg in self._messages]

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return f"Conversation(messages={len(self._messages)}, tools={len(self.tools)})"
