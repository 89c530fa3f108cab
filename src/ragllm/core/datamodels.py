"""
Data models for tools, messages and backend responses.
"""

from __future__ import annotations

from typing import Any, Callable, Literal, Optional

from pydantic import BaseModel, Field, JsonValue, field_validator

Role = Literal["system", "user", "assistant", "tool"]

ToolExecutor = Callable[[dict[str, Any]], str]

_RESERVED_FIELDS = frozenset({"role", "content"})


class Message(BaseModel):
    """A single role-based message in a conversation.

    ``fields`` carries provider-specific envelope data (tool call ids,
    echoed tool calls) that is sent back verbatim.
    """

    role: Role
    content: str = ""
    fields: dict[str, JsonValue] = Field(default_factory=dict)

    @field_validator("fields")
    @classmethod
    def _no_reserved_keys(cls, value: dict[str, JsonValue]) -> dict[str, JsonValue]:
        clash = _RESERVED_FIELDS.intersection(value)
        if clash:
            raise ValueError(f"fields may not override {sorted(clash)}")
        return value

    def to_wire(self) -> dict[str, Any]:
        """Flatten into ``{role, content, **fields}``."""
        return {"role": self.role, "content": self.content, **self.fields}


class Parameters(BaseModel):
    """Generation settings. Unset values are left out of requests."""

    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None

    def to_request(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class Tool(BaseModel):
    """A named, schema-described callable the model may invoke."""

    name: str
    description: str = ""
    parameters: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )
    executor: ToolExecutor = Field(exclude=True)

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    def to_spec(self) -> dict[str, Any]:
        """Convert to the function-tool shape shared by OpenAI and Ollama."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


class ToolCall(BaseModel):
    """A tool call emitted by the model, with its result once executed."""

    name: str
    arguments: dict[str, JsonValue] = Field(default_factory=dict)
    result: Optional[str] = None
    id: Optional[str] = None


class PromptResponse(BaseModel):
    """Outcome of a single ``converse`` call."""

    role: Role
    content: str = ""
    tool_calls: list[ToolCall] = Field(default_factory=list)
