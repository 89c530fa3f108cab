"""
Helper functions for tools and backend payloads.
"""

from __future__ import annotations

import inspect
import json
import re
import typing
from typing import Any, Callable

from pydantic import BaseModel, create_model

from ragllm.core.exceptions import DecodeError

_INVALID_NAME_CHARS = re.compile(r"[^a-zA-Z0-9_-]+")


def sanitize_tool_name(name: str) -> str:
    """Replace characters providers reject in function names with ``_``."""
    return _INVALID_NAME_CHARS.sub("_", (name or "").strip())


def arguments_model(fn: Callable, tool_name: str) -> type[BaseModel]:
    """Build a Pydantic model describing the arguments of ``fn``.

    Parameters without an annotation are treated as strings. ``*args`` and
    ``**kwargs`` are not exposed to the model.
    """
    try:
        hints = typing.get_type_hints(fn)
    except (NameError, TypeError):
        # Forward references that cannot be resolved
        hints = dict(getattr(fn, "__annotations__", {}))

    fields: dict[str, Any] = {}
    for param in inspect.signature(fn).parameters.values():
        if param.kind is param.VAR_POSITIONAL or param.kind is param.VAR_KEYWORD:
            continue
        default = ... if param.default is param.empty else param.default
        fields[param.name] = (hints.get(param.name, str), default)

    return create_model(f"{tool_name}_Arguments", **fields)


def schema_from_model(model: type[BaseModel]) -> dict[str, Any]:
    """JSON schema for tool parameters, stripped of Pydantic noise."""
    schema = model.model_json_schema()
    schema.pop("title", None)
    for prop in schema.get("properties", {}).values():
        prop.pop("title", None)
    for key, empty in (("type", "object"), ("properties", {}), ("required", [])):
        schema.setdefault(key, empty)
    return schema


def encode_result(output: Any) -> str:
    """Tool outputs travel as text; anything else is JSON-encoded."""
    if isinstance(output, str):
        return output
    if isinstance(output, BaseModel):
        return output.model_dump_json()
    return json.dumps(output, ensure_ascii=False)


def parse_json_object(text: str, what: str = "payload") -> dict[str, Any]:
    """Parse a JSON object, raising DecodeError on anything else."""
    if not text or not text.strip():
        return {}
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"invalid JSON in {what}: {e}") from e
    if not isinstance(value, dict):
        raise DecodeError(f"expected JSON object in {what}, got {type(value).__name__}")
    return value
