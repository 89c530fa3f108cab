"""
Decorators for building tools from plain functions.
"""

from __future__ import annotations

import inspect
from typing import Any, Callable

from pydantic import ValidationError

from ragllm.core.datamodels import Tool
from ragllm.core.exceptions import ToolValidationError
from ragllm.core.helpers import (
    arguments_model,
    encode_result,
    sanitize_tool_name,
    schema_from_model,
)


def tool(
    fn: Callable | None = None,
    *,
    name: str | None = None,
    description: str | None = None,
) -> Any:
    """
    Turn a typed function into a Tool. Can be used with or without arguments.

    The parameter schema comes from the function signature. Arguments are
    validated before the call and non-string results are JSON-encoded.

    Usage:
        @tool
        def weather(city: str) -> dict: ...

        @tool(name="get_weather", description="Weather report for a city")
        def weather(city: str) -> dict: ...

        registry.register(weather)
    """
    def decorator(func: Callable) -> Tool:
        tool_name = sanitize_tool_name(name or func.__name__)
        args_model = arguments_model(func, tool_name)

        def executor(arguments: dict[str, Any]) -> str:
            try:
                validated = args_model.model_validate(arguments)
            except ValidationError as e:
                raise ToolValidationError(str(e)) from e
            return encode_result(func(**dict(validated)))

        return Tool(
            name=tool_name,
            description=description or _first_paragraph(func),
            parameters=schema_from_model(args_model),
            executor=executor,
        )

    # Handle @tool vs @tool(...)
    if fn is not None:
        return decorator(fn)
    return decorator


def _first_paragraph(fn: Callable) -> str:
    doc = inspect.getdoc(fn) or ""
    return doc.split("\n\n", 1)[0].strip()
