"""
Exception classes for ragllm.
"""

from __future__ import annotations


class RagLLMError(Exception):
    """Base exception for all ragllm errors."""


# ============================================================================
# Tool errors
# ============================================================================

class ToolError(RagLLMError):
    """Base exception for tool-related errors."""


class ToolNotFoundError(ToolError):
    """Tool not found in registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"tool not found: {name}")


class ToolValidationError(ToolError):
    """Tool argument validation failed."""


class ToolExecutionError(ToolError):
    """A tool's own logic failed."""

    def __init__(self, tool_name: str, cause: BaseException):
        self.tool_name = tool_name
        self.cause = cause
        super().__init__(f"failed to execute tool {tool_name}: {cause}")


# ============================================================================
# Backend errors
# ============================================================================

class BackendError(RagLLMError):
    """Base exception for LLM backend errors."""


class BackendHTTPError(BackendError):
    """Backend answered with a non-success HTTP status."""

    def __init__(self, status: int, body: str, backend: str = "backend"):
        self.status = status
        self.body = body
        self.backend = backend
        super().__init__(
            f"failed to generate response from {backend}: "
            f"status code {status}, response: {body}"
        )


class DecodeError(BackendError):
    """Backend response was not valid JSON or had an unexpected shape."""


class RequestMarshalError(BackendError):
    """Request body could not be serialized."""


class TransportError(BackendError):
    """HTTP request failed before a response was received."""


# ============================================================================
# Other errors
# ============================================================================

class ConfigError(RagLLMError):
    """Invalid or unusable configuration."""


class VectorStoreError(RagLLMError):
    """Vector store operation failed."""
