"""
Core module for the ragllm package.

Provides the tool registry, the conversation model and the shared
exception hierarchy.
"""

from ragllm.core.conversation import Conversation
from ragllm.core.datamodels import (
    Message,
    Parameters,
    PromptResponse,
    Tool,
    ToolCall,
)
from ragllm.core.decorators import tool
from ragllm.core.exceptions import (
    BackendError,
    BackendHTTPError,
    ConfigError,
    DecodeError,
    RagLLMError,
    RequestMarshalError,
    ToolError,
    ToolExecutionError,
    ToolNotFoundError,
    ToolValidationError,
    TransportError,
    VectorStoreError,
)
from ragllm.core.registry import ToolRegistry

__all__ = [
    # Registry
    "ToolRegistry",
    "tool",
    # Conversation
    "Conversation",
    # Models
    "Message",
    "Parameters",
    "PromptResponse",
    "Tool",
    "ToolCall",
    # Exceptions
    "RagLLMError",
    "ToolError",
    "ToolNotFoundError",
    "ToolValidationError",
    "ToolExecutionError",
    "BackendError",
    "BackendHTTPError",
    "DecodeError",
    "RequestMarshalError",
    "TransportError",
    "ConfigError",
    "VectorStoreError",
]
