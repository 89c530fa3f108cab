"""
ragllm - Multi-backend LLM client with tool calling and retrieval.

Talks to interchangeable LLM backends (Ollama, OpenAI) through one
conversation model, executes the tools a model asks for, and augments
prompts with documents retrieved from a vector store.

Example usage:
    from ragllm import Conversation, OllamaBackend
    from ragllm.tools import weather

    conv = Conversation()
    conv.tools.register(weather)
    conv.add_message("system", "You are a weather assistant.")
    conv.add_message("user", "What's the weather in London?")

    with OllamaBackend(model="qwen2.5") as backend:
        response = backend.converse(conv)   # executes the weather tool
        if response.role == "tool":
            response = backend.converse(conv)   # model answers from the result
    print(response.content)
"""

__version__ = "0.1.0"

# Core exports
from ragllm.core import (
    BackendError,
    BackendHTTPError,
    ConfigError,
    Conversation,
    DecodeError,
    Message,
    Parameters,
    PromptResponse,
    RagLLMError,
    RequestMarshalError,
    Tool,
    ToolCall,
    ToolError,
    ToolExecutionError,
    ToolNotFoundError,
    ToolRegistry,
    ToolValidationError,
    TransportError,
    VectorStoreError,
    tool,
)
from ragllm.backends import (
    Backend,
    OllamaBackend,
    OpenAIBackend,
    create_backend,
)
from ragllm.config import Config, ConfigManager, load_config
from ragllm.logging import configure_logging

__all__ = [
    # Version
    "__version__",
    # Core
    "Conversation",
    "Message",
    "Parameters",
    "PromptResponse",
    "Tool",
    "ToolCall",
    "ToolRegistry",
    "tool",
    # Backends
    "Backend",
    "OllamaBackend",
    "OpenAIBackend",
    "create_backend",
    # Config & logging
    "Config",
    "ConfigManager",
    "load_config",
    "configure_logging",
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
