"""
LLM backend adapters.

Each provider is a ``Backend`` subclass. New providers are added by
subclassing and registering the class in ``BACKENDS``.
"""

from __future__ import annotations

from typing import Any

from ragllm.backends.base import DEFAULT_TIMEOUT, Backend, ChatReply
from ragllm.backends.ollama import OllamaBackend
from ragllm.backends.openai import OpenAIBackend
from ragllm.config import Config
from ragllm.core import ConfigError

BACKENDS: dict[str, type[Backend]] = {
    OllamaBackend.name: OllamaBackend,
    OpenAIBackend.name: OpenAIBackend,
}

PURPOSES = ("generation", "embeddings")


def create_backend(config: Config, purpose: str = "generation", **kwargs: Any) -> Backend:
    """Build the backend configured under ``backend.<purpose>``.

    Args:
        config: Loaded configuration.
        purpose: "generation" or "embeddings".
        **kwargs: Passed to the backend constructor (``client``, ``logger``...).

    Raises:
        ConfigError: Unknown purpose or backend name.
    """
    if purpose not in PURPOSES:
        raise ConfigError(f"Unknown backend purpose: {purpose}")

    backend_name = config.get(f"backend.{purpose}", "")
    cls = BACKENDS.get(str(backend_name).lower())
    if cls is None:
        raise ConfigError(f"Invalid {purpose} backend specified: {backend_name!r}")
    return cls.from_config(config, purpose, **kwargs)


__all__ = [
    "BACKENDS",
    "DEFAULT_TIMEOUT",
    "Backend",
    "ChatReply",
    "OllamaBackend",
    "OpenAIBackend",
    "create_backend",
]
