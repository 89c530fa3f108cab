"""Configuration management for ragllm."""

from ragllm.config.config import (
    DEFAULT_CONFIG_FILE,
    DEFAULTS,
    ENV_OVERRIDES,
    Config,
    ConfigManager,
    load_config,
)

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "DEFAULTS",
    "ENV_OVERRIDES",
    "Config",
    "ConfigManager",
    "load_config",
]
