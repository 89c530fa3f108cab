"""
Configuration management for ragllm.

Settings live in a flat YAML document (``config.yaml`` in the working
directory by default):

    backend:
      embeddings: ollama
      generation: openai
    ollama:
      host: http://localhost:11434
      gen_model: llama3
      emb_model: mxbai-embed-large
    openai:
      api_key: sk-...
      gen_model: gpt-4o-mini
      emb_model: text-embedding-3-small
    log_level: info

A few environment variables override the file, see ``ENV_OVERRIDES``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from ragllm.core.exceptions import ConfigError

DEFAULT_CONFIG_FILE = Path("config.yaml")

# Environment variable -> dotted config key
ENV_OVERRIDES = {
    "OLLAMA_HOST": "ollama.host",
    "OPENAI_API_KEY": "openai.api_key",
    "OPENAI_BASE_URL": "openai.base_url",
    "RAGLLM_LOG_LEVEL": "log_level",
}

# Default values - single source of truth
DEFAULTS = {
    "backend.embeddings": "ollama",
    "backend.generation": "ollama",
    "ollama.host": "http://localhost:11434",
    "ollama.gen_model": "llama3",
    "ollama.emb_model": "mxbai-embed-large",
    "openai.base_url": "https://api.openai.com",
    "openai.gen_model": "gpt-4o-mini",
    "openai.emb_model": "text-embedding-3-small",
    "log_level": "INFO",
    "timeout": 30.0,
}


class BackendSettings(BaseModel):
    """Which backend serves which purpose."""

    model_config = {"extra": "ignore"}

    embeddings: str = Field(default=DEFAULTS["backend.embeddings"])
    generation: str = Field(default=DEFAULTS["backend.generation"])


class OllamaSettings(BaseModel):
    model_config = {"extra": "ignore"}

    host: str = Field(default=DEFAULTS["ollama.host"])
    gen_model: str = Field(default=DEFAULTS["ollama.gen_model"])
    emb_model: str = Field(default=DEFAULTS["ollama.emb_model"])


class OpenAISettings(BaseModel):
    model_config = {"extra": "ignore"}

    api_key: Optional[str] = Field(default=None, description="Bearer token for the API")
    base_url: str = Field(default=DEFAULTS["openai.base_url"])
    gen_model: str = Field(default=DEFAULTS["openai.gen_model"])
    emb_model: str = Field(default=DEFAULTS["openai.emb_model"])


class DatabaseSettings(BaseModel):
    model_config = {"extra": "ignore"}

    url: Optional[str] = Field(default=None, description="Vector database connection string")


class Config(BaseModel):
    """Configuration settings for ragllm.

    Unknown keys are ignored so one YAML file can be shared with other tools.
    """

    model_config = {"extra": "ignore"}

    backend: BackendSettings = Field(default_factory=BackendSettings)
    ollama: OllamaSettings = Field(default_factory=OllamaSettings)
    openai: OpenAISettings = Field(default_factory=OpenAISettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    log_level: str = Field(default=DEFAULTS["log_level"])
    timeout: float = Field(default=DEFAULTS["timeout"], gt=0, description="HTTP timeout (seconds)")

    def get(self, key: str, default: Any = None) -> Any:
        """Resolve a dotted key such as ``"ollama.host"``.

        Falls back to ``default`` when the key does not exist or is unset.
        """
        node: Any = self
        for part in key.split("."):
            node = getattr(node, part, None)
            if node is None:
                return default
        return node


class ConfigManager:
    """Loads configuration from YAML and the environment."""

    def __init__(
        self,
        path: Path | str | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        self.path = Path(path) if path is not None else DEFAULT_CONFIG_FILE
        self._environ = environ if environ is not None else os.environ
        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current config, loading if necessary."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self) -> Config:
        """Load configuration from file, then apply environment overrides.

        Returns:
            Config object; defaults if the file doesn't exist.

        Raises:
            ConfigError: The file is not valid YAML or fails validation.
        """
        data = self._read_file()
        self._apply_env(data)
        try:
            self._config = Config.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid config in {self.path}: {e}") from e
        return self._config

    def _read_file(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = yaml.safe_load(self.path.read_text())
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.path}: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {self.path} must contain a mapping")
        return data

    def _apply_env(self, data: dict[str, Any]) -> None:
        for env_name, key in ENV_OVERRIDES.items():
            value = self._environ.get(env_name)
            if not value:
                continue
            *parents, leaf = key.split(".")
            node = data
            for part in parents:
                child = node.get(part)
                if not isinstance(child, dict):
                    child = {}
                    node[part] = child
                node = child
            node[leaf] = value

    def save(self, config: Optional[Config] = None) -> Path:
        """Write configuration to the YAML file.

        Unset values are left out so they keep tracking the defaults.
        """
        if config is not None:
            self._config = config
        if self._config is None:
            self._config = Config()

        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = self._config.model_dump(exclude_none=True)
        self.path.write_text(yaml.safe_dump(data, sort_keys=False))
        return self.path

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration once at startup."""
    return ConfigManager(path).load()
