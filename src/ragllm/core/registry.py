"""
Tool Registry for managing and executing tools.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Iterator

from ragllm.core.datamodels import Tool
from ragllm.core.exceptions import ToolNotFoundError

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Thread-safe registry of tools keyed by name.

    Registration is last-write-wins. Lookups happen under the lock, but the
    executor itself runs outside it so a tool may use the registry.
    """

    def __init__(self, tools: list[Tool] | None = None):
        self._tools: dict[str, Tool] = {}
        self._lock = threading.Lock()
        for t in tools or []:
            self.register(t)

    def register(self, tool: Tool) -> Tool:
        """Insert or overwrite a tool by name."""
        with self._lock:
            replaced = tool.name in self._tools
            self._tools[tool.name] = tool
        if replaced:
            logger.debug("Replaced tool %s", tool.name)
        return tool

    def unregister(self, name: str) -> None:
        with self._lock:
            if self._tools.pop(name, None) is None:
                raise ToolNotFoundError(name)

    def get(self, name: str) -> Tool:
        """Resolve a tool by name."""
        with self._lock:
            tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name)
        return tool

    def describe(self) -> list[dict[str, Any]]:
        """Get all tools as function-tool specs for an outgoing request.

        Ordering is not part of the contract.
        """
        with self._lock:
            tools = list(self._tools.values())
        return [t.to_spec() for t in tools]

    def execute(self, name: str, arguments: dict[str, Any]) -> str:
        """Execute a tool by name.

        Raises:
            ToolNotFoundError: No tool registered under ``name``.
            Exception: Whatever the tool's executor raises, unchanged.
        """
        tool = self.get(name)
        logger.debug("Executing tool %s", name)
        return tool.executor(arguments)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._tools

    def __iter__(self) -> Iterator[Tool]:
        with self._lock:
            return iter(list(self._tools.values()))

    def __len__(self) -> int:
        with self._lock:
            return len(self._tools)
