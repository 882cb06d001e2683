"""
TaskValet Tool Registry - Maps tool names to their BaseTool implementations
"""

import logging
import threading
from typing import Dict, List, Optional

from ..constants import is_tool_name
from .base import BaseTool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Singleton registry of tool implementations

    Only names from the closed TOOL_NAMES set can be registered; the set of
    names is fixed at build time while implementations are pluggable.

    Usage:
        registry = ToolRegistry.get_instance()
        registry.register(ListFilesTool())
        tool = registry.get_tool("list_files")
    """

    _instance: Optional["ToolRegistry"] = None
    _lock: threading.Lock = threading.Lock()

    def __init__(self):
        self._tools: Dict[str, BaseTool] = {}

    @classmethod
    def get_instance(cls) -> "ToolRegistry":
        """Get singleton instance, populated with the built-in tools"""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls.with_builtin_tools()
        return cls._instance

    @classmethod
    def reset(cls):
        """Reset registry (for testing)"""
        with cls._lock:
            cls._instance = None

    @classmethod
    def with_builtin_tools(cls) -> "ToolRegistry":
        """Create a registry holding one instance of every built-in tool"""
        from .attempt_completion import AttemptCompletionTool
        from .execute_command import ExecuteCommandTool
        from .list_files import ListFilesTool
        from .new_task import NewTaskTool
        from .read_file import ReadFileTool

        registry = cls()
        for tool in (
            AttemptCompletionTool(),
            ExecuteCommandTool(),
            ListFilesTool(),
            NewTaskTool(),
            ReadFileTool(),
        ):
            registry.register(tool)
        return registry

    def register(self, tool: BaseTool) -> None:
        """
        Register a tool implementation

        Args:
            tool: BaseTool instance

        Raises:
            ValueError: If the tool's name is not a known tool name
        """
        if not is_tool_name(getattr(tool, "name", None)):
            raise ValueError(f"Cannot register unknown tool name: {getattr(tool, 'name', None)!r}")

        if tool.name in self._tools:
            logger.warning(f"Tool '{tool.name}' already registered, overwriting")

        self._tools[tool.name] = tool
        logger.debug(f"Registered tool: {tool.name}")

    def unregister(self, name: str) -> bool:
        """Unregister a tool by name; False if it was not registered"""
        if name in self._tools:
            del self._tools[name]
            logger.debug(f"Unregistered tool: {name}")
            return True
        return False

    def get_tool(self, name: str) -> Optional[BaseTool]:
        """Get a tool implementation by name, or None"""
        return self._tools.get(name)

    def get_all_tool_names(self) -> List[str]:
        """Get all registered tool names"""
        return list(self._tools.keys())

    def has_tool(self, name: str) -> bool:
        """Check if a tool is registered"""
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __repr__(self) -> str:
        return f"<ToolRegistry tools={len(self._tools)}>"
