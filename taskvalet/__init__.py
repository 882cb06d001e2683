"""
TaskValet - Tool invocation runtime for coding agents

TaskValet turns what a model emits into tool executions. Two wire formats are
supported and converge on the same ToolUse value:

- Native protocol: provider function calls ``{id, name, arguments}``
- Legacy protocol: tag-delimited blocks streamed inline with text

Key Features:
- Closed tool and parameter name sets
- Typed native arguments for migrated tools, string params for the rest
- BaseTool contract with partial (streaming preview) and complete paths
- Built-in tools: attempt_completion, new_task, list_files, read_file, execute_command
- YAML configuration validated with pydantic
- Tool lifecycle events

Quick Start:
    from taskvalet import ConfigLoader, Task, ToolDispatcher

    settings = ConfigLoader("config").load()
    task = Task(host=my_host, cwd="/workspace", settings=settings)
    dispatcher = ToolDispatcher(task)

    # Native tool calls from an OpenAI-style response
    await dispatcher.present_native_calls(message.tool_calls)

    # Or a streamed legacy message
    await dispatcher.run_legacy_stream(text_chunks)
"""

from .constants import TOOL_NAMES, TOOL_PARAM_NAMES, is_tool_name, is_tool_param_name
from .errors import (
    TaskValetError,
    ToolParameterError,
    ChecklistFormatError,
    TaskAbortedError,
    ConfigError,
)
from .result import AskResponse, AskResult
from .protocols import HostProtocol
from .config import ConfigLoader, ModeConfig, RuntimeSettings
from .modes import Mode, BUILTIN_MODES, get_mode_by_slug
from .todos import TodoItem, TodoStatus, parse_markdown_checklist
from .tools import (
    ToolUse,
    TextContent,
    ToolResult,
    FileEntry,
    LineRange,
    NATIVE_ARG_TYPES,
    BaseTool,
    ToolCallbacks,
    ToolRegistry,
)
from .parsing import NativeToolCallParser, LegacyStreamParser, parse_assistant_message
from .task import Task
from .tools.dispatcher import ToolDispatcher
from .streaming import EventEmitter, EventType, ToolEvent

__version__ = "0.1.0"

__all__ = [
    # Names
    "TOOL_NAMES",
    "TOOL_PARAM_NAMES",
    "is_tool_name",
    "is_tool_param_name",
    # Errors
    "TaskValetError",
    "ToolParameterError",
    "ChecklistFormatError",
    "TaskAbortedError",
    "ConfigError",
    # Host
    "AskResponse",
    "AskResult",
    "HostProtocol",
    # Config
    "ConfigLoader",
    "ModeConfig",
    "RuntimeSettings",
    "Mode",
    "BUILTIN_MODES",
    "get_mode_by_slug",
    # Todos
    "TodoItem",
    "TodoStatus",
    "parse_markdown_checklist",
    # Tools
    "ToolUse",
    "TextContent",
    "ToolResult",
    "FileEntry",
    "LineRange",
    "NATIVE_ARG_TYPES",
    "BaseTool",
    "ToolCallbacks",
    "ToolRegistry",
    # Parsing
    "NativeToolCallParser",
    "LegacyStreamParser",
    "parse_assistant_message",
    # Runtime
    "Task",
    "ToolDispatcher",
    # Streaming
    "EventEmitter",
    "EventType",
    "ToolEvent",
]
