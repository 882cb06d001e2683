"""
TaskValet Tools - Tool invocation values and the dispatch contract

Provides:
- ToolUse / TextContent: parsed invocation blocks
- NATIVE_ARG_TYPES: typed argument map for native tool calls
- BaseTool / ToolCallbacks: the per-tool dispatch contract
- ToolRegistry: name -> implementation lookup
- Built-in tools: attempt_completion, new_task, list_files, read_file, execute_command

The dispatcher lives in taskvalet.tools.dispatcher and is imported from
there directly.
"""

from .models import (
    ToolUse,
    TextContent,
    ToolResult,
    AssistantMessageContent,
    LineRange,
    FileEntry,
    ReadFileParams,
    AttemptCompletionParams,
    ExecuteCommandParams,
    InsertContentParams,
    ApplyDiffParams,
    AskFollowupQuestionParams,
    BrowserActionParams,
    CodebaseSearchParams,
    FetchInstructionsParams,
    NATIVE_ARG_TYPES,
    has_native_args,
)
from .base import BaseTool, ToolCallbacks, remove_closing_tag
from .registry import ToolRegistry
from .attempt_completion import AttemptCompletionTool
from .new_task import NewTaskTool, NewTaskParams
from .list_files import ListFilesTool, ListFilesParams
from .read_file import ReadFileTool
from .execute_command import ExecuteCommandTool

__all__ = [
    # Models
    "ToolUse",
    "TextContent",
    "ToolResult",
    "AssistantMessageContent",
    "LineRange",
    "FileEntry",
    "ReadFileParams",
    "AttemptCompletionParams",
    "ExecuteCommandParams",
    "InsertContentParams",
    "ApplyDiffParams",
    "AskFollowupQuestionParams",
    "BrowserActionParams",
    "CodebaseSearchParams",
    "FetchInstructionsParams",
    "NATIVE_ARG_TYPES",
    "has_native_args",
    # Contract
    "BaseTool",
    "ToolCallbacks",
    "remove_closing_tag",
    "ToolRegistry",
    # Tools
    "AttemptCompletionTool",
    "NewTaskTool",
    "NewTaskParams",
    "ListFilesTool",
    "ListFilesParams",
    "ReadFileTool",
    "ExecuteCommandTool",
]
