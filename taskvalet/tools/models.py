"""
TaskValet Tool Models - Data structures shared by the parsers and the dispatcher

This module defines:
- ToolUse: the protocol-agnostic tool invocation handed to dispatch
- TextContent: free text emitted by the model around legacy tool blocks
- Native argument types for tools that have been migrated to typed arguments
- NATIVE_ARG_TYPES: the per-tool-name typed argument map
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union


@dataclass(frozen=True)
class LineRange:
    """Inclusive, 1-based line range inside a file"""
    start: int
    end: int


@dataclass(frozen=True)
class FileEntry:
    """
    One file requested by read_file

    Attributes:
        path: Path relative to the task's working directory
        line_ranges: Ranges to read; empty means the whole file
    """
    path: str
    line_ranges: List[LineRange] = field(default_factory=list)


# read_file carries a list of entries rather than a single record
ReadFileParams = List[FileEntry]


@dataclass(frozen=True)
class AttemptCompletionParams:
    result: str
    command: Optional[str] = None


@dataclass(frozen=True)
class ExecuteCommandParams:
    command: str
    cwd: Optional[str] = None


@dataclass(frozen=True)
class InsertContentParams:
    path: str
    line: int
    content: str


@dataclass(frozen=True)
class ApplyDiffParams:
    path: str
    diff: str


@dataclass(frozen=True)
class AskFollowupQuestionParams:
    question: str
    follow_up: Any


@dataclass(frozen=True)
class BrowserActionParams:
    action: str
    url: Optional[str] = None
    coordinate: Any = None
    size: Any = None
    text: Optional[str] = None


@dataclass(frozen=True)
class CodebaseSearchParams:
    query: str
    path: Optional[str] = None


@dataclass(frozen=True)
class FetchInstructionsParams:
    task: str


# Typed argument map. Tools missing here have no native representation and
# are always driven through parse_legacy(), even on the native protocol.
NATIVE_ARG_TYPES: Dict[str, Any] = {
    "read_file": ReadFileParams,
    "attempt_completion": AttemptCompletionParams,
    "execute_command": ExecuteCommandParams,
    "insert_content": InsertContentParams,
    "apply_diff": ApplyDiffParams,
    "ask_followup_question": AskFollowupQuestionParams,
    "browser_action": BrowserActionParams,
    "codebase_search": CodebaseSearchParams,
    "fetch_instructions": FetchInstructionsParams,
}

NativeArgs = Union[
    ReadFileParams,
    AttemptCompletionParams,
    ExecuteCommandParams,
    InsertContentParams,
    ApplyDiffParams,
    AskFollowupQuestionParams,
    BrowserActionParams,
    CodebaseSearchParams,
    FetchInstructionsParams,
]


def has_native_args(tool_name: str) -> bool:
    """Check whether a tool has a typed native argument shape"""
    return tool_name in NATIVE_ARG_TYPES


@dataclass(frozen=True)
class ToolUse:
    """
    A single tool invocation, produced by either parser

    Attributes:
        name: Tool name (member of TOOL_NAMES)
        params: Legacy string view of every recognized argument
        native_args: Typed arguments, only for tools in NATIVE_ARG_TYPES
        partial: True while the invocation is still being streamed
        id: Provider call id (native protocol only)

    A ToolUse is never mutated. params is copied into a read-only mapping,
    so later changes to the caller's dict do not leak in. The legacy stream
    parser emits a fresh snapshot on every update, and the final snapshot has
    partial=False.
    """
    name: str
    params: Mapping[str, str] = field(default_factory=dict)
    native_args: Optional[Any] = None
    partial: bool = False
    id: Optional[str] = None
    type: str = "tool_use"

    def __post_init__(self):
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging and event payloads"""
        return {
            "type": self.type,
            "id": self.id,
            "name": self.name,
            "params": dict(self.params),
            "partial": self.partial,
            "has_native_args": self.native_args is not None,
        }


@dataclass(frozen=True)
class TextContent:
    """Free text emitted by the model outside of any tool block"""
    content: str
    partial: bool = False
    type: str = "text"


AssistantMessageContent = Union[TextContent, ToolUse]


@dataclass
class ToolResult:
    """
    Result pushed back for a single tool invocation

    Attributes:
        tool_name: Name of the tool the result belongs to
        content: String result content (or content blocks for images)
        is_error: Whether the result reports a failure
        tool_call_id: Provider call id when the call came in natively
    """
    tool_name: str
    content: Union[str, List[Dict[str, Any]]]
    is_error: bool = False
    tool_call_id: Optional[str] = None
