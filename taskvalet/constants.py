"""
Shared constants for the TaskValet runtime.

Centralizes the closed tool-name and parameter-name sets that form the
wire contract with the model. Both the native call parser and the legacy
stream parser validate against these values; anything outside them is not
part of this protocol version.
"""

from typing import FrozenSet, Tuple

# ── Tool names ──

TOOL_NAMES: Tuple[str, ...] = (
    "execute_command",
    "read_file",
    "fetch_instructions",
    "write_to_file",
    "apply_diff",
    "insert_content",
    "search_and_replace",
    "search_files",
    "list_files",
    "list_code_definition_names",
    "browser_action",
    "use_mcp_tool",
    "access_mcp_resource",
    "ask_followup_question",
    "attempt_completion",
    "switch_mode",
    "new_task",
    "codebase_search",
    "update_todo_list",
    "run_slash_command",
    "generate_image",
)

# ── Parameter names (shared across all tools) ──

TOOL_PARAM_NAMES: Tuple[str, ...] = (
    "command",
    "path",
    "content",
    "line_count",
    "regex",
    "file_pattern",
    "recursive",
    "action",
    "url",
    "coordinate",
    "text",
    "server_name",
    "tool_name",
    "arguments",
    "uri",
    "question",
    "result",
    "diff",
    "mode_slug",
    "reason",
    "line",
    "mode",
    "message",
    "cwd",
    "follow_up",
    "task",
    "size",
    "search",
    "replace",
    "use_regex",
    "ignore_case",
    "title",
    "description",
    "todos",
    "prompt",
    "image",
    "files",
    "args",
    "start_line",
    "end_line",
    "query",
)

_TOOL_NAME_SET: FrozenSet[str] = frozenset(TOOL_NAMES)
_TOOL_PARAM_NAME_SET: FrozenSet[str] = frozenset(TOOL_PARAM_NAMES)

# ── Defaults ──

DEFAULT_LIST_FILES_LIMIT = 200
DEFAULT_COMMAND_OUTPUT_LINE_LIMIT = 500
DEFAULT_MODE_SLUG = "code"


def is_tool_name(name: object) -> bool:
    """Check membership in the closed tool-name set."""
    return isinstance(name, str) and name in _TOOL_NAME_SET


def is_tool_param_name(name: object) -> bool:
    """Check membership in the closed parameter-name set."""
    return isinstance(name, str) and name in _TOOL_PARAM_NAME_SET
