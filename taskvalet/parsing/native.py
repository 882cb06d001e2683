"""
TaskValet Native Tool Call Parser - Convert OpenAI-style function calls to ToolUse

A native call arrives whole as ``{id, name, arguments}`` where ``arguments``
is a JSON-encoded object. The parser validates the name, decodes the
arguments, synthesizes the legacy string params, and builds typed native
arguments for tools listed in NATIVE_ARG_TYPES.

Failures never propagate: an unknown tool or undecodable arguments resolve
to ``None`` and the caller skips the call.

Usage:
    tool_use = NativeToolCallParser.parse_tool_call({
        "id": "call_1",
        "name": "read_file",
        "arguments": '{"path": "src/app.py"}',
    })
    if tool_use is not None:
        await tool.handle(task, tool_use, callbacks)
"""

import json
import logging
from typing import Any, Callable, Dict, List, Optional

from ..constants import TOOL_NAMES, is_tool_name, is_tool_param_name
from ..utils import coerce_int
from ..tools.models import (
    ApplyDiffParams,
    AskFollowupQuestionParams,
    AttemptCompletionParams,
    BrowserActionParams,
    CodebaseSearchParams,
    ExecuteCommandParams,
    FetchInstructionsParams,
    FileEntry,
    InsertContentParams,
    LineRange,
    ToolUse,
)

logger = logging.getLogger(__name__)


def _present(args: Dict[str, Any], *keys: str) -> bool:
    """All keys present with a non-null value"""
    return all(args.get(key) is not None for key in keys)


def _to_line_range(raw: Any) -> Optional[LineRange]:
    if isinstance(raw, dict):
        start, end = coerce_int(raw.get("start")), coerce_int(raw.get("end"))
    elif isinstance(raw, (list, tuple)) and len(raw) == 2:
        start, end = coerce_int(raw[0]), coerce_int(raw[1])
    else:
        return None
    if start is None or end is None:
        return None
    return LineRange(start=start, end=end)


def _to_file_entries(files: List[Any]) -> Optional[List[FileEntry]]:
    entries: List[FileEntry] = []
    for item in files:
        if not isinstance(item, dict) or not isinstance(item.get("path"), str):
            logger.warning(f"[NATIVE_TOOL] Malformed read_file entry: {item!r}")
            return None
        ranges: List[LineRange] = []
        raw_ranges = item.get("line_ranges") or item.get("lineRanges") or []
        if not isinstance(raw_ranges, list):
            logger.warning(f"[NATIVE_TOOL] line_ranges must be a list for {item['path']}")
            return None
        for raw_range in raw_ranges:
            line_range = _to_line_range(raw_range)
            if line_range is None:
                logger.warning(f"[NATIVE_TOOL] Malformed line range for {item['path']}: {raw_range!r}")
                return None
            ranges.append(line_range)
        entries.append(FileEntry(path=item["path"], line_ranges=ranges))
    return entries


# ── Per-tool native argument conversion ──
# Each converter returns None when required fields are missing, which makes
# the dispatcher fall back to parse_legacy().

def _read_file_args(args: Dict[str, Any]) -> Optional[List[FileEntry]]:
    files = args.get("files")
    if isinstance(files, list):
        return _to_file_entries(files)
    if args.get("path"):
        return [FileEntry(path=args["path"], line_ranges=[])]
    return None


def _attempt_completion_args(args: Dict[str, Any]) -> Optional[AttemptCompletionParams]:
    if args.get("result"):
        return AttemptCompletionParams(result=args["result"])
    return None


def _execute_command_args(args: Dict[str, Any]) -> Optional[ExecuteCommandParams]:
    if args.get("command"):
        return ExecuteCommandParams(command=args["command"], cwd=args.get("cwd"))
    return None


def _insert_content_args(args: Dict[str, Any]) -> Optional[InsertContentParams]:
    if not _present(args, "path", "line", "content"):
        return None
    line = coerce_int(args["line"])
    if line is None:
        logger.warning(f"[NATIVE_TOOL] insert_content line is not numeric: {args['line']!r}")
        return None
    return InsertContentParams(path=args["path"], line=line, content=args["content"])


def _apply_diff_args(args: Dict[str, Any]) -> Optional[ApplyDiffParams]:
    if _present(args, "path", "diff"):
        return ApplyDiffParams(path=args["path"], diff=args["diff"])
    return None


def _ask_followup_question_args(args: Dict[str, Any]) -> Optional[AskFollowupQuestionParams]:
    if _present(args, "question", "follow_up"):
        return AskFollowupQuestionParams(question=args["question"], follow_up=args["follow_up"])
    return None


def _browser_action_args(args: Dict[str, Any]) -> Optional[BrowserActionParams]:
    if not _present(args, "action"):
        return None
    return BrowserActionParams(
        action=args["action"],
        url=args.get("url"),
        coordinate=args.get("coordinate"),
        size=args.get("size"),
        text=args.get("text"),
    )


def _codebase_search_args(args: Dict[str, Any]) -> Optional[CodebaseSearchParams]:
    if _present(args, "query"):
        return CodebaseSearchParams(query=args["query"], path=args.get("path"))
    return None


def _fetch_instructions_args(args: Dict[str, Any]) -> Optional[FetchInstructionsParams]:
    if _present(args, "task"):
        return FetchInstructionsParams(task=args["task"])
    return None


NATIVE_ARG_CONVERTERS: Dict[str, Callable[[Dict[str, Any]], Any]] = {
    "read_file": _read_file_args,
    "attempt_completion": _attempt_completion_args,
    "execute_command": _execute_command_args,
    "insert_content": _insert_content_args,
    "apply_diff": _apply_diff_args,
    "ask_followup_question": _ask_followup_question_args,
    "browser_action": _browser_action_args,
    "codebase_search": _codebase_search_args,
    "fetch_instructions": _fetch_instructions_args,
}

# Arguments carried only through native_args, never stringified into params
_NATIVE_ONLY_PARAMS = {
    "read_file": {"files"},
}


class NativeToolCallParser:
    """
    Parser for native tool calls (OpenAI-style function calling)

    Converts the native call record into the same ToolUse shape the legacy
    stream parser produces, so every tool runs through one dispatch path.
    """

    @staticmethod
    def _unpack(tool_call: Any) -> Optional[Dict[str, Any]]:
        """Normalize the supported call shapes to ``{id, name, arguments}``"""
        if isinstance(tool_call, dict):
            if "function" in tool_call and isinstance(tool_call["function"], dict):
                function = tool_call["function"]
                return {
                    "id": tool_call.get("id"),
                    "name": function.get("name"),
                    "arguments": function.get("arguments"),
                }
            return {
                "id": tool_call.get("id"),
                "name": tool_call.get("name"),
                "arguments": tool_call.get("arguments"),
            }

        # OpenAI SDK object: tool_call.function.name / .arguments
        function = getattr(tool_call, "function", None)
        if function is not None and hasattr(function, "name"):
            return {
                "id": getattr(tool_call, "id", None),
                "name": function.name,
                "arguments": getattr(function, "arguments", None),
            }

        if hasattr(tool_call, "name") and hasattr(tool_call, "arguments"):
            return {
                "id": getattr(tool_call, "id", None),
                "name": tool_call.name,
                "arguments": tool_call.arguments,
            }
        return None

    @classmethod
    def parse_tool_call(cls, tool_call: Any) -> Optional[ToolUse]:
        """
        Convert a native tool call to a ToolUse

        Args:
            tool_call: Mapping or object with id, name and JSON arguments

        Returns:
            A complete ToolUse, or None when the call must be skipped
        """
        call = cls._unpack(tool_call)
        if call is None:
            logger.error(f"[NATIVE_TOOL] Unsupported tool call shape: {type(tool_call).__name__}")
            return None

        call_id, name, raw_arguments = call["id"], call["name"], call["arguments"]
        logger.debug(f"[NATIVE_TOOL] Parser received: id={call_id} name={name} arguments={raw_arguments!r}")

        if not is_tool_name(name):
            logger.error(f"[NATIVE_TOOL] Invalid tool name: {name!r}")
            logger.debug(f"[NATIVE_TOOL] Valid tool names: {', '.join(TOOL_NAMES)}")
            return None

        args = cls._decode_arguments(name, raw_arguments)
        if args is None:
            return None

        try:
            params = cls._build_legacy_params(name, args)
            converter = NATIVE_ARG_CONVERTERS.get(name)
            native_args = converter(args) if converter else None
        except Exception as e:
            logger.error(f"[NATIVE_TOOL] Failed to convert arguments for {name}: {e}", exc_info=True)
            return None

        tool_use = ToolUse(
            name=name,
            params=params,
            native_args=native_args,
            partial=False,
            id=str(call_id) if call_id is not None else None,
        )
        logger.debug(
            f"[NATIVE_TOOL] Parser returning ToolUse: {name} "
            f"(params={sorted(params)}, native_args={native_args is not None})"
        )
        return tool_use

    @staticmethod
    def _decode_arguments(name: str, raw_arguments: Any) -> Optional[Dict[str, Any]]:
        if isinstance(raw_arguments, dict):
            return raw_arguments
        try:
            args = json.loads(raw_arguments)
        except (TypeError, ValueError, RecursionError) as e:
            logger.error(f"[NATIVE_TOOL] Failed to parse arguments for {name}: {e}")
            return None
        if not isinstance(args, dict):
            logger.error(
                f"[NATIVE_TOOL] Arguments for {name} must be a JSON object, got {type(args).__name__}"
            )
            return None
        return args

    @staticmethod
    def _build_legacy_params(name: str, args: Dict[str, Any]) -> Dict[str, str]:
        params: Dict[str, str] = {}
        native_only = _NATIVE_ONLY_PARAMS.get(name, set())

        for key, value in args.items():
            if key in native_only:
                continue

            if not is_tool_param_name(key):
                logger.warning(f"[NATIVE_TOOL] Unknown parameter '{key}' for tool '{name}'")
                continue

            if isinstance(value, str):
                params[key] = value
            else:
                params[key] = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
        return params
