"""
read_file - Read one or more workspace files with line numbers

Legacy invocations use either the batch form

    <args>
      <file><path>src/app.py</path><line_range>10-40</line_range></file>
    </args>

or a single ``path`` with optional ``start_line``/``end_line``. Native
invocations arrive with the ``files`` list already converted to FileEntry.
"""

import json
import logging
import os
import re
from typing import Dict, List
from xml.sax.saxutils import escape

from ..errors import ToolParameterError
from ..utils import coerce_int, get_readable_path, is_path_outside
from .base import BaseTool, ToolCallbacks
from .models import FileEntry, LineRange, ReadFileParams, ToolUse

logger = logging.getLogger(__name__)

_FILE_BLOCK = re.compile(r"<file>(.*?)</file>", re.DOTALL)
_PATH_TAG = re.compile(r"<path>(.*?)</path>", re.DOTALL)
_LINE_RANGE_TAG = re.compile(r"<line_range>(.*?)</line_range>", re.DOTALL)
_LINE_RANGE_VALUE = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$")


def _parse_line_range(raw: str) -> LineRange:
    match = _LINE_RANGE_VALUE.match(raw)
    if not match:
        raise ToolParameterError("read_file", f"Invalid line range format: {raw!r}")
    return LineRange(start=int(match.group(1)), end=int(match.group(2)))


def _parse_args_xml(args: str) -> List[FileEntry]:
    entries: List[FileEntry] = []
    for block in _FILE_BLOCK.findall(args):
        path_match = _PATH_TAG.search(block)
        if not path_match or not path_match.group(1).strip():
            raise ToolParameterError("read_file", "Each <file> must contain a <path>")
        ranges = [_parse_line_range(raw) for raw in _LINE_RANGE_TAG.findall(block)]
        entries.append(FileEntry(path=path_match.group(1).strip(), line_ranges=ranges))
    return entries


def add_line_numbers(lines: List[str], start_line: int = 1) -> str:
    """Prefix each line with its 1-based number, e.g. ``12 | text``"""
    return "\n".join(f"{start_line + i} | {line}" for i, line in enumerate(lines))


class ReadFileTool(BaseTool):
    name = "read_file"

    def parse_legacy(self, params: Dict[str, str]) -> ReadFileParams:
        args = params.get("args")
        if args:
            entries = _parse_args_xml(args)
            if not entries:
                raise ToolParameterError(self.name, "No <file> entries found in args")
            return entries

        path = params.get("path")
        if not path:
            raise ToolParameterError(self.name, "Either 'args' or 'path' is required")

        start = coerce_int(params.get("start_line"))
        end = coerce_int(params.get("end_line"))
        if start is not None or end is not None:
            return [FileEntry(path=path, line_ranges=[LineRange(start=start or 1, end=end or start or 1)])]
        return [FileEntry(path=path)]

    def describe(self, block: ToolUse) -> str:
        if block.native_args:
            paths = ", ".join(entry.path for entry in block.native_args)
        else:
            paths = block.params.get("path") or "multiple files"
        return f"[{self.name} for '{paths}']"

    async def execute(self, params: ReadFileParams, task, callbacks: ToolCallbacks) -> None:
        try:
            if not params:
                task.consecutive_mistake_count += 1
                task.record_tool_error(self.name)
                callbacks.push_tool_result(await task.say_and_create_missing_param_error(self.name, "args"))
                return

            task.consecutive_mistake_count = 0

            batch = []
            for entry in params:
                absolute_path = os.path.abspath(os.path.join(task.cwd, entry.path))
                batch.append({
                    "path": get_readable_path(task.cwd, entry.path),
                    "lineSnippet": ", ".join(f"lines {r.start}-{r.end}" for r in entry.line_ranges),
                    "isOutsideWorkspace": is_path_outside(task.cwd, absolute_path),
                })

            if not await callbacks.ask_approval("tool", json.dumps({"tool": "readFile", "batchFiles": batch})):
                return

            results = [self._read_entry(task, entry) for entry in params]
            callbacks.push_tool_result(f"<files>\n{''.join(results)}</files>")
        except Exception as e:
            await callbacks.handle_error("reading file", e)

    def _read_entry(self, task, entry: FileEntry) -> str:
        rel_path = escape(entry.path)
        absolute_path = os.path.abspath(os.path.join(task.cwd, entry.path))

        for line_range in entry.line_ranges:
            if line_range.start < 1 or line_range.end < line_range.start:
                task.record_tool_error(self.name)
                return (
                    f"<file><path>{rel_path}</path><error>Invalid line range "
                    f"{line_range.start}-{line_range.end}</error></file>\n"
                )

        try:
            with open(absolute_path, "r", encoding="utf-8", errors="replace") as f:
                lines = f.read().splitlines()
        except OSError as e:
            logger.warning(f"read_file failed for {absolute_path}: {e}")
            task.record_tool_error(self.name, str(e))
            return f"<file><path>{rel_path}</path><error>Error reading file: {escape(e.strerror or str(e))}</error></file>\n"

        total = len(lines)

        if entry.line_ranges:
            parts = []
            for line_range in entry.line_ranges:
                selected = lines[line_range.start - 1:line_range.end]
                parts.append(
                    f'<content lines="{line_range.start}-{line_range.end}">\n'
                    f"{add_line_numbers(selected, line_range.start)}\n</content>"
                )
            return f"<file><path>{rel_path}</path>\n{''.join(parts)}\n</file>\n"

        max_lines = task.settings.max_read_file_line
        if total == 0:
            return f"<file><path>{rel_path}</path>\n<content/><notice>File is empty</notice>\n</file>\n"

        if 0 <= max_lines < total:
            shown = lines[:max_lines]
            content = (
                f'<content lines="1-{max_lines}">\n{add_line_numbers(shown)}\n</content>\n' if shown else ""
            )
            return (
                f"<file><path>{rel_path}</path>\n{content}"
                f"<notice>Showing only {max_lines} of {total} total lines. "
                f"Use line_range if you need to read more lines</notice>\n</file>\n"
            )

        return (
            f"<file><path>{rel_path}</path>\n"
            f'<content lines="1-{total}">\n{add_line_numbers(lines)}\n</content>\n</file>\n'
        )

    async def handle_partial(self, task, block: ToolUse) -> None:
        path = block.params.get("path")
        partial_message = json.dumps({
            "tool": "readFile",
            "path": get_readable_path(task.cwd, self.remove_closing_tag("path", path, block.partial)),
            "content": "",
        })
        await task.ask("tool", partial_message, block.partial)
