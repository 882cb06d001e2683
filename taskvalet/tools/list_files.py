"""
list_files - List the contents of a directory inside the workspace
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional

from .. import responses
from ..services.list_files import list_files
from ..utils import get_readable_path, is_path_outside
from .base import BaseTool, ToolCallbacks
from .models import ToolUse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListFilesParams:
    path: str
    recursive: bool = False


def _is_recursive(raw: Optional[str]) -> bool:
    return (raw or "").lower() == "true"


class ListFilesTool(BaseTool):
    name = "list_files"

    def parse_legacy(self, params: Dict[str, str]) -> ListFilesParams:
        return ListFilesParams(
            path=params.get("path") or "",
            recursive=_is_recursive(params.get("recursive")),
        )

    def describe(self, block: ToolUse) -> str:
        return f"[{self.name} for '{block.params.get('path')}']"

    async def execute(self, params: ListFilesParams, task, callbacks: ToolCallbacks) -> None:
        try:
            if not params.path:
                task.consecutive_mistake_count += 1
                task.record_tool_error(self.name)
                callbacks.push_tool_result(await task.say_and_create_missing_param_error(self.name, "path"))
                return

            task.consecutive_mistake_count = 0

            absolute_path = os.path.abspath(os.path.join(task.cwd, params.path))
            files, did_hit_limit = list_files(absolute_path, params.recursive, task.settings.list_files_limit)
            logger.debug(f"Listed {len(files)} entries under {absolute_path} (truncated={did_hit_limit})")

            result = responses.format_files_list(absolute_path, files, did_hit_limit)

            complete_message = json.dumps({
                "tool": "listFilesRecursive" if params.recursive else "listFilesTopLevel",
                "path": get_readable_path(task.cwd, params.path),
                "isOutsideWorkspace": is_path_outside(task.cwd, absolute_path),
                "content": result,
            })
            if not await callbacks.ask_approval("tool", complete_message):
                return

            callbacks.push_tool_result(result)
        except Exception as e:
            await callbacks.handle_error("listing files", e)

    async def handle_partial(self, task, block: ToolUse) -> None:
        rel_path = block.params.get("path")
        recursive = _is_recursive(block.params.get("recursive"))
        absolute_path = os.path.abspath(os.path.join(task.cwd, rel_path)) if rel_path else task.cwd

        partial_message = json.dumps({
            "tool": "listFilesRecursive" if recursive else "listFilesTopLevel",
            "path": get_readable_path(task.cwd, self.remove_closing_tag("path", rel_path, block.partial)),
            "isOutsideWorkspace": is_path_outside(task.cwd, absolute_path),
            "content": "",
        })
        await task.ask("tool", partial_message, block.partial)
