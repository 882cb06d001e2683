"""
new_task - Delegate work to a sub-task running in another mode
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from .. import responses
from ..constants import DEFAULT_MODE_SLUG
from ..errors import ChecklistFormatError
from ..modes import get_mode_by_slug
from ..todos import TodoItem, parse_markdown_checklist
from .base import BaseTool, ToolCallbacks
from .models import ToolUse

logger = logging.getLogger(__name__)

# One level of escaping is removed from "\\@" so nested sub-tasks can still
# mention files literally.
_ESCAPED_MENTION = re.compile(r"\\\\@")


def unescape_mentions(message: str) -> str:
    r"""Replace ``\\@`` with ``\@``; an already single-escaped ``\@`` is untouched"""
    return _ESCAPED_MENTION.sub(r"\\@", message)


@dataclass(frozen=True)
class NewTaskParams:
    mode: str
    message: str
    todos: Optional[str] = None


class NewTaskTool(BaseTool):
    name = "new_task"

    def parse_legacy(self, params: Dict[str, str]) -> NewTaskParams:
        return NewTaskParams(
            mode=params.get("mode") or "",
            message=params.get("message") or "",
            todos=params.get("todos"),
        )

    def describe(self, block: ToolUse) -> str:
        return f"[{self.name} in {block.params.get('mode')} mode: '{block.params.get('message')}']"

    async def _reject(self, task, callbacks: ToolCallbacks, content: str) -> None:
        task.consecutive_mistake_count += 1
        task.record_tool_error(self.name)
        callbacks.push_tool_result(content)

    async def execute(self, params: NewTaskParams, task, callbacks: ToolCallbacks) -> None:
        try:
            if not params.mode:
                await self._reject(task, callbacks, await task.say_and_create_missing_param_error(self.name, "mode"))
                return

            if not params.message:
                await self._reject(task, callbacks, await task.say_and_create_missing_param_error(self.name, "message"))
                return

            # None means the caller did not pass todos; an empty string is valid
            if task.settings.new_task_require_todos and params.todos is None:
                await self._reject(task, callbacks, await task.say_and_create_missing_param_error(self.name, "todos"))
                return

            todo_items: List[TodoItem] = []
            if params.todos:
                try:
                    todo_items = parse_markdown_checklist(params.todos)
                except ChecklistFormatError as e:
                    logger.debug(f"Rejecting new_task todos: {e}")
                    await self._reject(
                        task,
                        callbacks,
                        responses.tool_error("Invalid todos format: must be a markdown checklist"),
                    )
                    return

            task.consecutive_mistake_count = 0

            message = unescape_mentions(params.message)

            state = await task.get_state()
            target_mode = get_mode_by_slug(params.mode, task.settings.custom_modes)
            if target_mode is None:
                callbacks.push_tool_result(responses.tool_error(f"Invalid mode: {params.mode}"))
                return

            tool_message = json.dumps({
                "tool": "newTask",
                "mode": target_mode.name,
                "content": params.message,
                "todos": [item.to_dict() for item in todo_items],
            })
            if not await callbacks.ask_approval("tool", tool_message):
                return

            # Resume in the current mode once the sub-task finishes
            task.paused_mode_slug = state.get("mode") or DEFAULT_MODE_SLUG

            child = await task.start_subtask(message, todo_items, params.mode)
            if child is None:
                callbacks.push_tool_result(
                    responses.tool_error("Sub-task creation is not allowed by the current policy.")
                )
                return

            callbacks.push_tool_result(
                f"Successfully created new task in {target_mode.name} mode with message: "
                f"{message} and {len(todo_items)} todo items"
            )
        except Exception as e:
            await callbacks.handle_error("creating new task", e)

    async def handle_partial(self, task, block: ToolUse) -> None:
        partial_message = json.dumps({
            "tool": "newTask",
            "mode": self.remove_closing_tag("mode", block.params.get("mode"), block.partial),
            "content": self.remove_closing_tag("message", block.params.get("message"), block.partial),
            "todos": self.remove_closing_tag("todos", block.params.get("todos"), block.partial),
        })
        await task.ask("tool", partial_message, block.partial)
