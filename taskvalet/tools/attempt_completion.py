"""
attempt_completion - Present the final result of a task
"""

import json
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict

from .. import responses
from ..result import AskResponse
from ..todos import has_incomplete_todos
from .base import BaseTool, ToolCallbacks
from .models import AttemptCompletionParams, ToolUse

logger = logging.getLogger(__name__)


@dataclass
class AttemptCompletionCallbacks(ToolCallbacks):
    """Shared callbacks plus the sub-task hand-off approval"""
    ask_finish_subtask_approval: Callable[[], Awaitable[bool]]
    tool_description: Callable[[], str]


class AttemptCompletionTool(BaseTool):
    name = "attempt_completion"

    def parse_legacy(self, params: Dict[str, str]) -> AttemptCompletionParams:
        return AttemptCompletionParams(
            result=params.get("result") or "",
            command=params.get("command"),
        )

    def extend_callbacks(self, callbacks: ToolCallbacks, task, block: ToolUse) -> AttemptCompletionCallbacks:
        async def ask_finish_subtask_approval() -> bool:
            return await callbacks.ask_approval("tool", json.dumps({"tool": "finishTask"}))

        return AttemptCompletionCallbacks(
            ask_approval=callbacks.ask_approval,
            handle_error=callbacks.handle_error,
            push_tool_result=callbacks.push_tool_result,
            remove_closing_tag=callbacks.remove_closing_tag,
            ask_finish_subtask_approval=ask_finish_subtask_approval,
            tool_description=lambda: self.describe(block),
        )

    async def execute(self, params: AttemptCompletionParams, task, callbacks: AttemptCompletionCallbacks) -> None:
        result = params.result

        # Policy gate, evaluated before anything is shown to the user
        if task.settings.prevent_completion_with_open_todos and has_incomplete_todos(task.todo_list):
            task.consecutive_mistake_count += 1
            task.record_tool_error(self.name)
            callbacks.push_tool_result(
                responses.tool_error(
                    "Cannot complete task while there are incomplete todos. "
                    "Please finish all todos before attempting completion."
                )
            )
            return

        try:
            if not result:
                task.consecutive_mistake_count += 1
                task.record_tool_error(self.name)
                callbacks.push_tool_result(await task.say_and_create_missing_param_error(self.name, "result"))
                return

            task.consecutive_mistake_count = 0
            await task.say("completion_result", result, None, False)

            if task.parent_task is not None:
                if not await callbacks.ask_finish_subtask_approval():
                    return
                logger.info(f"Task {task.task_id} handing its result to the parent task")
                await task.finish_subtask(result)
                return

            answer = await task.ask("completion_result", "", False)
            if answer.response == AskResponse.YES_BUTTON_CLICKED:
                callbacks.push_tool_result("")
                return

            await task.say("user_feedback", answer.text or "", answer.images)
            task.user_message_content.append({"type": "text", "text": f"{callbacks.tool_description()} Result:"})
            task.user_message_content.append({"type": "text", "text": responses.completion_feedback(answer.text)})
            for image in answer.images:
                task.user_message_content.append({"type": "image", "source": image})
        except Exception as e:
            await callbacks.handle_error("completing task", e)

    async def handle_partial(self, task, block: ToolUse) -> None:
        result = block.params.get("result")
        command = block.params.get("command")

        if command:
            await task.ask(
                "command",
                self.remove_closing_tag("command", command, block.partial),
                block.partial,
            )
            return

        await task.say(
            "completion_result",
            self.remove_closing_tag("result", result, block.partial),
            None,
            block.partial,
        )
