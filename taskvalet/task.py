"""
TaskValet Task - Per-task state the tools read and update

A Task owns everything a tool needs while it runs: the working directory,
the host connection, runtime settings, the todo list, and the counters used
to detect a model that keeps making the same mistake. Tools receive the Task
as their execution context; it never outlives one conversation.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from . import responses
from .config.loader import RuntimeSettings
from .errors import TaskAbortedError
from .protocols import HostProtocol
from .result import AskResult
from .todos import TodoItem

logger = logging.getLogger(__name__)


@dataclass
class ToolUsage:
    """Per-tool attempt/failure counters"""
    attempts: int = 0
    failures: int = 0


class Task:
    """
    Execution context for one agent task

    Usage:
        task = Task(host=my_host, cwd="/workspace", settings=loader.load())
        dispatcher = ToolDispatcher(task)
        await dispatcher.present_native_calls(tool_calls)
    """

    def __init__(
        self,
        host: HostProtocol,
        cwd: str,
        settings: Optional[RuntimeSettings] = None,
        parent_task: Optional["Task"] = None,
        task_id: Optional[str] = None,
        todo_list: Optional[List[TodoItem]] = None,
    ):
        self.task_id = task_id or str(uuid.uuid4())
        self.host = host
        self.cwd = cwd
        self.settings = settings or RuntimeSettings()
        self.parent_task = parent_task
        self.todo_list: List[TodoItem] = list(todo_list or [])

        self.consecutive_mistake_count = 0
        self.tool_usage: Dict[str, ToolUsage] = {}

        # Content sent back to the model on the next request
        self.user_message_content: List[Dict[str, Any]] = []

        # Turn state, reset by the dispatcher at the start of each message
        self.did_reject_tool = False
        self.did_already_use_tool = False

        self.paused_mode_slug: Optional[str] = None
        self._aborted = False

    # ------------------------------------------------------------------
    # Cancellation
    # ------------------------------------------------------------------

    @property
    def aborted(self) -> bool:
        return self._aborted

    def abort(self) -> None:
        """Abort the task; in-flight tools observe this at their next ask/say"""
        if not self._aborted:
            logger.info(f"Task {self.task_id} aborted")
        self._aborted = True

    def _check_abort(self) -> None:
        if self._aborted:
            raise TaskAbortedError(self.task_id)

    # ------------------------------------------------------------------
    # Host communication
    # ------------------------------------------------------------------

    async def ask(self, ask_type: str, text: Optional[str] = None, partial: Optional[bool] = None) -> AskResult:
        """Prompt the user through the host; raises TaskAbortedError once aborted"""
        self._check_abort()
        result = await self.host.ask(ask_type, text, partial)
        self._check_abort()
        return result

    async def say(
        self,
        say_type: str,
        text: Optional[str] = None,
        images: Optional[List[str]] = None,
        partial: Optional[bool] = None,
    ) -> None:
        self._check_abort()
        await self.host.say(say_type, text, images, partial)

    async def get_state(self) -> Dict[str, Any]:
        return await self.host.get_state() or {}

    # ------------------------------------------------------------------
    # Mistake tracking
    # ------------------------------------------------------------------

    def record_tool_usage(self, tool_name: str) -> None:
        self.tool_usage.setdefault(tool_name, ToolUsage()).attempts += 1

    def record_tool_error(self, tool_name: str, error: Optional[str] = None) -> None:
        self.tool_usage.setdefault(tool_name, ToolUsage()).failures += 1
        if error:
            logger.warning(f"Tool {tool_name} failed for task {self.task_id}: {error}")

    async def say_and_create_missing_param_error(self, tool_name: str, param_name: str) -> str:
        """Tell the user a required parameter is missing and build the model-facing error"""
        await self.say(
            "error",
            f"Tried to use {tool_name} without value for required parameter '{param_name}'. Retrying...",
        )
        return responses.tool_error(responses.missing_tool_parameter_error(param_name))

    # ------------------------------------------------------------------
    # Sub-tasks
    # ------------------------------------------------------------------

    async def start_subtask(self, message: str, todos: List[TodoItem], mode: str) -> Optional[Any]:
        """Ask the host to create a child task; None when the host refuses"""
        self._check_abort()
        child = await self.host.start_subtask(self.task_id, message, todos, mode)
        if child is None:
            logger.info(f"Host refused sub-task creation for task {self.task_id}")
        return child

    async def finish_subtask(self, result: str) -> None:
        await self.host.finish_subtask(self.task_id, result)

    def __repr__(self) -> str:
        return f"<Task id={self.task_id} cwd={self.cwd!r} aborted={self._aborted}>"
