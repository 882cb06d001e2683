"""Shared fixtures: a recording host and a task bound to it."""

from typing import Any, Dict, List, Optional

import pytest

from taskvalet.config import RuntimeSettings
from taskvalet.result import AskResponse, AskResult
from taskvalet.task import Task
from taskvalet.tools import ToolRegistry
from taskvalet.tools.base import ToolCallbacks, remove_closing_tag


class FakeHost:
    """In-memory HostProtocol implementation that records every interaction"""

    def __init__(self, responses: Optional[List[AskResult]] = None, state: Optional[Dict[str, Any]] = None):
        self.responses = list(responses or [])
        self.state = state if state is not None else {"mode": "code"}
        self.asks: List[tuple] = []
        self.says: List[tuple] = []
        self.subtasks: List[tuple] = []
        self.finished: List[tuple] = []
        self.subtask_result: Any = "child-task"

    async def ask(self, ask_type, text=None, partial=None) -> AskResult:
        self.asks.append((ask_type, text, partial))
        if partial:
            return AskResult(AskResponse.MESSAGE_RESPONSE)
        if self.responses:
            return self.responses.pop(0)
        return AskResult(AskResponse.YES_BUTTON_CLICKED)

    async def say(self, say_type, text=None, images=None, partial=None) -> None:
        self.says.append((say_type, text, images, partial))

    async def get_state(self) -> Dict[str, Any]:
        return self.state

    async def start_subtask(self, parent_task_id, message, todos, mode):
        self.subtasks.append((parent_task_id, message, todos, mode))
        return self.subtask_result

    async def finish_subtask(self, task_id, result) -> None:
        self.finished.append((task_id, result))

    def say_types(self) -> List[str]:
        return [entry[0] for entry in self.says]


class RecordingCallbacks:
    """Collects what a tool reports through ToolCallbacks"""

    def __init__(self, approve: bool = True):
        self.approve = approve
        self.approvals: List[tuple] = []
        self.errors: List[tuple] = []
        self.results: List[Any] = []

    async def ask_approval(self, ask_type, message=None) -> bool:
        self.approvals.append((ask_type, message))
        return self.approve

    async def handle_error(self, action, error) -> None:
        self.errors.append((action, error))

    def push_tool_result(self, content) -> None:
        self.results.append(content)

    def build(self) -> ToolCallbacks:
        return ToolCallbacks(
            ask_approval=self.ask_approval,
            handle_error=self.handle_error,
            push_tool_result=self.push_tool_result,
            remove_closing_tag=lambda tag, text, partial=False: remove_closing_tag(tag, text, partial),
        )


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def settings():
    return RuntimeSettings()


@pytest.fixture
def task(host, settings, tmp_path):
    return Task(host=host, cwd=str(tmp_path), settings=settings, task_id="task-1")


@pytest.fixture
def recorder():
    return RecordingCallbacks()


@pytest.fixture(autouse=True)
def reset_registry():
    """Each test gets a fresh registry singleton"""
    ToolRegistry.reset()
    yield
    ToolRegistry.reset()


@pytest.fixture
def make_recorder():
    return RecordingCallbacks
