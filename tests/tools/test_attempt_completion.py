"""
Tests for the attempt_completion tool.
"""

import json

import pytest

from taskvalet.config import RuntimeSettings
from taskvalet.result import AskResponse, AskResult
from taskvalet.task import Task
from taskvalet.todos import parse_markdown_checklist
from taskvalet.tools import AttemptCompletionTool
from taskvalet.tools.models import AttemptCompletionParams, ToolUse


class TestAttemptCompletionExecute:
    """Tests for completing a task"""

    @pytest.mark.asyncio
    async def test_accepted_completion(self, task, host, recorder):
        tool = AttemptCompletionTool()
        callbacks = tool.extend_callbacks(recorder.build(), task, ToolUse(name="attempt_completion"))

        await tool.execute(AttemptCompletionParams(result="All done"), task, callbacks)

        assert ("completion_result", "All done", None, False) in host.says
        assert host.asks == [("completion_result", "", False)]
        assert recorder.results == [""]
        assert task.consecutive_mistake_count == 0

    @pytest.mark.asyncio
    async def test_missing_result(self, task, host, recorder):
        tool = AttemptCompletionTool()
        callbacks = tool.extend_callbacks(recorder.build(), task, ToolUse(name="attempt_completion"))

        await tool.execute(AttemptCompletionParams(result=""), task, callbacks)

        assert task.consecutive_mistake_count == 1
        assert task.tool_usage["attempt_completion"].failures == 1
        assert "Missing value for required parameter 'result'" in recorder.results[0]
        assert host.say_types() == ["error"]

    @pytest.mark.asyncio
    async def test_feedback_is_added_to_next_message(self, host, tmp_path, recorder):
        host.responses = [AskResult(AskResponse.MESSAGE_RESPONSE, text="Add tests too", images=["img"])]
        task = Task(host=host, cwd=str(tmp_path))
        tool = AttemptCompletionTool()
        block = ToolUse(name="attempt_completion", params={"result": "Done"})
        callbacks = tool.extend_callbacks(recorder.build(), task, block)

        await tool.execute(AttemptCompletionParams(result="Done"), task, callbacks)

        assert recorder.results == []
        assert ("user_feedback", "Add tests too", ["img"], None) in host.says
        texts = [item.get("text", "") for item in task.user_message_content]
        assert texts[0] == "[attempt_completion] Result:"
        assert "Add tests too" in texts[1]
        assert task.user_message_content[-1] == {"type": "image", "source": "img"}

    @pytest.mark.asyncio
    async def test_open_todos_block_completion(self, host, tmp_path, recorder):
        settings = RuntimeSettings(prevent_completion_with_open_todos=True)
        todos = parse_markdown_checklist("- [x] write code\n- [ ] write docs")
        task = Task(host=host, cwd=str(tmp_path), settings=settings, todo_list=todos)
        tool = AttemptCompletionTool()
        callbacks = tool.extend_callbacks(recorder.build(), task, ToolUse(name="attempt_completion"))

        await tool.execute(AttemptCompletionParams(result="Done"), task, callbacks)

        assert "incomplete todos" in recorder.results[0]
        assert host.says == []
        assert task.consecutive_mistake_count == 1

    @pytest.mark.asyncio
    async def test_subtask_hands_result_to_parent(self, host, tmp_path, recorder):
        parent = Task(host=host, cwd=str(tmp_path), task_id="parent")
        child = Task(host=host, cwd=str(tmp_path), parent_task=parent, task_id="child")
        tool = AttemptCompletionTool()
        callbacks = tool.extend_callbacks(recorder.build(), child, ToolUse(name="attempt_completion"))

        await tool.execute(AttemptCompletionParams(result="Sub done"), child, callbacks)

        assert recorder.approvals == [("tool", json.dumps({"tool": "finishTask"}))]
        assert host.finished == [("child", "Sub done")]

    @pytest.mark.asyncio
    async def test_subtask_hand_off_rejected(self, host, tmp_path, make_recorder):
        parent = Task(host=host, cwd=str(tmp_path))
        child = Task(host=host, cwd=str(tmp_path), parent_task=parent)
        recorder = make_recorder(approve=False)
        tool = AttemptCompletionTool()
        callbacks = tool.extend_callbacks(recorder.build(), child, ToolUse(name="attempt_completion"))

        await tool.execute(AttemptCompletionParams(result="Sub done"), child, callbacks)

        assert host.finished == []


class TestAttemptCompletionPartial:
    """Tests for streaming previews"""

    @pytest.mark.asyncio
    async def test_partial_result_is_said(self, task, host):
        block = ToolUse(name="attempt_completion", params={"result": "Half</res"}, partial=True)

        await AttemptCompletionTool().handle_partial(task, block)

        assert host.says == [("completion_result", "Half", None, True)]

    @pytest.mark.asyncio
    async def test_partial_command_is_asked(self, task, host):
        block = ToolUse(name="attempt_completion", params={"result": "x", "command": "npm start"}, partial=True)

        await AttemptCompletionTool().handle_partial(task, block)

        assert host.asks == [("command", "npm start", True)]
