"""
TaskValet Tool Dispatcher - Present parsed blocks to their tools in order

The dispatcher is the driver between the parsers and BaseTool.handle():
- builds the shared ToolCallbacks (approval, error reporting, result push)
- enforces turn rules (skip after a rejection, one tool per message)
- stops between invocations once the task is aborted
- emits tool lifecycle events

Usage:
    dispatcher = ToolDispatcher(task)
    await dispatcher.present_native_calls(response.tool_calls)

    # or, for a streamed legacy message
    await dispatcher.run_legacy_stream(chunks)
"""

import logging
from typing import Any, AsyncIterable, Iterable, List, Optional, Union

from .. import responses
from ..errors import TaskAbortedError
from ..parsing import LegacyStreamParser, NativeToolCallParser
from ..result import AskResponse
from ..streaming import EventEmitter, EventType, ToolEvent
from .base import BaseTool, ToolCallbacks, remove_closing_tag
from .models import AssistantMessageContent, TextContent, ToolResult, ToolUse
from .registry import ToolRegistry

logger = logging.getLogger(__name__)

_ERROR_PREFIXES = ("The tool execution failed", "<error>")

Blocks = Union[Iterable[Optional[AssistantMessageContent]], AsyncIterable[Optional[AssistantMessageContent]]]


def _is_error_content(content: Any) -> bool:
    return isinstance(content, str) and content.startswith(_ERROR_PREFIXES)


class ToolDispatcher:
    """
    Sequential dispatcher for one task

    Each complete invocation is awaited before the next one starts; partial
    snapshots only refresh the UI preview.
    """

    def __init__(
        self,
        task,
        registry: Optional[ToolRegistry] = None,
        emitter: Optional[EventEmitter] = None,
    ):
        """
        Initialize ToolDispatcher

        Args:
            task: Task the invocations run against
            registry: ToolRegistry instance (defaults to singleton)
            emitter: EventEmitter for lifecycle events (defaults to a private one)
        """
        self.task = task
        self.registry = registry or ToolRegistry.get_instance()
        self.emitter = emitter or EventEmitter()
        self.results: List[ToolResult] = []

    def reset_turn(self) -> None:
        """Clear per-message state before presenting a new assistant message"""
        self.task.did_reject_tool = False
        self.task.did_already_use_tool = False
        self.results = []

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------

    def _record(self, block: ToolUse, description: str, content, is_error: bool = False) -> None:
        self.task.user_message_content.append({"type": "text", "text": f"{description} Result:"})
        if isinstance(content, str):
            self.task.user_message_content.append(
                {"type": "text", "text": content or "(tool did not return anything)"}
            )
        else:
            self.task.user_message_content.extend(content)

        self.results.append(ToolResult(
            tool_name=block.name,
            content=content,
            is_error=is_error or _is_error_content(content),
            tool_call_id=block.id,
        ))

    def build_callbacks(self, tool: BaseTool, block: ToolUse) -> ToolCallbacks:
        """Build the shared callbacks for one invocation"""
        task = self.task
        description = tool.describe(block)

        def push_tool_result(content) -> None:
            self._record(block, description, content)

        async def ask_approval(ask_type: str, message: Optional[str] = None) -> bool:
            answer = await task.ask(ask_type, message, False)
            if answer.response == AskResponse.YES_BUTTON_CLICKED:
                return True

            if answer.text:
                await task.say("user_feedback", answer.text, answer.images)
                push_tool_result(responses.tool_denied_with_feedback(answer.text))
            else:
                push_tool_result(responses.tool_denied())
            task.did_reject_tool = True
            logger.info(f"User rejected {description} in task {task.task_id}")
            return False

        async def handle_error(action: str, error: BaseException) -> None:
            if task.aborted:
                logger.debug(f"Ignoring error while {action} for aborted task {task.task_id}: {error}")
                return

            error_string = f"Error {action}: {error}"
            logger.error(f"[DISPATCH] {error_string}", exc_info=error)
            await task.say("error", error_string)
            self._record(block, description, responses.tool_error(error_string), is_error=True)

        def remove_tag(tag: str, text: Optional[str], partial: Optional[bool] = None) -> str:
            return remove_closing_tag(tag, text, block.partial if partial is None else partial)

        return ToolCallbacks(
            ask_approval=ask_approval,
            handle_error=handle_error,
            push_tool_result=push_tool_result,
            remove_closing_tag=remove_tag,
        )

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def _emit(self, event_type: EventType, tool_name: Optional[str] = None, **data: Any) -> None:
        await self.emitter.emit(ToolEvent(
            type=event_type,
            data=data,
            task_id=self.task.task_id,
            tool_name=tool_name,
        ))

    async def _present_text(self, block: TextContent) -> None:
        if not block.content:
            return
        try:
            await self.task.say("text", block.content, None, block.partial)
        except TaskAbortedError:
            logger.debug(f"Dropped text for aborted task {self.task.task_id}")
            return
        if not block.partial:
            await self._emit(EventType.TEXT, content=block.content)

    async def dispatch(self, block: Optional[AssistantMessageContent]) -> None:
        """
        Present a single block

        None is a call the native parser rejected and is skipped. Text blocks
        go to the host; tool blocks go to their tool's handle().
        """
        if block is None:
            return

        if self.task.aborted:
            logger.debug(f"Task {self.task.task_id} aborted, not dispatching {block.type}")
            return

        if isinstance(block, TextContent):
            await self._present_text(block)
            return

        tool = self.registry.get_tool(block.name)
        if tool is None:
            if not block.partial:
                logger.warning(f"[DISPATCH] No implementation registered for tool '{block.name}'")
                self._record(
                    block,
                    f"[{block.name}]",
                    responses.tool_error(f"Tool '{block.name}' is not available."),
                    is_error=True,
                )
                await self._emit(EventType.TOOL_ERROR, block.name, error="unavailable")
            return

        callbacks = self.build_callbacks(tool, block)

        if block.partial:
            try:
                await tool.handle(self.task, block, callbacks)
            except TaskAbortedError:
                logger.debug(f"Partial {block.name} dropped for aborted task {self.task.task_id}")
                return
            except Exception as e:
                logger.warning(f"[DISPATCH] Partial preview for {block.name} failed: {e}", exc_info=True)
                return
            await self._emit(EventType.TOOL_CALL_PARTIAL, block.name, params=dict(block.params))
            return

        description = tool.describe(block)

        if self.task.did_reject_tool:
            self._record(block, description, responses.tool_skipped(description))
            await self._emit(EventType.TOOL_SKIPPED, block.name, reason="rejected")
            return

        if self.task.settings.single_tool_per_turn and self.task.did_already_use_tool:
            self._record(block, description, responses.tool_already_used(block.name))
            await self._emit(EventType.TOOL_SKIPPED, block.name, reason="already_used")
            return

        self.task.record_tool_usage(block.name)
        callbacks = tool.extend_callbacks(callbacks, self.task, block)
        await self._emit(EventType.TOOL_CALL_START, block.name, call_id=block.id, params=dict(block.params))

        start = len(self.results)
        try:
            await tool.handle(self.task, block, callbacks)
        except TaskAbortedError:
            logger.info(f"Task {self.task.task_id} aborted while running {block.name}")
            return
        self.task.did_already_use_tool = True

        for result in self.results[start:]:
            await self._emit(
                EventType.TOOL_ERROR if result.is_error else EventType.TOOL_RESULT,
                block.name,
                call_id=result.tool_call_id,
                content=result.content,
            )
        if self.task.did_reject_tool:
            await self._emit(EventType.TOOL_REJECTED, block.name, call_id=block.id)

    async def _present_one(self, block: Optional[AssistantMessageContent]) -> bool:
        if self.task.aborted:
            await self._emit(EventType.TASK_ABORTED)
            return False
        await self.dispatch(block)
        return True

    async def present(self, blocks: Blocks) -> List[ToolResult]:
        """
        Present blocks in order, stopping once the task is aborted

        Returns:
            Results pushed while presenting these blocks
        """
        start = len(self.results)
        if hasattr(blocks, "__aiter__"):
            async for block in blocks:
                if not await self._present_one(block):
                    break
        else:
            for block in blocks:
                if not await self._present_one(block):
                    break
        return self.results[start:]

    async def present_native_calls(self, tool_calls: Iterable[Any]) -> List[ToolResult]:
        """Parse provider tool calls and present them; rejected calls are skipped"""
        return await self.present(NativeToolCallParser.parse_tool_call(call) for call in tool_calls)

    async def run_legacy_stream(self, chunks: Union[Iterable[str], AsyncIterable[str]]) -> List[ToolResult]:
        """
        Parse a streamed legacy message and present it as it arrives

        Completed blocks are dispatched exactly once; the trailing block is
        re-presented as a partial snapshot after every chunk.
        """
        parser = LegacyStreamParser()
        start = len(self.results)
        cursor = 0

        async def advance(blocks: List[AssistantMessageContent]) -> int:
            index = cursor
            while index < len(blocks):
                block = blocks[index]
                if self.task.aborted:
                    break
                await self.dispatch(block)
                if block.partial:
                    break
                index += 1
            return index

        if hasattr(chunks, "__aiter__"):
            async for chunk in chunks:
                cursor = await advance(parser.feed(chunk))
                if self.task.aborted:
                    break
        else:
            for chunk in chunks:
                cursor = await advance(parser.feed(chunk))
                if self.task.aborted:
                    break

        if self.task.aborted:
            await self._emit(EventType.TASK_ABORTED)
        else:
            await advance(parser.finalize())

        return self.results[start:]
