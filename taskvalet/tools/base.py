"""
TaskValet Base Tool - The dispatch contract every tool implements

Both protocols end up here:
- Legacy protocol: params -> parse_legacy() -> typed params -> execute()
- Native protocol: native_args are already typed -> execute()

Each tool subclasses BaseTool and implements:
- parse_legacy(): convert string params into the tool's typed params
- execute(): protocol-agnostic core logic using typed params
- handle_partial(): (optional) streaming UI preview

handle() is the single entry point the dispatcher calls for every snapshot.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from .models import ToolUse

logger = logging.getLogger(__name__)


AskApproval = Callable[..., Awaitable[bool]]
HandleError = Callable[[str, BaseException], Awaitable[None]]
PushToolResult = Callable[[Union[str, List[Dict[str, Any]]]], None]
RemoveClosingTag = Callable[..., str]


@dataclass
class ToolCallbacks:
    """
    Callbacks passed to tool execution

    Attributes:
        ask_approval: ``await ask_approval(ask_type, message)`` -> True when approved
        handle_error: ``await handle_error(action, error)`` reports a failure
        push_tool_result: ``push_tool_result(content)`` records the tool's result
        remove_closing_tag: ``remove_closing_tag(tag, text)`` for partial previews
    """
    ask_approval: AskApproval
    handle_error: HandleError
    push_tool_result: PushToolResult
    remove_closing_tag: RemoveClosingTag


def remove_closing_tag(tag: str, text: Optional[str], partial: bool) -> str:
    """
    Strip a partially streamed closing tag from the end of a value

    While ``<path>src</pa`` is still streaming the path value reads
    ``src</pa``; this returns ``src``. Complete values are returned as-is.
    """
    if not partial:
        return text or ""
    if not text:
        return ""
    optional_chars = "".join(f"(?:{re.escape(char)})?" for char in tag)
    return re.sub(rf"\s?</?{optional_chars}$", "", text)


class BaseTool(ABC):
    """
    Abstract base class for all tools

    Subclasses set ``name`` to their tool name and implement parse_legacy()
    and execute(). Tools listed in NATIVE_ARG_TYPES receive those typed
    arguments directly on the native protocol; parse_legacy() must return the
    same shape.
    """

    name: str

    @abstractmethod
    def parse_legacy(self, params: Dict[str, str]) -> Any:
        """
        Parse legacy string parameters into typed parameters

        Args:
            params: ToolUse.params (parameter name -> string value)

        Returns:
            Typed parameters for execute()

        Raises:
            ToolParameterError: If the params cannot be interpreted
        """

    @abstractmethod
    async def execute(self, params: Any, task, callbacks: ToolCallbacks) -> None:
        """
        Execute the tool with typed parameters

        Tools own their failure reporting: errors raised inside the body must
        be routed through ``callbacks.handle_error``.

        Args:
            params: Typed parameters (from native_args or parse_legacy)
            task: Task with state and host access
            callbacks: Approval, error and result callbacks
        """

    async def handle_partial(self, task, block: ToolUse) -> None:
        """
        Handle a streaming partial invocation

        Default does nothing. Overrides may only update the UI preview; they
        must never perform the tool's side effect.
        """
        return None

    async def handle(self, task, block: ToolUse, callbacks: ToolCallbacks) -> None:
        """
        Main entry point for tool execution

        1. Partial blocks go to handle_partial() and nothing else
        2. Parameters come from native_args, or parse_legacy() when absent
        3. A parameter failure is reported and execute() is not called
        4. Otherwise execute() runs with the typed parameters
        """
        logger.debug(
            f"[TOOL] {self.name}.handle partial={block.partial} "
            f"native_args={block.native_args is not None}"
        )

        if block.partial:
            await self.handle_partial(task, block)
            return

        try:
            if block.native_args is not None:
                params = block.native_args
            else:
                params = self.parse_legacy(block.params)
        except Exception as e:
            error_message = f"Failed to parse {self.name} parameters: {e}"
            logger.warning(f"[TOOL] {error_message}")
            await callbacks.handle_error(f"parsing {self.name} args", ValueError(error_message))
            callbacks.push_tool_result(f"<error>{error_message}</error>")
            return

        await self.execute(params, task, callbacks)
        logger.debug(f"[TOOL] {self.name}.execute completed")

    def describe(self, block: ToolUse) -> str:
        """Short label used in result headers, e.g. ``[list_files for 'src']``"""
        return f"[{self.name}]"

    def extend_callbacks(self, callbacks: ToolCallbacks, task, block: ToolUse) -> ToolCallbacks:
        """Hook for tools that need callbacks beyond the shared set"""
        return callbacks

    def remove_closing_tag(self, tag: str, text: Optional[str], partial: bool) -> str:
        return remove_closing_tag(tag, text, partial)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name}>"
