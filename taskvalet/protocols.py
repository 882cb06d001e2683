"""
TaskValet Protocols - Abstract interfaces for the hosting environment

The runtime never renders UI, stores settings, or creates sub-tasks on its
own. The host (an editor extension, a CLI, a web server) implements these
protocols and hands an instance to each Task.
"""

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from .result import AskResult


@runtime_checkable
class HostProtocol(Protocol):
    """
    Abstract interface for the UI/host surface

    Example:
        class CliHost:
            async def ask(self, ask_type, text=None, partial=None):
                if partial:
                    return AskResult(AskResponse.MESSAGE_RESPONSE)
                answer = input(f"{text} [y/N] ")
                if answer.lower() == "y":
                    return AskResult(AskResponse.YES_BUTTON_CLICKED)
                return AskResult(AskResponse.NO_BUTTON_CLICKED)
            ...
    """

    async def ask(
        self,
        ask_type: str,
        text: Optional[str] = None,
        partial: Optional[bool] = None,
    ) -> AskResult:
        """
        Prompt the user and wait for an answer

        Args:
            ask_type: Prompt category ("tool", "command", "completion_result", ...)
            text: Prompt payload, usually JSON for tool prompts
            partial: True for streaming previews that must not block

        Returns:
            The user's answer. Partial asks return immediately.
        """
        ...

    async def say(
        self,
        say_type: str,
        text: Optional[str] = None,
        images: Optional[List[str]] = None,
        partial: Optional[bool] = None,
    ) -> None:
        """Show a message to the user without waiting for an answer"""
        ...

    async def get_state(self) -> Dict[str, Any]:
        """Current host state (active mode, UI preferences, ...)"""
        ...

    async def start_subtask(
        self,
        parent_task_id: str,
        message: str,
        todos: List[Any],
        mode: str,
    ) -> Optional[Any]:
        """
        Create a child task

        Returns:
            The new task, or None when host policy forbids it
        """
        ...

    async def finish_subtask(self, task_id: str, result: str) -> None:
        """Hand a completed sub-task's result back to its parent"""
        ...
