"""
execute_command - Run a shell command in the task's workspace
"""

import asyncio
import logging
import os
from typing import Dict, List

from .. import responses
from .base import BaseTool, ToolCallbacks
from .models import ExecuteCommandParams, ToolUse

logger = logging.getLogger(__name__)


def truncate_output(output: str, line_limit: int) -> str:
    """
    Keep the head and tail of long output

    20% of the budget goes to the first lines and the rest to the last lines,
    since the end of a command's output usually holds the failure.
    """
    lines: List[str] = output.splitlines()
    if len(lines) <= line_limit:
        return output

    head_count = line_limit // 5
    tail_count = line_limit - head_count
    omitted = len(lines) - line_limit
    return "\n".join(
        lines[:head_count]
        + [f"\n[...{omitted} lines omitted...]\n"]
        + lines[len(lines) - tail_count:]
    )


class ExecuteCommandTool(BaseTool):
    name = "execute_command"

    def parse_legacy(self, params: Dict[str, str]) -> ExecuteCommandParams:
        return ExecuteCommandParams(
            command=params.get("command") or "",
            cwd=params.get("cwd") or None,
        )

    def describe(self, block: ToolUse) -> str:
        return f"[{self.name} for '{block.params.get('command')}']"

    async def execute(self, params: ExecuteCommandParams, task, callbacks: ToolCallbacks) -> None:
        try:
            if not params.command:
                task.consecutive_mistake_count += 1
                task.record_tool_error(self.name)
                callbacks.push_tool_result(await task.say_and_create_missing_param_error(self.name, "command"))
                return

            working_dir = os.path.abspath(os.path.join(task.cwd, params.cwd)) if params.cwd else task.cwd
            if not os.path.isdir(working_dir):
                task.consecutive_mistake_count += 1
                task.record_tool_error(self.name)
                callbacks.push_tool_result(
                    responses.tool_error(f"Working directory '{working_dir}' does not exist.")
                )
                return

            task.consecutive_mistake_count = 0

            if not await callbacks.ask_approval("command", params.command):
                return

            callbacks.push_tool_result(await self._run(task, params.command, working_dir))
        except Exception as e:
            await callbacks.handle_error("executing command", e)

    async def _run(self, task, command: str, working_dir: str) -> str:
        timeout = task.settings.command_timeout_seconds or None
        logger.info(f"Running command in {working_dir}: {command}")

        process = await asyncio.create_subprocess_shell(
            command,
            cwd=working_dir,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
        try:
            stdout, _ = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            await self._kill(process)
            logger.warning(f"Command timed out after {timeout}s: {command}")
            return (
                f"Command execution timed out after {timeout} seconds in '{working_dir}'. "
                "The process was terminated."
            )
        except asyncio.CancelledError:
            logger.info(f"Command cancelled, terminating process {process.pid}: {command}")
            await self._kill(process)
            raise

        output = truncate_output(
            stdout.decode("utf-8", errors="replace").rstrip(),
            task.settings.command_output_line_limit,
        )
        return (
            f"Command executed in '{working_dir}'. Exit code: {process.returncode}\n"
            f"Output:\n{output}"
        )

    @staticmethod
    async def _kill(process) -> None:
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                # Exited between the check and the kill
                pass
        await process.wait()

    async def handle_partial(self, task, block: ToolUse) -> None:
        command = block.params.get("command")
        await task.ask("command", self.remove_closing_tag("command", command, block.partial), block.partial)
