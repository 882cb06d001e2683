"""
TaskValet Errors - Exception types raised across the runtime
"""


class TaskValetError(Exception):
    """Base class for TaskValet errors"""


class ToolParameterError(TaskValetError, ValueError):
    """Raised by parse_legacy() when string parameters cannot be turned into typed params"""

    def __init__(self, tool_name: str, message: str):
        super().__init__(message)
        self.tool_name = tool_name


class ChecklistFormatError(TaskValetError, ValueError):
    """Raised when a todo payload is not a markdown checklist"""


class TaskAbortedError(TaskValetError):
    """Raised at a suspension point (ask/say) once the task has been aborted"""

    def __init__(self, task_id: str):
        super().__init__(f"Task {task_id} was aborted")
        self.task_id = task_id


class ConfigError(TaskValetError):
    """Raised when a configuration file cannot be loaded or validated"""
