"""
TaskValet Responses - Text returned to the model as tool results

Keeping every model-facing message here makes the wording consistent
across tools and easy to test.
"""

import os
from typing import List, Optional


TOOL_USE_REMINDER = (
    "Tool uses are formatted using XML-style tags. The tool name itself becomes "
    "the XML tag name. Each parameter is enclosed within its own set of tags:\n\n"
    "<actual_tool_name>\n"
    "<parameter1_name>value1</parameter1_name>\n"
    "</actual_tool_name>\n\n"
    "Always use the actual tool name as the XML tag name for proper parsing and execution."
)


def tool_error(error: Optional[str]) -> str:
    return f"The tool execution failed with the following error:\n<error>\n{error}\n</error>"


def tool_denied() -> str:
    return "The user denied this operation."


def tool_denied_with_feedback(feedback: Optional[str]) -> str:
    return (
        "The user denied this operation and provided the following feedback:\n"
        f"<feedback>\n{feedback}\n</feedback>"
    )


def tool_skipped(tool_description: str) -> str:
    return f"Skipping tool {tool_description} due to user rejecting a previous tool."


def tool_already_used(tool_name: str) -> str:
    return (
        f"Tool [{tool_name}] was not executed because a tool has already been used "
        "in this message. Only one tool may be used per message."
    )


def missing_tool_parameter_error(param_name: str) -> str:
    return (
        f"Missing value for required parameter '{param_name}'. "
        f"Please retry with complete response.\n\n# Reminder: Instructions for Tool Use\n\n{TOOL_USE_REMINDER}"
    )


def completion_feedback(feedback: Optional[str]) -> str:
    return (
        "The user has provided feedback on the results. Consider their input to continue "
        "the task, and then attempt completion again.\n"
        f"<feedback>\n{feedback}\n</feedback>"
    )


def format_files_list(absolute_path: str, files: List[str], did_hit_limit: bool) -> str:
    """
    Render a directory listing for the model

    Args:
        absolute_path: Directory that was listed
        files: Absolute paths; directories end with a separator
        did_hit_limit: Whether the listing was cut at the result cap
    """
    relative: List[str] = []
    for file_path in files:
        rel = os.path.relpath(file_path, absolute_path).replace(os.sep, "/")
        if file_path.endswith(os.sep) or file_path.endswith("/"):
            rel += "/"
        relative.append(rel)

    relative.sort(key=lambda p: [part.lower() for part in p.split("/")])

    if did_hit_limit:
        return (
            "\n".join(relative)
            + "\n\n(File list truncated. Use list_files on specific subdirectories "
            "if you need to explore further.)"
        )
    if not relative:
        return "No files found."
    return "\n".join(relative)
