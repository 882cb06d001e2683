"""
Todo checklist parsing

Sub-tasks and completion checks work with a flat todo list written as a
markdown checklist:

    [x] Analyze requirements
    [-] Implement parser
    [ ] Write tests

``[x]`` marks a completed item, ``[-]`` or ``[~]`` an item in progress and
``[ ]`` a pending one. A leading list dash (``- [ ] ...``) is accepted.
"""

import hashlib
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List

from .errors import ChecklistFormatError

_CHECKLIST_LINE = re.compile(r"^(?:[-*]\s*)?\[\s*([ xX\-~]?)\s*\]\s+(.+)$")


class TodoStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class TodoItem:
    id: str
    content: str
    status: TodoStatus = TodoStatus.PENDING

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "content": self.content, "status": self.status.value}


def _status_for(marker: str) -> TodoStatus:
    if marker in ("x", "X"):
        return TodoStatus.COMPLETED
    if marker in ("-", "~"):
        return TodoStatus.IN_PROGRESS
    return TodoStatus.PENDING


def parse_markdown_checklist(markdown: str) -> List[TodoItem]:
    """
    Parse a markdown checklist into todo items

    Args:
        markdown: Checklist text, one item per line

    Returns:
        Items in document order

    Raises:
        ChecklistFormatError: If a non-blank line is not a checklist item,
            or the text contains no items at all
    """
    if not isinstance(markdown, str):
        raise ChecklistFormatError("Todo list must be a string")

    items: List[TodoItem] = []
    for line_number, raw_line in enumerate(markdown.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue
        match = _CHECKLIST_LINE.match(line)
        if not match:
            raise ChecklistFormatError(f"Line {line_number} is not a checklist item: {line!r}")
        status = _status_for(match.group(1))
        content = match.group(2).strip()
        digest = hashlib.md5(f"{content}{status.value}".encode("utf-8")).hexdigest()
        items.append(TodoItem(id=digest, content=content, status=status))

    if not items:
        raise ChecklistFormatError("Todo list contains no checklist items")
    return items


def has_incomplete_todos(todos: Iterable[TodoItem]) -> bool:
    """True when any item is not completed"""
    return any(todo.status != TodoStatus.COMPLETED for todo in todos)
