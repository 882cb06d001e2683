"""
TaskValet Streaming Models - Tool lifecycle events

This module defines:
- EventType: Kinds of events the dispatcher emits
- ToolEvent: Event data structure with serialization helpers
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class EventType(str, Enum):
    """Types of events emitted while dispatching tool invocations"""
    # Text events
    TEXT = "text"

    # Tool events
    TOOL_CALL_START = "tool_call_start"
    TOOL_CALL_PARTIAL = "tool_call_partial"
    TOOL_RESULT = "tool_result"
    TOOL_ERROR = "tool_error"
    TOOL_SKIPPED = "tool_skipped"
    TOOL_REJECTED = "tool_rejected"

    # Task events
    TASK_ABORTED = "task_aborted"


@dataclass
class ToolEvent:
    """
    Event structure for streaming

    All events have:
    - type: The type of event
    - data: Event-specific data
    - timestamp: When the event occurred
    - task_id: Which task generated the event
    - tool_name: The tool involved, when there is one
    - sequence: Sequence number for ordering
    """
    type: EventType
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)
    task_id: Optional[str] = None
    tool_name: Optional[str] = None
    sequence: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization"""
        return {
            "type": self.type.value,
            "data": self.data,
            "timestamp": self.timestamp.isoformat(),
            "task_id": self.task_id,
            "tool_name": self.tool_name,
            "sequence": self.sequence,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ToolEvent":
        """Create event from dictionary"""
        return cls(
            type=EventType(data["type"]),
            data=data.get("data", {}),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            task_id=data.get("task_id"),
            tool_name=data.get("tool_name"),
            sequence=data.get("sequence", 0),
        )
