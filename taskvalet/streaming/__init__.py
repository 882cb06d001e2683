"""
TaskValet Streaming - Tool lifecycle events

Provides:
- EventType / ToolEvent: event models
- StreamBuffer: ordered event buffer
- EventEmitter: async callback distribution
"""

from .models import EventType, ToolEvent
from .engine import EventEmitter, EventHandler, StreamBuffer

__all__ = [
    "EventType",
    "ToolEvent",
    "EventEmitter",
    "EventHandler",
    "StreamBuffer",
]
