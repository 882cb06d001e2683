"""
TaskValet Streaming Engine - Event buffering and distribution

This module provides:
- StreamBuffer: Buffer for collecting events with sequence numbers
- EventEmitter: Callback-based event distribution
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, List

from .models import EventType, ToolEvent

logger = logging.getLogger(__name__)


# Type for event handlers
EventHandler = Callable[[ToolEvent], Awaitable[None]]


@dataclass
class StreamBuffer:
    """
    Buffer for collecting events before emission.

    Supports:
    - Event collection with optional size limit
    - Event filtering by type
    - Event retrieval and clearing
    """

    max_size: int = 1000
    events: deque = field(default_factory=lambda: deque(maxlen=1000))
    sequence_counter: int = 0

    def __post_init__(self):
        self.events = deque(maxlen=self.max_size)

    def add(self, event: ToolEvent) -> None:
        """Add an event to the buffer"""
        event.sequence = self.sequence_counter
        self.sequence_counter += 1
        self.events.append(event)

    def get_all(self) -> List[ToolEvent]:
        """Get all events in the buffer"""
        return list(self.events)

    def get_since(self, sequence: int) -> List[ToolEvent]:
        """Get events since a specific sequence number"""
        return [e for e in self.events if e.sequence > sequence]

    def get_by_type(self, event_type: EventType) -> List[ToolEvent]:
        """Get events of a specific type"""
        return [e for e in self.events if e.type == event_type]

    def clear(self) -> None:
        """Clear all events from buffer"""
        self.events.clear()

    def __len__(self) -> int:
        return len(self.events)


class EventEmitter:
    """
    Callback-based event distribution.

    Allows registering handlers for specific event types
    and emitting events to all registered handlers. Every emitted
    event is also recorded in the emitter's buffer.
    """

    def __init__(self, buffer_size: int = 1000):
        self._handlers: Dict[EventType, List[EventHandler]] = {}
        self._global_handlers: List[EventHandler] = []
        self.buffer = StreamBuffer(max_size=buffer_size)

    def on(self, event_type: EventType, handler: EventHandler) -> None:
        """Register a handler for a specific event type"""
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def on_any(self, handler: EventHandler) -> None:
        """Register a handler for all events"""
        self._global_handlers.append(handler)

    def off(self, event_type: EventType, handler: EventHandler) -> bool:
        """Unregister a handler for a specific event type"""
        if event_type in self._handlers:
            try:
                self._handlers[event_type].remove(handler)
                return True
            except ValueError:
                pass
        return False

    async def emit(self, event: ToolEvent) -> None:
        """Emit an event to all registered handlers"""
        self.buffer.add(event)

        for handler in self._handlers.get(event.type, []):
            try:
                await handler(event)
            except Exception as e:
                logger.warning(
                    f"Event handler error for {event.type}: {e}",
                    exc_info=True
                )

        for handler in self._global_handlers:
            try:
                await handler(event)
            except Exception as e:
                logger.warning(
                    f"Global event handler error: {e}",
                    exc_info=True
                )

    def clear(self) -> None:
        """Remove all handlers"""
        self._handlers.clear()
        self._global_handlers.clear()
