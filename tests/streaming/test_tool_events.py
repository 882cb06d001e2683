"""
Tests for TaskValet tool lifecycle events.

Tests:
- Event types and serialization
- StreamBuffer operations
- EventEmitter callbacks
"""

import pytest

from taskvalet.streaming import EventEmitter, EventType, StreamBuffer, ToolEvent


# ============================================================================
# Test Models
# ============================================================================

class TestEventType:
    """Tests for EventType enum"""

    def test_tool_events(self):
        """Test tool lifecycle event types"""
        assert EventType.TOOL_CALL_START == "tool_call_start"
        assert EventType.TOOL_CALL_PARTIAL == "tool_call_partial"
        assert EventType.TOOL_RESULT == "tool_result"
        assert EventType.TOOL_ERROR == "tool_error"
        assert EventType.TOOL_SKIPPED == "tool_skipped"
        assert EventType.TOOL_REJECTED == "tool_rejected"

    def test_text_and_task_events(self):
        assert EventType.TEXT == "text"
        assert EventType.TASK_ABORTED == "task_aborted"

    def test_complete_set(self):
        """Every lifecycle event the dispatcher emits is a member"""
        assert {event.value for event in EventType} == {
            "text",
            "tool_call_start",
            "tool_call_partial",
            "tool_result",
            "tool_error",
            "tool_skipped",
            "tool_rejected",
            "task_aborted",
        }


class TestToolEvent:
    """Tests for ToolEvent"""

    def test_round_trip(self):
        event = ToolEvent(type=EventType.TOOL_RESULT, data={"content": "ok"}, task_id="t1", tool_name="list_files")

        restored = ToolEvent.from_dict(event.to_dict())

        assert restored.type == EventType.TOOL_RESULT
        assert restored.data == {"content": "ok"}
        assert restored.tool_name == "list_files"
        assert restored.timestamp == event.timestamp


# ============================================================================
# Test Engine
# ============================================================================

class TestStreamBuffer:
    """Tests for StreamBuffer"""

    def test_sequence_numbers(self):
        buffer = StreamBuffer()
        buffer.add(ToolEvent(type=EventType.TEXT))
        buffer.add(ToolEvent(type=EventType.TOOL_RESULT))

        assert [e.sequence for e in buffer.get_all()] == [0, 1]
        assert len(buffer.get_since(0)) == 1
        assert len(buffer.get_by_type(EventType.TEXT)) == 1

    def test_max_size(self):
        buffer = StreamBuffer(max_size=2)
        for _ in range(5):
            buffer.add(ToolEvent(type=EventType.TEXT))

        assert len(buffer) == 2
        buffer.clear()
        assert len(buffer) == 0


class TestEventEmitter:
    """Tests for EventEmitter"""

    @pytest.mark.asyncio
    async def test_typed_and_global_handlers(self):
        emitter = EventEmitter()
        typed, everything = [], []

        async def on_result(event):
            typed.append(event)

        async def on_any(event):
            everything.append(event)

        emitter.on(EventType.TOOL_RESULT, on_result)
        emitter.on_any(on_any)

        await emitter.emit(ToolEvent(type=EventType.TOOL_RESULT))
        await emitter.emit(ToolEvent(type=EventType.TOOL_ERROR))

        assert len(typed) == 1
        assert len(everything) == 2
        assert len(emitter.buffer) == 2

    @pytest.mark.asyncio
    async def test_handler_errors_do_not_propagate(self):
        emitter = EventEmitter()
        calls = []

        async def broken(event):
            raise RuntimeError("boom")

        async def healthy(event):
            calls.append(event)

        emitter.on(EventType.TOOL_ERROR, broken)
        emitter.on(EventType.TOOL_ERROR, healthy)

        await emitter.emit(ToolEvent(type=EventType.TOOL_ERROR))

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_off(self):
        emitter = EventEmitter()
        calls = []

        async def handler(event):
            calls.append(event)

        emitter.on(EventType.TEXT, handler)
        assert emitter.off(EventType.TEXT, handler) is True
        assert emitter.off(EventType.TEXT, handler) is False

        await emitter.emit(ToolEvent(type=EventType.TEXT))
        assert calls == []
