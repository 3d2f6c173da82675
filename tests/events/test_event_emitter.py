"""
Tests for the event system.

This module contains tests for the EventEmitter and EventBus classes
to ensure they provide the expected behavior for event handling.
"""

from unittest.mock import MagicMock

from highroller.events import CasinoEventType, EventBus, EventEmitter, EventPriority


def test_on_with_string_event_type():
    """Test subscribing to an event with a string event type."""
    emitter = EventEmitter()
    callback = MagicMock()

    unsubscribe = emitter.on("test_event", callback)

    test_data = {"value": "test"}
    emitter.emit("test_event", test_data)
    callback.assert_called_once_with(test_data)

    # Unsubscribe and emit again
    unsubscribe()
    emitter.emit("test_event", {"value": "test2"})
    callback.assert_called_once()


def test_on_with_enum_event_type():
    """Enum members and their names address the same listeners."""
    emitter = EventEmitter()
    callback = MagicMock()
    emitter.on(CasinoEventType.WHEEL_SPUN, callback)
    emitter.emit("WHEEL_SPUN", {"pocket": 3})
    emitter.emit(CasinoEventType.WHEEL_SPUN, {"pocket": 4})
    assert callback.call_count == 2


def test_once():
    emitter = EventEmitter()
    callback = MagicMock()
    emitter.once(CasinoEventType.ROUND_SETTLED, callback)
    emitter.emit(CasinoEventType.ROUND_SETTLED, {"n": 1})
    emitter.emit(CasinoEventType.ROUND_SETTLED, {"n": 2})
    callback.assert_called_once_with({"n": 1})


def test_on_any_receives_event_name():
    emitter = EventEmitter()
    received = []
    emitter.on_any(received.append)
    emitter.emit(CasinoEventType.BALL_DROPPED, {"bucket": 6})
    assert received == [("BALL_DROPPED", {"bucket": 6})]


def test_priority_order():
    emitter = EventEmitter()
    calls = []
    emitter.on("evt", lambda data: calls.append("low"), EventPriority.LOW)
    emitter.on("evt", lambda data: calls.append("critical"), EventPriority.CRITICAL)
    emitter.on("evt", lambda data: calls.append("normal"))
    emitter.on("evt", lambda data: calls.append("normal-2"))
    emitter.emit("evt", {})
    assert calls == ["critical", "normal", "normal-2", "low"]


def test_handler_errors_do_not_propagate():
    emitter = EventEmitter()
    after = MagicMock()

    def broken(data):
        raise RuntimeError("boom")

    emitter.on("evt", broken, EventPriority.HIGH)
    emitter.on("evt", after)
    emitter.emit("evt", {"ok": True})
    after.assert_called_once_with({"ok": True})


def test_remove_all_listeners():
    emitter = EventEmitter()
    callback = MagicMock()
    emitter.on("a", callback)
    emitter.on("b", callback)
    emitter.remove_all_listeners("a")
    emitter.emit("a", {})
    emitter.emit("b", {})
    assert callback.call_count == 1

    emitter.remove_all_listeners()
    emitter.emit("b", {})
    assert callback.call_count == 1


def test_event_bus_singleton():
    bus1 = EventBus.get_instance()
    bus2 = EventBus.get_instance()
    assert bus1 is bus2
    assert isinstance(bus1, EventEmitter)
