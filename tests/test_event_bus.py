"""
Tests for Event Bus — ordering, typing, and timestamps.
"""

from codeanalyzer.core.event_bus import EventBus
from codeanalyzer.models.event_models import (
    EngineProgressEvent,
    EventType,
    LogEvent,
    LogLevel,
)


def test_listeners_run_in_registration_order(clock):
    bus = EventBus(clock)
    calls = []
    bus.subscribe(EventType.LOG_EVENT, lambda e: calls.append(("first", e.message)))
    bus.subscribe(EventType.LOG_EVENT, lambda e: calls.append(("second", e.message)))
    bus.emit_log(LogLevel.INFO, "hello")
    assert calls == [("first", "hello"), ("second", "hello")]


def test_only_listeners_of_the_event_type_are_called(clock):
    bus = EventBus(clock)
    logs, progress = [], []
    bus.subscribe(EventType.LOG_EVENT, logs.append)
    bus.subscribe(EventType.ENGINE_PROGRESS_EVENT, progress.append)
    bus.emit_progress("someEngine", 42)
    assert logs == []
    assert progress == [
        EngineProgressEvent(timestamp=clock.now(), engine_name="someEngine", percent_complete=42)
    ]


def test_events_are_stamped_with_the_bus_clock(clock):
    bus = EventBus(clock)
    events = []
    bus.subscribe(EventType.LOG_EVENT, events.append)
    bus.emit_log(LogLevel.WARN, "careful")
    assert events == [LogEvent(timestamp=clock.now(), log_level=LogLevel.WARN, message="careful")]


def test_unsubscribe_stops_delivery(clock):
    bus = EventBus(clock)
    events = []
    unsubscribe = bus.subscribe(EventType.LOG_EVENT, events.append)
    bus.emit_log(LogLevel.INFO, "one")
    unsubscribe()
    bus.emit_log(LogLevel.INFO, "two")
    assert [e.message for e in events] == ["one"]


def test_listener_may_subscribe_during_emission(clock):
    bus = EventBus(clock)
    late = []

    def subscribe_another(event):
        bus.subscribe(EventType.LOG_EVENT, late.append)

    bus.subscribe(EventType.LOG_EVENT, subscribe_another)
    bus.emit_log(LogLevel.INFO, "first")
    assert late == []
    bus.emit_log(LogLevel.INFO, "second")
    assert [e.message for e in late] == ["second"]
