"""
Event Bus — Synchronous, ordered publish/subscribe for analyzer events.

Listeners for an event type run in registration order before ``emit``
returns. Every event is stamped with the bus clock.
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Any, Callable

from codeanalyzer.core.utils import Clock, RealClock
from codeanalyzer.models.event_models import (
    EngineLogEvent,
    EngineProgressEvent,
    EngineResultsEvent,
    Event,
    EventType,
    LogEvent,
    LogLevel,
)

if TYPE_CHECKING:
    from codeanalyzer.core.results import EngineRunResults

Listener = Callable[[Any], None]


class EventBus:
    """Typed observer registry."""

    def __init__(self, clock: Clock | None = None) -> None:
        self.clock: Clock = clock or RealClock()
        self._listeners: dict[EventType, list[Listener]] = defaultdict(list)

    def subscribe(self, event_type: EventType, callback: Listener) -> Callable[[], None]:
        """Register ``callback`` for ``event_type``. Returns an unsubscribe function."""
        event_type = EventType(event_type)
        self._listeners[event_type].append(callback)

        def unsubscribe() -> None:
            listeners = self._listeners[event_type]
            if callback in listeners:
                listeners.remove(callback)

        return unsubscribe

    def emit(self, event: Event) -> None:
        # Snapshot so listeners may subscribe or unsubscribe while being notified
        for callback in list(self._listeners[event.type]):
            callback(event)

    def emit_log(self, log_level: LogLevel, message: str) -> None:
        self.emit(LogEvent(timestamp=self.clock.now(), log_level=log_level, message=message))

    def emit_engine_log(self, engine_name: str, log_level: LogLevel, message: str) -> None:
        self.emit(
            EngineLogEvent(
                timestamp=self.clock.now(),
                engine_name=engine_name,
                log_level=log_level,
                message=message,
            )
        )

    def emit_progress(self, engine_name: str, percent_complete: float) -> None:
        self.emit(
            EngineProgressEvent(
                timestamp=self.clock.now(),
                engine_name=engine_name,
                percent_complete=percent_complete,
            )
        )

    def emit_results(self, results: "EngineRunResults") -> None:
        self.emit(EngineResultsEvent(timestamp=self.clock.now(), results=results))
