"""
Logging helpers — stdlib logging setup and the event-to-logging bridge.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from codeanalyzer.models.event_models import EngineLogEvent, EventType, LogEvent, LogLevel

if TYPE_CHECKING:
    from codeanalyzer.core.analyzer import CodeAnalyzer

events_logger = logging.getLogger("codeanalyzer.events")

LOG_LEVEL_TO_LOGGING: dict[LogLevel, int] = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.FINE: logging.DEBUG,
}


def setup_logging(level: str = "INFO") -> None:
    """Configure standard logging for service/library use."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def bridge_events_to_logging(analyzer: "CodeAnalyzer") -> None:
    """Mirror the analyzer's log events onto the ``codeanalyzer.events`` logger."""

    def on_log(event: LogEvent) -> None:
        events_logger.log(LOG_LEVEL_TO_LOGGING[event.log_level], event.message)

    def on_engine_log(event: EngineLogEvent) -> None:
        events_logger.log(
            LOG_LEVEL_TO_LOGGING[event.log_level], f"[{event.engine_name}] {event.message}"
        )

    analyzer.on_event(EventType.LOG_EVENT, on_log)
    analyzer.on_event(EventType.ENGINE_LOG_EVENT, on_engine_log)
