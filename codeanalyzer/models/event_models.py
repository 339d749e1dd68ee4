"""
Event Models — Typed notifications published on the analyzer's event bus.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, ClassVar, Union

if TYPE_CHECKING:
    from codeanalyzer.core.results import EngineRunResults


class LogLevel(IntEnum):
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4
    FINE = 5


class EventType(str, Enum):
    LOG_EVENT = "LogEvent"
    ENGINE_LOG_EVENT = "EngineLogEvent"
    ENGINE_PROGRESS_EVENT = "EngineProgressEvent"
    ENGINE_RESULTS_EVENT = "EngineResultsEvent"


@dataclass(frozen=True)
class LogEvent:
    """A message from the core itself."""

    type: ClassVar[EventType] = EventType.LOG_EVENT
    timestamp: datetime
    log_level: LogLevel
    message: str


@dataclass(frozen=True)
class EngineLogEvent:
    """A log message forwarded from an engine."""

    type: ClassVar[EventType] = EventType.ENGINE_LOG_EVENT
    timestamp: datetime
    engine_name: str
    log_level: LogLevel
    message: str


@dataclass(frozen=True)
class EngineProgressEvent:
    type: ClassVar[EventType] = EventType.ENGINE_PROGRESS_EVENT
    timestamp: datetime
    engine_name: str
    percent_complete: float


@dataclass(frozen=True)
class EngineResultsEvent:
    type: ClassVar[EventType] = EventType.ENGINE_RESULTS_EVENT
    timestamp: datetime
    results: "EngineRunResults"


Event = Union[LogEvent, EngineLogEvent, EngineProgressEvent, EngineResultsEvent]
