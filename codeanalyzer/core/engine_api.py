"""
Engine API — The contract every engine plugin implements.

A plugin names the engines it can build and constructs them on request.
An engine describes its rules and runs a subset of them against a
workspace. Operations may be plain functions or coroutines.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable

from pydantic import BaseModel

from codeanalyzer.core.workspace import Workspace
from codeanalyzer.models.engine_models import EngineRunResults, PathPoint, RuleDescription
from codeanalyzer.models.event_models import LogLevel

ENGINE_API_VERSION = 1

ConfigObject = dict[str, Any]


@dataclass(frozen=True)
class DescribeOptions:
    workspace: Workspace


@dataclass(frozen=True)
class EngineRunOptions:
    workspace: Workspace
    path_start_points: list[PathPoint] | None = None

    def to_log_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"workspace": self.workspace.get_files_and_folders()}
        if self.path_start_points is not None:
            data["path_start_points"] = [p.model_dump(exclude_none=True) for p in self.path_start_points]
        return data


class EngineEventType(str, Enum):
    LOG_EVENT = "LogEvent"
    PROGRESS_EVENT = "ProgressEvent"


class EngineLogMessage(BaseModel):
    type: EngineEventType = EngineEventType.LOG_EVENT
    log_level: LogLevel
    message: str


class EngineProgressUpdate(BaseModel):
    type: EngineEventType = EngineEventType.PROGRESS_EVENT
    percent_complete: float


class Engine(ABC):
    """Base class for engines. Subclasses implement the three abstract methods."""

    def __init__(self) -> None:
        self._event_listeners: dict[EngineEventType, list[Callable[[Any], None]]] = defaultdict(list)

    @abstractmethod
    def get_name(self) -> str: ...

    @abstractmethod
    def describe_rules(
        self, describe_options: DescribeOptions
    ) -> list[RuleDescription] | Awaitable[list[RuleDescription]]: ...

    @abstractmethod
    def run_rules(
        self, rule_names: list[str], run_options: EngineRunOptions
    ) -> EngineRunResults | dict | Awaitable[EngineRunResults | dict]: ...

    def on_event(self, event_type: EngineEventType, callback: Callable[[Any], None]) -> None:
        self._event_listeners[EngineEventType(event_type)].append(callback)

    def emit_log_event(self, log_level: LogLevel, message: str) -> None:
        self._emit(EngineLogMessage(log_level=log_level, message=message))

    def emit_progress_event(self, percent_complete: float) -> None:
        self._emit(EngineProgressUpdate(percent_complete=percent_complete))

    def _emit(self, event: EngineLogMessage | EngineProgressUpdate) -> None:
        for callback in list(self._event_listeners[event.type]):
            callback(event)


class EnginePlugin(ABC):
    """Factory for one or more named engines."""

    @abstractmethod
    def get_api_version(self) -> int: ...

    @abstractmethod
    def get_available_engine_names(self) -> list[str]: ...

    @abstractmethod
    def create_engine(self, engine_name: str, engine_config: ConfigObject) -> Engine | Awaitable[Engine]: ...


class EnginePluginV1(EnginePlugin):
    def get_api_version(self) -> int:
        return 1
