"""
Engine Plugin Registry — Instantiates engines from plugins.

Each engine name is created once and kept for the registry's lifetime.
Construction problems are reported as error log events and the offending
engine is skipped; they never escape ``add_plugin``.
"""

from __future__ import annotations

import asyncio
import json
import logging

from codeanalyzer.core.engine_api import (
    ENGINE_API_VERSION,
    Engine,
    EngineEventType,
    EngineLogMessage,
    EnginePlugin,
    EngineProgressUpdate,
)
from codeanalyzer.core.errors import PluginError
from codeanalyzer.core.event_bus import EventBus
from codeanalyzer.core.messages import get_message
from codeanalyzer.core.utils import maybe_await
from codeanalyzer.models.config_models import CodeAnalyzerConfig
from codeanalyzer.models.event_models import LogLevel

logger = logging.getLogger("codeanalyzer.registry")


class EngineRegistry:
    """Name → Engine map populated from plugins."""

    def __init__(self, config: CodeAnalyzerConfig, event_bus: EventBus) -> None:
        self.config = config
        self.event_bus = event_bus
        self._engines: dict[str, Engine] = {}

    def get_engine_names(self) -> list[str]:
        return list(self._engines)

    def get_engine(self, engine_name: str) -> Engine:
        return self._engines[engine_name]

    async def add_plugin(self, plugin: EnginePlugin) -> None:
        engine_names = _get_available_engine_names(plugin)

        api_version = plugin.get_api_version()
        if api_version > ENGINE_API_VERSION:
            self.event_bus.emit_log(
                LogLevel.WARN,
                get_message(
                    "EngineFromFutureApiDetected",
                    api_version,
                    json.dumps(engine_names),
                    ENGINE_API_VERSION,
                ),
            )

        await asyncio.gather(
            *(self._create_and_add_engine_if_valid(name, plugin) for name in engine_names)
        )

    async def _create_and_add_engine_if_valid(self, engine_name: str, plugin: EnginePlugin) -> None:
        if engine_name in self._engines:
            self._report_duplicate(engine_name)
            return

        engine_config = self.config.get_engine_config_for(engine_name)
        try:
            engine = await maybe_await(plugin.create_engine(engine_name, engine_config))
        except Exception as e:
            logger.debug(f"Engine '{engine_name}' failed to construct", exc_info=True)
            self.event_bus.emit_log(
                LogLevel.ERROR, get_message("PluginErrorFromCreateEngine", engine_name, str(e))
            )
            return

        reported_name = engine.get_name()
        if reported_name != engine_name:
            self.event_bus.emit_log(
                LogLevel.ERROR, get_message("EngineNameContradiction", engine_name, reported_name)
            )
            return

        # Another creation of the same name may have finished while we awaited
        if engine_name in self._engines:
            self._report_duplicate(engine_name)
            return

        self._engines[engine_name] = engine
        self.event_bus.emit_log(LogLevel.DEBUG, get_message("EngineAdded", engine_name))
        logger.info(f"Registered engine '{engine_name}'")
        self._listen_to_engine_events(engine_name, engine)

    def _report_duplicate(self, engine_name: str) -> None:
        self.event_bus.emit_log(LogLevel.ERROR, get_message("DuplicateEngine", engine_name))

    def _listen_to_engine_events(self, engine_name: str, engine: Engine) -> None:
        def on_log(event: EngineLogMessage) -> None:
            self.event_bus.emit_engine_log(engine_name, event.log_level, event.message)

        def on_progress(event: EngineProgressUpdate) -> None:
            self.event_bus.emit_progress(engine_name, event.percent_complete)

        engine.on_event(EngineEventType.LOG_EVENT, on_log)
        engine.on_event(EngineEventType.PROGRESS_EVENT, on_progress)


def _get_available_engine_names(plugin: EnginePlugin) -> list[str]:
    try:
        return list(plugin.get_available_engine_names())
    except Exception as e:
        raise PluginError(get_message("PluginErrorFromGetAvailableEngineNames", str(e))) from e
