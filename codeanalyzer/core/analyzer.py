"""
Code Analyzer — Orchestrates rule engines over a workspace.

Flow:
1. Plugins register engines (created concurrently)
2. Rules are gathered from every engine and selected by selector strings
3. Selected engines run one at a time, in selection order
4. Each engine's output is validated and wrapped before the next starts

Events (logs, progress, results) are published on the event bus while the
steps run.
"""

from __future__ import annotations

import json
import logging
import os
import time
from typing import Any, Callable

from pydantic import ValidationError

from codeanalyzer.core.engine_api import EnginePlugin, EngineRunOptions
from codeanalyzer.core.engine_registry import EngineRegistry
from codeanalyzer.core.errors import EngineContractError
from codeanalyzer.core.event_bus import EventBus
from codeanalyzer.core.messages import get_message
from codeanalyzer.core.plugin_loader import ImportlibPluginLoader, PluginLoader
from codeanalyzer.core.result_validator import validate_engine_run_results
from codeanalyzer.core.results import (
    EngineRunResults,
    RunResults,
    UnexpectedErrorEngineRunResults,
)
from codeanalyzer.core.rule_catalog import Rule, RuleCatalog
from codeanalyzer.core.rule_selector import RuleSelection, select_rules
from codeanalyzer.core.run_options import RunOptions, extract_engine_run_options, validate_file_or_folder
from codeanalyzer.core.utils import (
    Clock,
    KeyedCache,
    RandomUniqueIdGenerator,
    UniqueIdGenerator,
    maybe_await,
)
from codeanalyzer.core.workspace import Workspace
from codeanalyzer.models import engine_models
from codeanalyzer.models.config_models import CodeAnalyzerConfig
from codeanalyzer.models.event_models import EventType, LogLevel

logger = logging.getLogger("codeanalyzer.analyzer")


class CodeAnalyzer:
    """Entry point for registering engines, selecting rules and running them."""

    def __init__(
        self,
        config: CodeAnalyzerConfig | None = None,
        plugin_loader: PluginLoader | None = None,
    ) -> None:
        self.config = config or CodeAnalyzerConfig()
        self.plugin_loader: PluginLoader = plugin_loader or ImportlibPluginLoader()
        self._unique_id_generator: UniqueIdGenerator = RandomUniqueIdGenerator()
        self._event_bus = EventBus()
        self._registry = EngineRegistry(self.config, self._event_bus)
        self._catalog = RuleCatalog(self._registry, self.config, self._event_bus)
        # Default workspace is tied to the working directory it was built for
        self._cwd_workspace: KeyedCache[Workspace] = KeyedCache(
            lambda cwd: self.create_workspace([str(cwd)])
        )

    # For testing purposes only
    def _set_clock(self, clock: Clock) -> None:
        self._event_bus.clock = clock

    def _set_unique_id_generator(self, unique_id_generator: UniqueIdGenerator) -> None:
        self._unique_id_generator = unique_id_generator

    def create_workspace(self, files_and_folders: list[str]) -> Workspace:
        """Validate and absolutize the inputs into a new Workspace."""
        workspace_id = self._unique_id_generator.get_unique_id("workspace")
        absolute: list[str] = []
        for file_or_folder in files_and_folders:
            path = validate_file_or_folder(file_or_folder)
            if path not in absolute:
                absolute.append(path)
        return Workspace(workspace_id, absolute)

    async def add_engine_plugin(self, engine_plugin: EnginePlugin) -> None:
        await self._registry.add_plugin(engine_plugin)

    async def dynamically_add_engine_plugin(self, module_ref: str) -> None:
        """Load a plugin module by reference and register its engines."""
        engine_plugin = self.plugin_loader.load(module_ref)
        await self.add_engine_plugin(engine_plugin)

    def get_engine_names(self) -> list[str]:
        return self._registry.get_engine_names()

    def on_event(self, event_type: EventType, callback: Callable[[Any], None]) -> Callable[[], None]:
        """Subscribe to analyzer events. Returns an unsubscribe function."""
        return self._event_bus.subscribe(event_type, callback)

    async def get_all_rules(self, workspace: Workspace | None = None) -> list[Rule]:
        return await self._catalog.get_all_rules(workspace or self._default_workspace())

    async def select_rules(
        self, selectors: list[str], workspace: Workspace | None = None
    ) -> RuleSelection:
        all_rules = await self.get_all_rules(workspace)
        selection = select_rules(all_rules, selectors)
        logger.debug(
            f"Selected {selection.get_count()} of {len(all_rules)} rules "
            f"across engines {selection.get_engine_names()}"
        )
        return selection

    async def run(self, rule_selection: RuleSelection, run_options: RunOptions) -> RunResults:
        engine_run_options = extract_engine_run_options(run_options)
        self._event_bus.emit_log(
            LogLevel.DEBUG,
            get_message("RunningWithRunOptions", json.dumps(engine_run_options.to_log_dict())),
        )

        start = time.monotonic()
        run_results = RunResults()
        for engine_name in rule_selection.get_engine_names():
            self._event_bus.emit_progress(engine_name, 0)

            engine_run_results = await self._run_engine_and_validate_results(
                engine_name, rule_selection, engine_run_options
            )
            run_results.add_engine_run_results(engine_run_results)

            self._event_bus.emit_progress(engine_name, 100)
            self._event_bus.emit_results(engine_run_results)

        elapsed = (time.monotonic() - start) * 1000
        logger.info(
            f"[{run_options.workspace.workspace_id}] Ran {len(run_results)} engines: "
            f"{run_results.get_violation_count()} violations ({elapsed:.1f}ms)"
        )
        return run_results

    async def _run_engine_and_validate_results(
        self,
        engine_name: str,
        rule_selection: RuleSelection,
        engine_run_options: EngineRunOptions,
    ) -> EngineRunResults:
        rules_to_run = [rule.name for rule in rule_selection.get_rules_for(engine_name)]
        self._event_bus.emit_log(
            LogLevel.DEBUG,
            get_message("RunningEngineWithRules", engine_name, json.dumps(rules_to_run)),
        )
        engine = self._registry.get_engine(engine_name)

        try:
            raw = await maybe_await(engine.run_rules(rules_to_run, engine_run_options))
        except Exception as e:
            logger.warning(f"Engine '{engine_name}' raised during run_rules", exc_info=True)
            self._event_bus.emit_log(LogLevel.ERROR, get_message("EngineRunFailed", engine_name, str(e)))
            return UnexpectedErrorEngineRunResults(engine_name, e)

        try:
            api_results = engine_models.EngineRunResults.model_validate(raw)
        except ValidationError as e:
            raise EngineContractError(
                get_message("EngineReturnedMalformedResults", engine_name, str(e))
            ) from e

        validate_engine_run_results(engine_name, api_results, rule_selection)
        return EngineRunResults(engine_name, api_results, rule_selection)

    def _default_workspace(self) -> Workspace:
        return self._cwd_workspace.get(os.getcwd())
