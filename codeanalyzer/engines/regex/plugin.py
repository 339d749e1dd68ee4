"""
Regex Engine Plugin — A single-purpose text scanner engine named "regex".
"""

from __future__ import annotations

import asyncio
import os

from codeanalyzer.core.engine_api import (
    ConfigObject,
    DescribeOptions,
    Engine,
    EnginePluginV1,
    EngineRunOptions,
)
from codeanalyzer.engines.regex.executor import RegexExecutor
from codeanalyzer.engines.regex.rules import build_rules
from codeanalyzer.models.engine_models import EngineRunResults, RuleDescription, Violation
from codeanalyzer.models.event_models import LogLevel


class RegexEnginePlugin(EnginePluginV1):
    def get_available_engine_names(self) -> list[str]:
        return [RegexEngine.NAME]

    def create_engine(self, engine_name: str, engine_config: ConfigObject) -> Engine:
        if engine_name == RegexEngine.NAME:
            return RegexEngine(engine_config)
        raise ValueError(f"Unsupported engine name: {engine_name}")


class RegexEngine(Engine):
    NAME = "regex"

    def __init__(self, engine_config: ConfigObject | None = None) -> None:
        super().__init__()
        self.rules = build_rules(engine_config or {})

    def get_name(self) -> str:
        return RegexEngine.NAME

    async def describe_rules(self, describe_options: DescribeOptions) -> list[RuleDescription]:
        return [rule.to_rule_description() for rule in self.rules.values()]

    async def run_rules(self, rule_names: list[str], run_options: EngineRunOptions) -> EngineRunResults:
        unknown = [name for name in rule_names if name not in self.rules]
        if unknown:
            raise ValueError(f"The regex engine has no rules named: {', '.join(unknown)}")

        files = await run_options.workspace.get_expanded_files()
        if run_options.path_start_points:
            roots = {p.file for p in run_options.path_start_points}
            files = [f for f in files if _is_within_any(f, roots)]

        self.emit_log_event(LogLevel.FINE, f"Scanning {len(files)} files with rules {rule_names}")
        executor = RegexExecutor([self.rules[name] for name in rule_names])
        violations: list[Violation] = []
        for i, file in enumerate(files):
            violations.extend(await asyncio.to_thread(executor.scan_file, file))
            self.emit_progress_event(100.0 * (i + 1) / len(files))
        return EngineRunResults(violations=violations)


def _is_within_any(file: str, roots: set[str]) -> bool:
    return any(file == root or file.startswith(root.rstrip(os.sep) + os.sep) for root in roots)


def create_engine_plugin() -> RegexEnginePlugin:
    return RegexEnginePlugin()
