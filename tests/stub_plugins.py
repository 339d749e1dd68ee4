"""
Stub engines and plugins shared by the tests.
"""

from __future__ import annotations

from codeanalyzer.core.engine_api import (
    ConfigObject,
    DescribeOptions,
    Engine,
    EnginePluginV1,
    EngineRunOptions,
)
from codeanalyzer.models.engine_models import (
    EngineRunResults,
    RuleDescription,
    SeverityLevel,
)
from codeanalyzer.models.event_models import LogLevel


def _rule(name: str, severity: SeverityLevel, tags: list[str]) -> RuleDescription:
    return RuleDescription(
        name=name,
        severity_level=severity,
        tags=tags,
        description=f"Some description for {name}",
        resource_urls=[f"https://example.com/{name}"],
    )


class StubEngine(Engine):
    """Engine with fixed rules that returns whatever results it is given."""

    def __init__(self, name: str, rules: list[RuleDescription], config: ConfigObject | None = None) -> None:
        super().__init__()
        self._name = name
        self._rules = rules
        self.config = config or {}
        self.results_to_return: EngineRunResults | dict = EngineRunResults()
        self.describe_calls: list[DescribeOptions] = []
        self.run_calls: list[tuple[list[str], EngineRunOptions]] = []

    def get_name(self) -> str:
        return self._name

    def describe_rules(self, describe_options: DescribeOptions) -> list[RuleDescription]:
        self.describe_calls.append(describe_options)
        return [rule.model_copy() for rule in self._rules]

    async def run_rules(self, rule_names: list[str], run_options: EngineRunOptions):
        self.run_calls.append((rule_names, run_options))
        self.emit_log_event(LogLevel.FINE, f"{self._name} running {len(rule_names)} rules")
        self.emit_progress_event(50)
        return self.results_to_return


def make_stub_engine_1(config: ConfigObject | None = None) -> StubEngine:
    return StubEngine(
        "stubEngine1",
        [
            _rule("stub1RuleA", SeverityLevel.LOW, ["Recommended", "CodeStyle"]),
            _rule("stub1RuleB", SeverityLevel.HIGH, ["Security"]),
            _rule("stub1RuleC", SeverityLevel.MODERATE, ["Recommended", "Performance"]),
        ],
        config,
    )


def make_stub_engine_2(config: ConfigObject | None = None) -> StubEngine:
    return StubEngine(
        "stubEngine2",
        [
            _rule("stub2RuleA", SeverityLevel.CRITICAL, ["Recommended", "Security"]),
            _rule("stub2RuleB", SeverityLevel.INFO, []),
        ],
        config,
    )


class StubEnginePlugin(EnginePluginV1):
    """Builds stubEngine1 and stubEngine2."""

    def __init__(self) -> None:
        self.created: dict[str, StubEngine] = {}

    def get_available_engine_names(self) -> list[str]:
        return ["stubEngine1", "stubEngine2"]

    async def create_engine(self, engine_name: str, engine_config: ConfigObject) -> Engine:
        if engine_name == "stubEngine1":
            engine = make_stub_engine_1(engine_config)
        elif engine_name == "stubEngine2":
            engine = make_stub_engine_2(engine_config)
        else:
            raise ValueError(f"Unsupported engine name: {engine_name}")
        self.created[engine_name] = engine
        return engine


class SecondStubEngine1Plugin(EnginePluginV1):
    """Declares an engine name that StubEnginePlugin already provides."""

    def get_available_engine_names(self) -> list[str]:
        return ["stubEngine1"]

    def create_engine(self, engine_name: str, engine_config: ConfigObject) -> Engine:
        return make_stub_engine_1(engine_config)


class FutureEnginePlugin(EnginePluginV1):
    def get_api_version(self) -> int:
        return 99

    def get_available_engine_names(self) -> list[str]:
        return ["futureEngine"]

    def create_engine(self, engine_name: str, engine_config: ConfigObject) -> Engine:
        return StubEngine("futureEngine", [_rule("futureRule", SeverityLevel.LOW, ["Recommended"])])


class ThrowingCreateEnginePlugin(EnginePluginV1):
    """One engine that fails to construct and one that works."""

    def get_available_engine_names(self) -> list[str]:
        return ["brokenEngine", "stubEngine2"]

    def create_engine(self, engine_name: str, engine_config: ConfigObject) -> Engine:
        if engine_name == "brokenEngine":
            raise RuntimeError("SomeErrorFromCreateEngine")
        return make_stub_engine_2(engine_config)


class NameMismatchEnginePlugin(EnginePluginV1):
    def get_available_engine_names(self) -> list[str]:
        return ["expectedName"]

    def create_engine(self, engine_name: str, engine_config: ConfigObject) -> Engine:
        return StubEngine("actualName", [])


class ThrowingEngineNamesPlugin(EnginePluginV1):
    def get_available_engine_names(self) -> list[str]:
        raise RuntimeError("SomeErrorFromGetAvailableEngineNames")

    def create_engine(self, engine_name: str, engine_config: ConfigObject) -> Engine:
        raise AssertionError("should not be reached")


class DuplicateRulesEnginePlugin(EnginePluginV1):
    def get_available_engine_names(self) -> list[str]:
        return ["dupEngine"]

    def create_engine(self, engine_name: str, engine_config: ConfigObject) -> Engine:
        return StubEngine(
            "dupEngine",
            [
                _rule("sameName", SeverityLevel.LOW, ["Recommended"]),
                _rule("sameName", SeverityLevel.HIGH, []),
            ],
        )


class MalformedRulesEngine(StubEngine):
    def __init__(self) -> None:
        super().__init__("malformedEngine", [])

    def describe_rules(self, describe_options: DescribeOptions) -> list[dict]:
        self.describe_calls.append(describe_options)
        return [{"name": "missingSeverity"}]


class MalformedRulesEnginePlugin(EnginePluginV1):
    def get_available_engine_names(self) -> list[str]:
        return ["malformedEngine"]

    def create_engine(self, engine_name: str, engine_config: ConfigObject) -> Engine:
        return MalformedRulesEngine()


class ThrowingRunEngine(StubEngine):
    def __init__(self) -> None:
        super().__init__("throwingEngine", [_rule("throwingRule", SeverityLevel.HIGH, ["Recommended"])])

    async def run_rules(self, rule_names: list[str], run_options: EngineRunOptions):
        self.run_calls.append((rule_names, run_options))
        raise RuntimeError("SomeErrorFromRunRules")


class ThrowingRunEnginePlugin(EnginePluginV1):
    def get_available_engine_names(self) -> list[str]:
        return ["throwingEngine"]

    def create_engine(self, engine_name: str, engine_config: ConfigObject) -> Engine:
        return ThrowingRunEngine()


def create_engine_plugin() -> StubEnginePlugin:
    return StubEnginePlugin()
