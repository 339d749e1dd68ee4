"""
Run Results — Validated engine output tied back to the selected rules.
"""

from __future__ import annotations

from codeanalyzer.core.rule_catalog import Rule
from codeanalyzer.core.rule_selector import RuleSelection
from codeanalyzer.models import engine_models
from codeanalyzer.models.engine_models import CodeLocation, SeverityLevel


class Violation:
    """An accepted engine violation together with the rule that produced it."""

    def __init__(self, rule: Rule, raw: engine_models.Violation) -> None:
        self.rule = rule
        self.message = raw.message
        self.code_locations = list(raw.code_locations)
        self.primary_location_index = raw.primary_location_index
        # Violation-level urls win over the rule's own
        self.resource_urls = list(raw.resource_urls) or rule.resource_urls

    @property
    def primary_location(self) -> CodeLocation:
        return self.code_locations[self.primary_location_index]

    @property
    def severity_level(self) -> SeverityLevel:
        return self.rule.severity_level

    def to_dict(self) -> dict:
        return {
            "engine": self.rule.engine_name,
            "rule": self.rule.name,
            "severity": int(self.severity_level),
            "message": self.message,
            "code_locations": [loc.model_dump() for loc in self.code_locations],
            "primary_location_index": self.primary_location_index,
            "resource_urls": self.resource_urls,
        }


class EngineRunResults:
    """Violations one engine produced in a run."""

    def __init__(
        self,
        engine_name: str,
        raw_results: engine_models.EngineRunResults,
        rule_selection: RuleSelection,
    ) -> None:
        self.engine_name = engine_name
        self.violations = [
            Violation(rule_selection.get_rule(engine_name, v.rule_name), v)
            for v in raw_results.violations
        ]

    @property
    def is_unexpected_error(self) -> bool:
        return False

    def get_violation_count(self) -> int:
        return len(self.violations)

    def get_violation_count_of_severity(self, severity: SeverityLevel) -> int:
        return sum(1 for v in self.violations if v.severity_level == severity)


class UnexpectedErrorEngineRunResults(EngineRunResults):
    """Marker for an engine that raised while running; carries the cause."""

    def __init__(self, engine_name: str, error: BaseException) -> None:
        self.engine_name = engine_name
        self.error = error
        self.violations = []

    @property
    def is_unexpected_error(self) -> bool:
        return True


class RunResults:
    """Per-engine results of a run, in selection order."""

    def __init__(self) -> None:
        self._engine_run_results: dict[str, EngineRunResults] = {}

    def add_engine_run_results(self, engine_run_results: EngineRunResults) -> None:
        self._engine_run_results[engine_run_results.engine_name] = engine_run_results

    def get_engine_names(self) -> list[str]:
        return list(self._engine_run_results)

    def get_engine_run_results(self, engine_name: str) -> EngineRunResults:
        return self._engine_run_results[engine_name]

    def get_violations(self) -> list[Violation]:
        return [v for r in self._engine_run_results.values() for v in r.violations]

    def get_violation_count(self) -> int:
        return sum(r.get_violation_count() for r in self._engine_run_results.values())

    def get_violation_count_of_severity(self, severity: SeverityLevel) -> int:
        return sum(
            r.get_violation_count_of_severity(severity) for r in self._engine_run_results.values()
        )

    def get_failed_engine_names(self) -> list[str]:
        return [name for name, r in self._engine_run_results.items() if r.is_unexpected_error]

    def __len__(self) -> int:
        return len(self._engine_run_results)
