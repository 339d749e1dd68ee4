"""
Analyzer Configuration Models — Per-engine config and per-rule overrides.

The mapping is treated as already loaded; reading it from disk is the
caller's concern.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from codeanalyzer.models.engine_models import SeverityLevel


class RuleOverride(BaseModel):
    """Optional replacement values for a rule's description fields."""

    severity: SeverityLevel | None = None
    tags: list[str] | None = None

    @field_validator("severity", mode="before")
    @classmethod
    def _parse_severity(cls, value: Any) -> Any:
        if value is None:
            return None
        return SeverityLevel.parse(value)


class CodeAnalyzerConfig(BaseModel):
    """Engine configuration and rule overrides keyed by engine name."""

    engines: dict[str, dict[str, Any]] = Field(
        default_factory=dict, description="Opaque config mapping per engine name"
    )
    rules: dict[str, dict[str, RuleOverride]] = Field(
        default_factory=dict, description="engine name -> rule name -> override"
    )

    def get_engine_config_for(self, engine_name: str) -> dict[str, Any]:
        return dict(self.engines.get(engine_name, {}))

    def get_rule_override_for(self, engine_name: str, rule_name: str) -> RuleOverride:
        return self.rules.get(engine_name, {}).get(rule_name) or RuleOverride()
