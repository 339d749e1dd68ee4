"""
Rule Catalog — Aggregates rule descriptions from every registered engine.

Descriptions are checked for duplicate names per engine, then configuration
overrides (severity, tags) are applied before they are wrapped as Rules.
"""

from __future__ import annotations

import asyncio
import json
import logging

from pydantic import ValidationError

from codeanalyzer.core.engine_api import DescribeOptions
from codeanalyzer.core.engine_registry import EngineRegistry
from codeanalyzer.core.errors import EngineContractError
from codeanalyzer.core.event_bus import EventBus
from codeanalyzer.core.messages import get_message
from codeanalyzer.core.utils import maybe_await
from codeanalyzer.core.workspace import Workspace
from codeanalyzer.models.config_models import CodeAnalyzerConfig
from codeanalyzer.models.engine_models import RuleDescription, SeverityLevel
from codeanalyzer.models.event_models import LogLevel

logger = logging.getLogger("codeanalyzer.catalog")

ALL_RULES_SELECTOR = "all"


class Rule:
    """A catalog entry: an engine name paired with one of its rule descriptions."""

    def __init__(self, engine_name: str, description: RuleDescription) -> None:
        self.engine_name = engine_name
        self.description = description

    @property
    def name(self) -> str:
        return self.description.name

    @property
    def severity_level(self) -> SeverityLevel:
        return self.description.severity_level

    @property
    def tags(self) -> list[str]:
        return list(self.description.tags)

    @property
    def resource_urls(self) -> list[str]:
        return list(self.description.resource_urls)

    def matches_rule_selector(self, selector: str) -> bool:
        """
        True when every ':'-separated term of the selector names this rule,
        its engine, one of its tags, or is the 'all' keyword.
        """
        selectables = {ALL_RULES_SELECTOR, self.engine_name, self.name, *self.description.tags}
        return all(term in selectables for term in selector.split(":"))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rule):
            return NotImplemented
        return (self.engine_name, self.name) == (other.engine_name, other.name)

    def __hash__(self) -> int:
        return hash((self.engine_name, self.name))

    def __repr__(self) -> str:
        return f"Rule(engine_name={self.engine_name!r}, name={self.name!r})"


class RuleCatalog:
    """Builds the flat list of rules across all engines on demand."""

    def __init__(
        self,
        registry: EngineRegistry,
        config: CodeAnalyzerConfig,
        event_bus: EventBus,
    ) -> None:
        self.registry = registry
        self.config = config
        self.event_bus = event_bus

    async def get_all_rules(self, workspace: Workspace) -> list[Rule]:
        describe_options = DescribeOptions(workspace=workspace)
        per_engine = await asyncio.gather(
            *(self._get_rules_for(name, describe_options) for name in self.registry.get_engine_names())
        )
        rules = [rule for rules in per_engine for rule in rules]
        logger.debug(f"[{workspace.workspace_id}] Catalog holds {len(rules)} rules")
        return rules

    async def _get_rules_for(self, engine_name: str, describe_options: DescribeOptions) -> list[Rule]:
        engine = self.registry.get_engine(engine_name)
        raw = await maybe_await(engine.describe_rules(describe_options))
        try:
            descriptions = [RuleDescription.model_validate(rd) for rd in raw]
        except ValidationError as e:
            raise EngineContractError(
                get_message("EngineReturnedMalformedRuleDescriptions", engine_name, str(e))
            ) from e
        _validate_rule_descriptions(engine_name, descriptions)
        return [
            Rule(engine_name, self._apply_overrides(engine_name, rd)) for rd in descriptions
        ]

    def _apply_overrides(self, engine_name: str, description: RuleDescription) -> RuleDescription:
        override = self.config.get_rule_override_for(engine_name, description.name)
        updates: dict = {}
        if override.severity is not None:
            self.event_bus.emit_log(
                LogLevel.DEBUG,
                get_message(
                    "RulePropertyOverridden",
                    "severity",
                    description.name,
                    engine_name,
                    description.severity_level.name,
                    override.severity.name,
                ),
            )
            updates["severity_level"] = override.severity
        if override.tags is not None:
            self.event_bus.emit_log(
                LogLevel.DEBUG,
                get_message(
                    "RulePropertyOverridden",
                    "tags",
                    description.name,
                    engine_name,
                    json.dumps(description.tags),
                    json.dumps(override.tags),
                ),
            )
            updates["tags"] = list(override.tags)
        return description.model_copy(update=updates) if updates else description


def _validate_rule_descriptions(engine_name: str, descriptions: list[RuleDescription]) -> None:
    seen: set[str] = set()
    for description in descriptions:
        if description.name in seen:
            raise EngineContractError(
                get_message("EngineReturnedMultipleRulesWithSameName", engine_name, description.name)
            )
        seen.add(description.name)
