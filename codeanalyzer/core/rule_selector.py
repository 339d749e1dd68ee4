"""
Rule Selector — Matches selector strings against the catalog.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from codeanalyzer.core.messages import get_message
from codeanalyzer.core.rule_catalog import Rule

DEFAULT_SELECTOR = "Recommended"


class RuleSelection:
    """Immutable partition of selected rules by engine name."""

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        self._rules_by_engine: dict[str, dict[str, Rule]] = {}
        for rule in rules:
            self._rules_by_engine.setdefault(rule.engine_name, {})[rule.name] = rule

    def get_count(self) -> int:
        return sum(len(rules) for rules in self._rules_by_engine.values())

    def get_engine_names(self) -> list[str]:
        return list(self._rules_by_engine)

    def get_rules_for(self, engine_name: str) -> list[Rule]:
        return list(self._rules_by_engine.get(engine_name, {}).values())

    def get_rule(self, engine_name: str, rule_name: str) -> Rule:
        rule = self._rules_by_engine.get(engine_name, {}).get(rule_name)
        if rule is None:
            raise LookupError(get_message("RuleDoesNotExistInSelection", engine_name, rule_name))
        return rule

    def __iter__(self) -> Iterator[Rule]:
        for rules in self._rules_by_engine.values():
            yield from rules.values()

    def __len__(self) -> int:
        return self.get_count()


def select_rules(all_rules: Iterable[Rule], selectors: list[str]) -> RuleSelection:
    """Keep every rule matching at least one selector ("Recommended" when none given)."""
    selectors = selectors if selectors else [DEFAULT_SELECTOR]
    return RuleSelection(
        rule for rule in all_rules if any(rule.matches_rule_selector(s) for s in selectors)
    )
