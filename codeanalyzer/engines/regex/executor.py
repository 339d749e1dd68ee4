"""
Regex Executor — Scans a file and turns pattern matches into violations.
"""

from __future__ import annotations

import logging

from codeanalyzer.engines.regex.rules import RegexRule
from codeanalyzer.models.engine_models import CodeLocation, Violation

logger = logging.getLogger("codeanalyzer.engines.regex")


class RegexExecutor:
    def __init__(self, rules: list[RegexRule]) -> None:
        self.rules = rules

    def scan_file(self, file: str) -> list[Violation]:
        applicable = [r for r in self.rules if r.applies_to(file)]
        if not applicable:
            return []

        try:
            with open(file, encoding="utf-8") as f:
                content = f.read()
        except UnicodeDecodeError:
            logger.debug(f"Skipping non-text file {file}")
            return []
        except OSError as e:
            logger.debug(f"Skipping unreadable file {file}: {e}")
            return []

        line_starts = _line_starts(content)
        violations: list[Violation] = []
        for rule in applicable:
            for match in rule.pattern.finditer(content):
                start, end = match.span(rule.location_group)
                if end == start:
                    continue
                start_line, start_column = _to_line_column(line_starts, start)
                end_line, end_column = _to_line_column(line_starts, end)
                violations.append(
                    Violation(
                        rule_name=rule.name,
                        message=rule.violation_message,
                        code_locations=[
                            CodeLocation(
                                file=file,
                                start_line=start_line,
                                start_column=start_column,
                                end_line=end_line,
                                end_column=end_column,
                            )
                        ],
                        primary_location_index=0,
                        resource_urls=list(rule.resource_urls),
                    )
                )
        return violations


def _line_starts(content: str) -> list[int]:
    starts = [0]
    for i, ch in enumerate(content):
        if ch == "\n":
            starts.append(i + 1)
    return starts


def _to_line_column(line_starts: list[int], offset: int) -> tuple[int, int]:
    """Convert a 0-based offset to a 1-based (line, column)."""
    lo, hi = 0, len(line_starts) - 1
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if line_starts[mid] <= offset:
            lo = mid
        else:
            hi = mid - 1
    return lo + 1, offset - line_starts[lo] + 1
