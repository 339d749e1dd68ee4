"""
Regex Rules — Built-in and user-configured pattern rules.

Custom rules come from the engine config:

    {"custom_rules": {"NoTodo": {"regex": "TODO", "description": "...",
                                 "violation_message": "...",
                                 "file_extensions": [".py"],
                                 "severity": "Info", "tags": ["CodeStyle"]}}}
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from codeanalyzer.models.engine_models import RuleDescription, SeverityLevel

DEFAULT_FILE_EXTENSIONS = [
    ".cls", ".trigger", ".js", ".cjs", ".mjs", ".jsx", ".ts", ".tsx",
    ".py", ".java", ".html", ".css", ".xml", ".md", ".txt",
]


class RegexRule(BaseModel):
    """A rule whose violations are the matches of a compiled pattern."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    name: str
    pattern: re.Pattern
    description: str
    violation_message: str
    file_extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_FILE_EXTENSIONS))
    severity: SeverityLevel = SeverityLevel.MODERATE
    tags: list[str] = Field(default_factory=list)
    resource_urls: list[str] = Field(default_factory=list)
    # Group whose span becomes the reported location (0 = whole match)
    location_group: int = 0

    @field_validator("file_extensions")
    @classmethod
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in value]

    def applies_to(self, file: str) -> bool:
        return any(file.lower().endswith(ext) for ext in self.file_extensions)

    def to_rule_description(self) -> RuleDescription:
        return RuleDescription(
            name=self.name,
            severity_level=self.severity,
            tags=list(self.tags),
            description=self.description,
            resource_urls=list(self.resource_urls),
        )


TRAILING_WHITESPACE = RegexRule(
    name="TrailingWhitespace",
    pattern=re.compile(r"\S([ \t]+)$", re.MULTILINE),
    location_group=1,
    description="Detects trailing spaces and tabs at the end of lines.",
    violation_message="Found trailing whitespace at the end of a line of code.",
    severity=SeverityLevel.LOW,
    tags=["Recommended", "CodeStyle"],
)

BUILTIN_RULES: dict[str, RegexRule] = {TRAILING_WHITESPACE.name: TRAILING_WHITESPACE}


class CustomRuleConfig(BaseModel):
    regex: str
    description: str
    violation_message: str | None = None
    file_extensions: list[str] | None = None
    severity: SeverityLevel = SeverityLevel.MODERATE
    tags: list[str] = Field(default_factory=lambda: ["Recommended"])

    @field_validator("severity", mode="before")
    @classmethod
    def _parse_severity(cls, value: Any) -> Any:
        return SeverityLevel.parse(value)


def build_rules(engine_config: dict[str, Any]) -> dict[str, RegexRule]:
    """Built-in rules plus the custom rules declared in ``engine_config``."""
    rules = dict(BUILTIN_RULES)
    for name, raw in (engine_config.get("custom_rules") or {}).items():
        if name in rules:
            raise ValueError(f"Custom regex rule '{name}' clashes with a built-in rule name")
        custom = CustomRuleConfig.model_validate(raw)
        try:
            pattern = re.compile(custom.regex, re.MULTILINE)
        except re.error as e:
            raise ValueError(f"Custom regex rule '{name}' has an invalid regex: {e}") from e
        extra: dict[str, Any] = {}
        if custom.file_extensions is not None:
            extra["file_extensions"] = custom.file_extensions
        rules[name] = RegexRule(
            name=name,
            pattern=pattern,
            description=custom.description,
            violation_message=custom.violation_message
            or f"A match of the regular expression {custom.regex} was found.",
            severity=custom.severity,
            tags=custom.tags,
            **extra,
        )
    return rules
