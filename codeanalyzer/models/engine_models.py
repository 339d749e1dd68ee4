"""
Engine Data Models — Rule descriptions, violations, and code locations.

These are the shapes exchanged between the core and engine plugins.
Engine output is untrusted: line, column and index fields are strict ints
(no bool or string coercion), the structural invariants are enforced by the
result validator.
"""

from __future__ import annotations

from enum import Enum, IntEnum

from pydantic import BaseModel, Field, StrictInt


class SeverityLevel(IntEnum):
    """Ordered severity; lower value means more severe."""

    CRITICAL = 1
    HIGH = 2
    MODERATE = 3
    LOW = 4
    INFO = 5

    @classmethod
    def parse(cls, value: "SeverityLevel | int | str") -> "SeverityLevel":
        """Accept a level, its number, or its (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                return cls(int(text))
            try:
                return cls[text.upper()]
            except KeyError:
                raise ValueError(f"Unknown severity level: {value!r}") from None
        return cls(value)


class RuleType(str, Enum):
    STANDARD = "Standard"
    PATH_BASED = "PathBased"
    UNEXPECTED_ERROR = "UnexpectedError"


class RuleDescription(BaseModel):
    """A single rule as described by an engine."""

    name: str = Field(..., description="Rule name, unique within its engine")
    severity_level: SeverityLevel
    type: RuleType = RuleType.STANDARD
    tags: list[str] = Field(default_factory=list)
    description: str = ""
    resource_urls: list[str] = Field(default_factory=list)


class CodeLocation(BaseModel):
    """A 1-based source range inside a file."""

    file: str
    start_line: StrictInt
    start_column: StrictInt
    end_line: StrictInt | None = None
    end_column: StrictInt | None = None


class Violation(BaseModel):
    """A single rule match reported by an engine."""

    rule_name: str
    message: str
    code_locations: list[CodeLocation] = Field(default_factory=list)
    primary_location_index: StrictInt = 0
    resource_urls: list[str] = Field(default_factory=list)


class EngineRunResults(BaseModel):
    """Raw output of an engine's run_rules call."""

    violations: list[Violation] = Field(default_factory=list)


class PathPoint(BaseModel):
    """A scoped analysis entry point: a file and optionally one method."""

    file: str
    method_name: str | None = None
