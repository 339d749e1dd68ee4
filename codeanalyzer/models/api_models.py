"""
API Request/Response Models — HTTP contract schemas.

These are the public-facing Pydantic models used by the FastAPI endpoints.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from codeanalyzer.models.engine_models import CodeLocation


class RulesRequest(BaseModel):
    """Request body for /rules."""

    selectors: list[str] = Field(default_factory=list, description="Empty means 'Recommended'")
    workspace: list[str] = Field(
        default_factory=list, description="Files and folders; empty means the service cwd"
    )


class RuleInfo(BaseModel):
    engine: str
    name: str
    severity: int
    severity_name: str
    tags: list[str] = Field(default_factory=list)
    description: str = ""
    resource_urls: list[str] = Field(default_factory=list)


class RulesResponse(BaseModel):
    rules: list[RuleInfo] = Field(default_factory=list)
    count: int = 0


class RunRequest(BaseModel):
    """Request body for /run."""

    selectors: list[str] = Field(default_factory=list)
    workspace: list[str] = Field(..., min_length=1, description="Files and folders to analyze")
    path_start_points: list[str] = Field(default_factory=list)


class ViolationOut(BaseModel):
    rule: str
    severity: int
    message: str
    code_locations: list[CodeLocation]
    primary_location_index: int
    resource_urls: list[str] = Field(default_factory=list)


class EngineResultOut(BaseModel):
    engine: str
    status: str = Field(..., description="'ok' or 'unexpected_error'")
    violations: list[ViolationOut] = Field(default_factory=list)
    error: str | None = None


class EventOut(BaseModel):
    """A flattened event of the run's event stream."""

    type: str
    timestamp: datetime
    engine: str | None = None
    level: str | None = None
    message: str | None = None
    percent_complete: float | None = None


class RunAuditEntry(BaseModel):
    """Audit metadata for a run."""

    run_id: str
    engines: list[str] = Field(default_factory=list)
    violations_found: int = 0
    violations_per_engine: dict[str, int] = Field(default_factory=dict)
    failed_engines: list[str] = Field(default_factory=list)
    duration_ms: float = 0.0


class RunResponse(BaseModel):
    """Top-level response for /run."""

    run_id: str
    results: list[EngineResultOut] = Field(default_factory=list)
    violation_count: int = 0
    events: list[EventOut] = Field(default_factory=list)
    audit: RunAuditEntry | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    engines: list[str] = Field(default_factory=list)
