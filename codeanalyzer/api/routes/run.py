"""
Run Route — POST /run

Selects rules, runs them engine by engine, and returns the results
together with the ordered event stream of the run.
"""

from __future__ import annotations

import asyncio
import logging
import time

from fastapi import APIRouter, Depends, HTTPException

from codeanalyzer.api.dependencies import get_audit_logger, get_code_analyzer
from codeanalyzer.audit.logger import AuditLogger, build_audit_entry
from codeanalyzer.core.analyzer import CodeAnalyzer
from codeanalyzer.core.errors import EngineContractError, InvalidInputError
from codeanalyzer.core.results import EngineRunResults, RunResults, UnexpectedErrorEngineRunResults
from codeanalyzer.core.run_options import RunOptions
from codeanalyzer.models.api_models import EngineResultOut, EventOut, RunRequest, RunResponse, ViolationOut
from codeanalyzer.models.event_models import (
    EngineLogEvent,
    EngineProgressEvent,
    EngineResultsEvent,
    Event,
    EventType,
    LogEvent,
)

logger = logging.getLogger("codeanalyzer.api.run")
router = APIRouter()

# The event bus is shared, so runs are serialized to keep each response's
# event stream limited to its own run
_run_lock = asyncio.Lock()


@router.post("/run", response_model=RunResponse)
async def run_rules(
    req: RunRequest,
    analyzer: CodeAnalyzer = Depends(get_code_analyzer),
    audit_logger: AuditLogger = Depends(get_audit_logger),
):
    async with _run_lock:
        events: list[EventOut] = []
        unsubscribers = [
            analyzer.on_event(event_type, lambda e: events.append(_to_event_out(e)))
            for event_type in EventType
        ]
        start = time.monotonic()
        try:
            workspace = analyzer.create_workspace(req.workspace)
            selection = await analyzer.select_rules(req.selectors, workspace)
            run_results = await analyzer.run(
                selection, RunOptions(workspace=workspace, path_start_points=req.path_start_points)
            )
        except InvalidInputError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except EngineContractError as e:
            logger.error(f"Engine contract violation during run: {e}")
            raise HTTPException(status_code=502, detail=str(e))
        finally:
            for unsubscribe in unsubscribers:
                unsubscribe()

    elapsed = (time.monotonic() - start) * 1000
    audit = build_audit_entry(workspace.workspace_id, run_results, elapsed)
    audit_logger.log(audit)

    return RunResponse(
        run_id=workspace.workspace_id,
        results=_to_engine_results_out(run_results),
        violation_count=run_results.get_violation_count(),
        events=events,
        audit=audit,
    )


def _to_engine_results_out(run_results: RunResults) -> list[EngineResultOut]:
    return [
        _to_engine_result_out(run_results.get_engine_run_results(name))
        for name in run_results.get_engine_names()
    ]


def _to_engine_result_out(results: EngineRunResults) -> EngineResultOut:
    if isinstance(results, UnexpectedErrorEngineRunResults):
        return EngineResultOut(
            engine=results.engine_name,
            status="unexpected_error",
            error=f"{type(results.error).__name__}: {results.error}",
        )
    return EngineResultOut(
        engine=results.engine_name,
        status="ok",
        violations=[
            ViolationOut(
                rule=v.rule.name,
                severity=int(v.severity_level),
                message=v.message,
                code_locations=v.code_locations,
                primary_location_index=v.primary_location_index,
                resource_urls=v.resource_urls,
            )
            for v in results.violations
        ],
    )


def _to_event_out(event: Event) -> EventOut:
    out = EventOut(type=event.type.value, timestamp=event.timestamp)
    if isinstance(event, LogEvent):
        out.level = event.log_level.name
        out.message = event.message
    elif isinstance(event, EngineLogEvent):
        out.engine = event.engine_name
        out.level = event.log_level.name
        out.message = event.message
    elif isinstance(event, EngineProgressEvent):
        out.engine = event.engine_name
        out.percent_complete = event.percent_complete
    elif isinstance(event, EngineResultsEvent):
        out.engine = event.results.engine_name
    return out
