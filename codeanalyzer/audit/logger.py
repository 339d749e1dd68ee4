"""
Audit Logger — JSON-lines record of every analyzer run.

One line per run: when it finished, the run id (the workspace id), which
engines ran, violation totals per engine, engines that crashed, and how
long the run took.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from codeanalyzer.config import settings
from codeanalyzer.core.results import RunResults
from codeanalyzer.models.api_models import RunAuditEntry

logger = logging.getLogger("codeanalyzer.audit")


def build_audit_entry(run_id: str, run_results: RunResults, duration_ms: float) -> RunAuditEntry:
    """Summarize a finished run."""
    engines = run_results.get_engine_names()
    return RunAuditEntry(
        run_id=run_id,
        engines=engines,
        violations_found=run_results.get_violation_count(),
        violations_per_engine={
            name: run_results.get_engine_run_results(name).get_violation_count() for name in engines
        },
        failed_engines=run_results.get_failed_engine_names(),
        duration_ms=round(duration_ms, 2),
    )


class AuditLogger:
    """Append-only run trail backed by a JSON-lines file."""

    def __init__(self, log_path: str | None = None) -> None:
        self.path = Path(log_path or settings.audit_log_path)

    def log(self, entry: RunAuditEntry) -> None:
        line = json.dumps(
            {"timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds"), **entry.model_dump()}
        )
        try:
            with self.path.open("a", encoding="utf-8") as out:
                out.write(f"{line}\n")
        except OSError as e:
            logger.error(f"Failed to write audit log {self.path}: {e}")

    def read_recent(self, count: int = 50, run_id: str | None = None) -> list[dict]:
        """Most recent ``count`` entries, optionally only those of one run."""
        try:
            lines = self.path.read_text(encoding="utf-8").splitlines()
        except FileNotFoundError:
            return []

        records = [record for record in map(_parse_line, lines) if record is not None]
        if run_id is not None:
            records = [r for r in records if r.get("run_id") == run_id]
        return records[-count:]


def _parse_line(line: str) -> dict | None:
    if not line.strip():
        return None
    try:
        return json.loads(line)
    except json.JSONDecodeError:
        logger.debug(f"Skipping unreadable audit line: {line[:80]}")
        return None
