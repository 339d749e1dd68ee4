"""
FastAPI Dependencies — Shared singletons injected via Depends().
"""

from __future__ import annotations

import asyncio
import logging
from functools import lru_cache

from codeanalyzer.audit.logger import AuditLogger
from codeanalyzer.config import settings
from codeanalyzer.core.analyzer import CodeAnalyzer
from codeanalyzer.log import bridge_events_to_logging

logger = logging.getLogger("codeanalyzer.api")

_analyzer: CodeAnalyzer | None = None
_analyzer_lock = asyncio.Lock()


@lru_cache
def get_audit_logger() -> AuditLogger:
    """Shared audit logger singleton."""
    return AuditLogger()


async def build_code_analyzer(plugin_refs: list[str]) -> CodeAnalyzer:
    """Create an analyzer and register every configured plugin module."""
    analyzer = CodeAnalyzer(settings.analyzer_config)
    bridge_events_to_logging(analyzer)
    for plugin_ref in plugin_refs:
        await analyzer.dynamically_add_engine_plugin(plugin_ref)
    logger.info(f"Code analyzer ready with engines {analyzer.get_engine_names()}")
    return analyzer


async def get_code_analyzer() -> CodeAnalyzer:
    """Shared analyzer singleton, built on first use."""
    global _analyzer
    if _analyzer is None:
        async with _analyzer_lock:
            if _analyzer is None:
                _analyzer = await build_code_analyzer(settings.engine_plugins)
    return _analyzer
