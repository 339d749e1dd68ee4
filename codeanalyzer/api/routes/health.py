"""
Health Check Route — GET /health
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from codeanalyzer.api.dependencies import get_code_analyzer
from codeanalyzer.config import APP_VERSION
from codeanalyzer.core.analyzer import CodeAnalyzer
from codeanalyzer.models.api_models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(analyzer: CodeAnalyzer = Depends(get_code_analyzer)):
    """Health check endpoint."""
    return HealthResponse(version=APP_VERSION, engines=analyzer.get_engine_names())
