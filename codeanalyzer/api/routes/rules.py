"""
Rules Route — POST /rules

Lists the rules a set of selectors picks out of every registered engine.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from codeanalyzer.api.dependencies import get_code_analyzer
from codeanalyzer.core.analyzer import CodeAnalyzer
from codeanalyzer.core.errors import EngineContractError, InvalidInputError
from codeanalyzer.models.api_models import RuleInfo, RulesRequest, RulesResponse

logger = logging.getLogger("codeanalyzer.api.rules")
router = APIRouter()


@router.post("/rules", response_model=RulesResponse)
async def list_rules(req: RulesRequest, analyzer: CodeAnalyzer = Depends(get_code_analyzer)):
    try:
        workspace = analyzer.create_workspace(req.workspace) if req.workspace else None
        selection = await analyzer.select_rules(req.selectors, workspace)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except EngineContractError as e:
        logger.error(f"Engine contract violation while describing rules: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    rules = [
        RuleInfo(
            engine=rule.engine_name,
            name=rule.name,
            severity=int(rule.severity_level),
            severity_name=rule.severity_level.name.title(),
            tags=rule.tags,
            description=rule.description.description,
            resource_urls=rule.resource_urls,
        )
        for rule in selection
    ]
    return RulesResponse(rules=rules, count=len(rules))
