"""
Code Analyzer FastAPI Application.

  GET  /health → status, version, registered engines
  POST /rules  → rules picked by a list of selectors
  POST /run    → run the selected rules against a workspace
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from codeanalyzer.api.routes.health import router as health_router
from codeanalyzer.api.routes.rules import router as rules_router
from codeanalyzer.api.routes.run import router as run_router
from codeanalyzer.config import APP_VERSION, settings
from codeanalyzer.log import setup_logging

setup_logging(settings.log_level)
logger = logging.getLogger("codeanalyzer")

app = FastAPI(
    title="Code Analyzer",
    description="Multi-engine static analysis orchestrator",
    version=APP_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(rules_router)
app.include_router(run_router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    raw = (await request.body()).decode("utf-8", errors="replace")
    errors = jsonable_encoder(exc.errors())
    logger.warning(f"Rejected {request.method} {request.url.path}: {errors} | body: {raw[:500]}")
    return JSONResponse(status_code=422, content={"detail": errors, "body": raw[:100]})
