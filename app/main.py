# =============================================================================
# FastAPI Application
# =============================================================================
#
# Run locally:
#   uvicorn app.main:app --reload
#
# Routers:
#   /chat       — conversational entry point (app/api/chat.py)
#   /workflow   — streaming comparison workflow (app/api/workflow.py)
#   /documents  — collection registry + uploads (app/api/documents.py)
# =============================================================================

import logging

from fastapi import FastAPI

from app.api import chat, documents, workflow
from app.config import settings
from app.models.responses import HealthResponse

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
)

app.include_router(chat.router)
app.include_router(workflow.router)
app.include_router(documents.router)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health() -> HealthResponse:
    return HealthResponse(version=settings.app_version, service=settings.app_name)
