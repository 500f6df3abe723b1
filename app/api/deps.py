# =============================================================================
# API Dependencies — Collaborators for Route Handlers
# =============================================================================
#
# FastAPI dependencies resolving the process-wide collaborators. Route
# handlers never import the singletons directly, so tests can swap them
# via app.dependency_overrides.
#
# A collaborator that cannot be built (missing API key) surfaces as
# 503 Service Unavailable instead of a 500.
# =============================================================================

from __future__ import annotations

import logging

from fastapi import HTTPException

from app.services.document_registry import DocumentRegistry, get_registry
from app.services.file_search import OpenAIFileSearch, get_document_searcher
from app.services.llm import LLMProvider, get_llm_provider

logger = logging.getLogger(__name__)


def registry_dependency() -> DocumentRegistry:
    return get_registry()


def searcher_dependency() -> OpenAIFileSearch:
    """OpenAI file search client, or 503 when it is not configured."""
    try:
        return get_document_searcher()
    except ValueError as e:
        logger.error("Configuration error: %s", e)
        raise HTTPException(
            status_code=503,
            detail=f"Service configuration error: {e}",
        ) from e


def llm_dependency() -> LLMProvider:
    """Configured LLM provider, or 503 when it is not configured."""
    try:
        return get_llm_provider()
    except ValueError as e:
        logger.error("Configuration error: %s", e)
        raise HTTPException(
            status_code=503,
            detail=f"Service configuration error: {e}",
        ) from e
