# =============================================================================
# Chat API — Conversational Entry Point
# =============================================================================
#
# POST /chat takes the whole conversation and returns either the
# assistant's answer or a tool_call telling the client to run the
# document analysis (POST /workflow). Routing lives in
# app/agents/intent.py; this endpoint only validates and maps errors.
# =============================================================================

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.agents.intent import respond
from app.api.deps import llm_dependency
from app.models.requests import ChatRequest
from app.models.responses import ChatResponse
from app.services.llm import LLMProvider

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Chat"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    response_model_exclude_none=True,
    summary="Send a chat message",
)
async def chat_endpoint(
    request: ChatRequest,
    llm: LLMProvider = Depends(llm_dependency),
) -> ChatResponse:
    """
    Error handling:
    - Missing API key → 503 Service Unavailable
    - LLM API errors → 502 Bad Gateway
    """
    messages = [message.model_dump() for message in request.messages]

    try:
        reply = await respond(messages, llm=llm)
    except ValueError as e:
        logger.error("Configuration error: %s", e)
        raise HTTPException(
            status_code=503,
            detail=f"Service configuration error: {e}",
        ) from e
    except Exception as e:
        logger.exception("Chat failed: %s", e)
        raise HTTPException(
            status_code=502,
            detail=f"LLM service error: {e}",
        ) from e

    return ChatResponse.model_validate(reply)
