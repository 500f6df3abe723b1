# =============================================================================
# API Response Models — Pydantic V2 Schemas
# =============================================================================
#
# These models define the shape of data coming OUT of the API, including
# the JSON payloads of the workflow's SSE frames. Internal records
# (dataclasses in app/agents and app/services) are mapped onto them with
# `model_validate(obj, from_attributes=True)`.
#
# JSON keys are camelCase (noteType, finalOutput, analysisId, ...).
# =============================================================================

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for response bodies serialised with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class HealthResponse(BaseModel):
    """Response for GET /health — confirms the API is running."""

    status: str = "ok"
    version: str
    service: str


# ---------------------------------------------------------------------------
# Workflow
# ---------------------------------------------------------------------------


class StepEventResponse(CamelModel):
    """Payload of an SSE `step` frame."""

    name: str
    status: Literal["running", "completed", "error"]
    output: str | None = None
    analysis_id: str | None = None


class WorkflowDetailsResponse(CamelModel):
    doc1: str
    doc2: str
    doc3: str
    orchestrator: str
    category: str
    final_output: str


class WorkflowResultResponse(CamelModel):
    """One row of the report: a fact type, its value and how sure we are."""

    name: str
    value: str
    confidence: float = Field(ge=0.0, le=1.0)
    note: str
    note_type: Literal["zhoda", "problem"]
    details: WorkflowDetailsResponse


class WorkflowErrorResponse(BaseModel):
    """Payload of the terminal SSE `error` frame."""

    message: str


# ---------------------------------------------------------------------------
# Chat
# ---------------------------------------------------------------------------


class ChatResponse(CamelModel):
    """
    Response for POST /chat.

    type="message": `content` holds the assistant's answer.
    type="tool_call": the client should run POST /workflow; `preMessage`
    is shown to the user first.
    """

    type: Literal["message", "tool_call"]
    content: str | None = None
    tool: str | None = None
    reason: str | None = None
    pre_message: str | None = None


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


class DocumentInfoResponse(CamelModel):
    id: str
    name: str
    size: int
    uploaded_at: str
    status: Literal["uploading", "processing", "ready", "error"]
    enabled: bool
    openai_file_id: str | None = None


class VectorStoreResponse(CamelModel):
    id: str
    name: str
    description: str
    vector_store_id: str
    documents: list[DocumentInfoResponse]
    is_default: bool
    enabled: bool


class UploadedDocument(CamelModel):
    id: str
    name: str
    status: Literal["ready", "error"]


class UploadResponse(CamelModel):
    """Response for POST /documents — per-file outcome plus the new registry state."""

    message: str
    documents: list[UploadedDocument]
    stores: list[VectorStoreResponse]
