# =============================================================================
# API Request Models — Pydantic V2 Schemas
# =============================================================================
#
# These models define the shape of data coming INTO the API. JSON keys are
# camelCase on the wire (storeId, docId); snake_case names are accepted
# too.
# =============================================================================

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for request bodies using camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WorkflowRequest(BaseModel):
    """
    Request body for POST /workflow — run the document comparison.

    Example:
        {"input": "Skontroluj bilančnú tabuľku"}
    """

    input: str = Field(
        ...,
        min_length=1,
        max_length=2000,
        description="Free-text reason for running the analysis",
        examples=["Skontroluj zhodu dokumentov"],
    )


class ChatMessageIn(BaseModel):
    """One entry of the chat history sent by the client."""

    role: Literal["user", "assistant"]
    content: str = Field(..., max_length=8000)


class ChatRequest(BaseModel):
    """
    Request body for POST /chat — one conversational turn.

    The full history is sent on every turn; the server keeps no session.
    """

    messages: list[ChatMessageIn] = Field(
        ...,
        min_length=1,
        description="Conversation so far, oldest first",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "messages": [
                        {"role": "user", "content": "Čo je stavebné povolenie?"},
                    ]
                },
                {
                    "messages": [
                        {"role": "user", "content": "Skontroluj dokumenty"},
                    ]
                },
            ]
        }
    )


class DocumentTargetRequest(CamelModel):
    """
    Request body for PATCH/DELETE /documents.

    Without doc_id the whole collection is targeted.
    """

    store_id: str = Field(..., min_length=1, description="Registry collection id")
    doc_id: str | None = Field(default=None, description="Document id inside the collection")
