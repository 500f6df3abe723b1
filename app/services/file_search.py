# =============================================================================
# Document Search — OpenAI Vector Stores + Responses API file_search
# =============================================================================
#
# Every document collection is an OpenAI vector store. Fact extraction
# asks the Responses API to answer an instruction with a file_search tool
# bound to exactly one vector store, so each extraction only ever sees one
# collection's documents.
#
# Also hosts the upload side used by the documents API: creating a new
# vector store, uploading a file, and attaching it to a store.
#
# ARCHITECTURE:
#   DocumentSearcher (Protocol)
#   └── OpenAIFileSearch
#       ├── search_and_extract() — one retrieval-augmented answer
#       ├── create_vector_store() — new empty collection
#       ├── upload_file()         — raw bytes → OpenAI file id
#       └── attach_file()         — add an uploaded file to a store
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Protocol

from app.config import settings

logger = logging.getLogger(__name__)

# Returned when the response carries no text answer at all
NO_ANSWER_SENTINEL = "Nepodarilo sa extrahovať informácie z dokumentu."


class DocumentSearcher(Protocol):
    """Anything that can answer an instruction against one collection."""

    async def search_and_extract(
        self,
        source_id: str,
        query: str,
        instruction: str,
    ) -> str:
        """
        Query one document collection and return the first text answer.

        Returns NO_ANSWER_SENTINEL when the remote response has no answer;
        raises on transport or service failure.
        """
        ...


class OpenAIFileSearch:
    """OpenAI-backed document search and collection management."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
    ) -> None:
        from openai import AsyncOpenAI

        resolved_key = api_key or settings.openai_api_key
        if not resolved_key:
            raise ValueError(
                "No OpenAI API key configured for document search. "
                "Set OPENAI_API_KEY in .env"
            )

        self._client = AsyncOpenAI(api_key=resolved_key)
        self._model = model or settings.extraction_model

        logger.info("Initialized OpenAIFileSearch (model=%s)", self._model)

    async def search_and_extract(
        self,
        source_id: str,
        query: str,
        instruction: str,
    ) -> str:
        response = await self._client.responses.create(
            model=self._model,
            tools=[
                {
                    "type": "file_search",
                    "vector_store_ids": [source_id],
                }
            ],
            input=f"{instruction}\n\nVyhľadaj informácie o: {query}",
        )
        return extract_response_text(response)

    async def create_vector_store(self, name: str) -> str:
        """Create an empty vector store and return its id."""
        vector_store = await self._client.vector_stores.create(name=name)
        logger.info("Created vector store %s (%s)", vector_store.id, name)
        return vector_store.id

    async def upload_file(self, filename: str, content: bytes) -> str:
        """Upload raw file bytes for retrieval use and return the file id."""
        uploaded = await self._client.files.create(
            file=(filename, content),
            purpose="assistants",
        )
        logger.info(
            "Uploaded %s (%d bytes) → %s", filename, len(content), uploaded.id,
        )
        return uploaded.id

    async def attach_file(self, vector_store_id: str, file_id: str) -> None:
        """Add an uploaded file to a vector store."""
        await self._client.vector_stores.files.create(
            vector_store_id=vector_store_id,
            file_id=file_id,
        )
        logger.info("Attached %s to vector store %s", file_id, vector_store_id)


def extract_response_text(response: Any) -> str:
    """
    Pull the answer text out of a Responses API result.

    Order: first `output_text` part of the first message item that has
    one, then the aggregated `output_text`, then NO_ANSWER_SENTINEL.
    """
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for part in getattr(item, "content", None) or []:
            text = getattr(part, "text", None)
            if getattr(part, "type", None) == "output_text" and text:
                return text

    output_text = getattr(response, "output_text", None)
    if output_text:
        return output_text

    return NO_ANSWER_SENTINEL


# ---------------------------------------------------------------------------
# Factory Function
# ---------------------------------------------------------------------------

_searcher: OpenAIFileSearch | None = None


def get_document_searcher() -> OpenAIFileSearch:
    """Lazy singleton; the SDK client owns its own connection pool."""
    global _searcher
    if _searcher is None:
        _searcher = OpenAIFileSearch()
    return _searcher
