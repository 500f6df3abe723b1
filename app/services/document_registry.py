# =============================================================================
# Document Registry — In-Memory Collection Store
# =============================================================================
#
# Tracks the document collections (OpenAI vector stores) the assistant may
# search, the documents uploaded into each, and which of them are enabled.
#
# State lives for the lifetime of the process only. The registry is the
# single writer of its own data: every mutation goes through a method
# here, and readers get the same objects back (callers must not mutate
# them directly).
#
# The comparison workflow only reads one thing from here:
# get_vector_store_ids(): enabled collections, in registry order.
# =============================================================================

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Literal

from app.config import settings

logger = logging.getLogger(__name__)

DocumentStatus = Literal["uploading", "processing", "ready", "error"]


# ---------------------------------------------------------------------------
# Data Structures
# ---------------------------------------------------------------------------


@dataclass
class DocumentInfo:
    """One uploaded (or pre-indexed) document inside a collection."""

    id: str
    name: str
    size: int
    uploaded_at: str  # ISO-8601
    status: DocumentStatus
    enabled: bool = True
    openai_file_id: str | None = None


@dataclass
class VectorStoreInfo:
    """A document collection backed by one OpenAI vector store."""

    id: str
    name: str
    description: str
    vector_store_id: str
    documents: list[DocumentInfo] = field(default_factory=list)
    is_default: bool = False
    enabled: bool = True


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class DocumentRegistry:
    """
    Ordered, in-memory collection of VectorStoreInfo entries.

    Lookups are by the registry's own `id` (e.g. "vs-1"), not by the
    OpenAI vector store id. Mutators return False when the target does
    not exist instead of raising.
    """

    def __init__(self, stores: list[VectorStoreInfo] | None = None) -> None:
        self._stores: list[VectorStoreInfo] = list(stores or [])
        self._lock = threading.Lock()

    # --- Reads ---

    def list_collections(self) -> list[VectorStoreInfo]:
        with self._lock:
            return list(self._stores)

    def get_collection(self, store_id: str) -> VectorStoreInfo | None:
        with self._lock:
            return self._find_store(store_id)

    def get_vector_store_ids(self) -> list[str]:
        """Enabled collections' vector store ids, in priority order."""
        with self._lock:
            return [s.vector_store_id for s in self._stores if s.enabled]

    # --- Writes ---

    def add_collection(self, store: VectorStoreInfo) -> None:
        with self._lock:
            self._stores.append(store)
        logger.info("Registered collection %s (%s)", store.id, store.name)

    def add_document(self, store_id: str, doc: DocumentInfo) -> bool:
        with self._lock:
            store = self._find_store(store_id)
            if store is None:
                return False
            store.documents.append(doc)
            return True

    def update_document_status(
        self,
        store_id: str,
        doc_id: str,
        status: DocumentStatus,
        openai_file_id: str | None = None,
    ) -> bool:
        with self._lock:
            doc = self._find_document(store_id, doc_id)
            if doc is None:
                return False
            doc.status = status
            if openai_file_id:
                doc.openai_file_id = openai_file_id
        logger.debug("Document %s/%s → %s", store_id, doc_id, status)
        return True

    def toggle_collection_enabled(self, store_id: str) -> bool:
        with self._lock:
            store = self._find_store(store_id)
            if store is None:
                return False
            store.enabled = not store.enabled
            return True

    def toggle_document_enabled(self, store_id: str, doc_id: str) -> bool:
        with self._lock:
            doc = self._find_document(store_id, doc_id)
            if doc is None:
                return False
            doc.enabled = not doc.enabled
            return True

    def remove_document(self, store_id: str, doc_id: str) -> bool:
        with self._lock:
            store = self._find_store(store_id)
            if store is None:
                return False
            for index, doc in enumerate(store.documents):
                if doc.id == doc_id:
                    del store.documents[index]
                    return True
            return False

    def remove_collection(self, store_id: str) -> bool:
        with self._lock:
            for index, store in enumerate(self._stores):
                if store.id == store_id:
                    del self._stores[index]
                    logger.info("Removed collection %s", store_id)
                    return True
            return False

    # --- Internal (caller holds the lock) ---

    def _find_store(self, store_id: str) -> VectorStoreInfo | None:
        for store in self._stores:
            if store.id == store_id:
                return store
        return None

    def _find_document(self, store_id: str, doc_id: str) -> DocumentInfo | None:
        store = self._find_store(store_id)
        if store is None:
            return None
        for doc in store.documents:
            if doc.id == doc_id:
                return doc
        return None


# ---------------------------------------------------------------------------
# Default Collections
# ---------------------------------------------------------------------------


def default_collections() -> list[VectorStoreInfo]:
    """The two pre-indexed collections, skipping any without an id."""
    seeds = [
        (
            "vs-1",
            "Projektová dokumentácia",
            "Hlavná projektová dokumentácia stavby",
            settings.default_project_vector_store_id,
            "doc-1-default",
            "Projektová dokumentácia (predindexovaný)",
        ),
        (
            "vs-2",
            "Stavebné povolenie",
            "Dokumenty stavebného povolenia a rozhodnutia",
            settings.default_permit_vector_store_id,
            "doc-2-default",
            "Stavebné povolenie (predindexovaný)",
        ),
    ]

    stores = []
    for store_id, name, description, vs_id, doc_id, doc_name in seeds:
        if not vs_id:
            continue
        stores.append(
            VectorStoreInfo(
                id=store_id,
                name=name,
                description=description,
                vector_store_id=vs_id,
                documents=[
                    DocumentInfo(
                        id=doc_id,
                        name=doc_name,
                        size=0,
                        uploaded_at="2026-01-01T00:00:00Z",
                        status="ready",
                    )
                ],
                is_default=True,
            )
        )
    return stores


_registry: DocumentRegistry | None = None


def get_registry() -> DocumentRegistry:
    """Process-wide registry, seeded with the default collections."""
    global _registry
    if _registry is None:
        _registry = DocumentRegistry(default_collections())
    return _registry


def reset_registry(stores: list[VectorStoreInfo] | None = None) -> DocumentRegistry:
    """Replace the process-wide registry (tests, CLI)."""
    global _registry
    _registry = DocumentRegistry(
        default_collections() if stores is None else stores
    )
    return _registry
