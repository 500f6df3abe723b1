# =============================================================================
# Documents API — Collections, Uploads, Enable/Disable
# =============================================================================
#
# ENDPOINTS:
#   GET    /documents — list collections and their documents
#   POST   /documents — upload files into a collection (new one if no storeId)
#   PATCH  /documents — toggle a collection or one document on/off
#   DELETE /documents — remove a collection or one document
#
# Upload lifecycle per file: uploading → processing → ready, or error.
# A failing file is marked `error` and the remaining files still upload.
#
# Removing an entry only drops it from the registry; the OpenAI vector
# store and files are left as they are.
# =============================================================================

from __future__ import annotations

import logging
import time
import uuid
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from app.api.deps import registry_dependency, searcher_dependency
from app.models.requests import DocumentTargetRequest
from app.models.responses import (
    UploadedDocument,
    UploadResponse,
    VectorStoreResponse,
)
from app.services.document_registry import (
    DocumentInfo,
    DocumentRegistry,
    VectorStoreInfo,
)
from app.services.file_search import OpenAIFileSearch

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Documents"])


def _stores_response(registry: DocumentRegistry) -> list[VectorStoreResponse]:
    return [
        VectorStoreResponse.model_validate(store)
        for store in registry.list_collections()
    ]


def _sk_date(moment: datetime) -> str:
    """Date the way sk-SK renders it, e.g. '19. 10. 2026'."""
    return f"{moment.day}. {moment.month}. {moment.year}"


# ---------------------------------------------------------------------------
# GET /documents
# ---------------------------------------------------------------------------


@router.get(
    "/documents",
    response_model=list[VectorStoreResponse],
    summary="List document collections",
)
async def list_documents(
    registry: DocumentRegistry = Depends(registry_dependency),
) -> list[VectorStoreResponse]:
    return _stores_response(registry)


# ---------------------------------------------------------------------------
# POST /documents
# ---------------------------------------------------------------------------


@router.post(
    "/documents",
    response_model=UploadResponse,
    summary="Upload documents into a collection",
    description=(
        "Uploads each file to OpenAI and adds it to the target vector "
        "store. Without storeId a new collection is created first."
    ),
)
async def upload_documents(
    files: list[UploadFile] | None = File(default=None),
    store_id: str | None = Form(default=None, alias="storeId"),
    registry: DocumentRegistry = Depends(registry_dependency),
    searcher: OpenAIFileSearch = Depends(searcher_dependency),
) -> UploadResponse:
    if not files:
        raise HTTPException(
            status_code=400,
            detail="Žiadne súbory neboli nahrané",
        )

    if store_id:
        target = registry.get_collection(store_id)
        if target is None:
            raise HTTPException(
                status_code=404,
                detail="Cieľový vector store nebol nájdený",
            )
    else:
        target = await _create_collection(registry, searcher)

    uploaded: list[UploadedDocument] = []
    for upload in files:
        uploaded.append(await _upload_one(registry, searcher, target, upload))

    ready = sum(1 for doc in uploaded if doc.status == "ready")
    return UploadResponse(
        message=f"Nahraných {ready} z {len(files)} súborov",
        documents=uploaded,
        stores=_stores_response(registry),
    )


async def _create_collection(
    registry: DocumentRegistry,
    searcher: OpenAIFileSearch,
) -> VectorStoreInfo:
    today = _sk_date(datetime.now(UTC))
    try:
        vector_store_id = await searcher.create_vector_store(
            name=f"Nahraté dokumenty - {today}",
        )
    except Exception as e:
        logger.exception("Vector store creation failed: %s", e)
        raise HTTPException(
            status_code=502,
            detail=f"Chyba pri vytváraní kolekcie: {e}",
        ) from e

    store = VectorStoreInfo(
        id=f"vs-custom-{int(time.time() * 1000)}",
        name="Nahraté dokumenty",
        description=f"Dokumenty nahrané {today}",
        vector_store_id=vector_store_id,
    )
    registry.add_collection(store)
    return store


async def _upload_one(
    registry: DocumentRegistry,
    searcher: OpenAIFileSearch,
    target: VectorStoreInfo,
    upload: UploadFile,
) -> UploadedDocument:
    """Upload a single file; failures mark the document `error`."""
    doc_id = f"doc-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"
    filename = upload.filename or doc_id
    content = await upload.read()

    registry.add_document(
        target.id,
        DocumentInfo(
            id=doc_id,
            name=filename,
            size=len(content),
            uploaded_at=datetime.now(UTC).isoformat(),
            status="uploading",
        ),
    )

    try:
        file_id = await searcher.upload_file(filename, content)
        registry.update_document_status(target.id, doc_id, "processing", file_id)

        await searcher.attach_file(target.vector_store_id, file_id)
        registry.update_document_status(target.id, doc_id, "ready", file_id)
    except Exception as e:
        logger.warning("Upload of %s failed: %s", filename, e)
        registry.update_document_status(target.id, doc_id, "error")
        return UploadedDocument(id=doc_id, name=filename, status="error")

    return UploadedDocument(id=doc_id, name=filename, status="ready")


# ---------------------------------------------------------------------------
# PATCH /documents
# ---------------------------------------------------------------------------


@router.patch(
    "/documents",
    response_model=list[VectorStoreResponse],
    summary="Enable or disable a collection or document",
)
async def toggle_document(
    request: DocumentTargetRequest,
    registry: DocumentRegistry = Depends(registry_dependency),
) -> list[VectorStoreResponse]:
    if request.doc_id:
        found = registry.toggle_document_enabled(request.store_id, request.doc_id)
    else:
        found = registry.toggle_collection_enabled(request.store_id)

    if not found:
        raise HTTPException(status_code=404, detail="Položka nebola nájdená")
    return _stores_response(registry)


# ---------------------------------------------------------------------------
# DELETE /documents
# ---------------------------------------------------------------------------


@router.delete(
    "/documents",
    response_model=list[VectorStoreResponse],
    summary="Remove a collection or document",
)
async def delete_document(
    request: DocumentTargetRequest,
    registry: DocumentRegistry = Depends(registry_dependency),
) -> list[VectorStoreResponse]:
    if request.doc_id:
        found = registry.remove_document(request.store_id, request.doc_id)
    else:
        found = registry.remove_collection(request.store_id)

    if not found:
        raise HTTPException(status_code=404, detail="Položka nebola nájdená")
    return _stores_response(registry)
