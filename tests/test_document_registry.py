# =============================================================================
# Unit Tests — Document Registry
# =============================================================================

from unittest.mock import patch

from app.services import document_registry
from app.services.document_registry import (
    DocumentInfo,
    DocumentRegistry,
    VectorStoreInfo,
    default_collections,
)


def _doc(doc_id: str, status: str = "ready") -> DocumentInfo:
    return DocumentInfo(
        id=doc_id, name=f"{doc_id}.pdf", size=10,
        uploaded_at="2026-01-01T00:00:00Z", status=status,
    )


def _registry() -> DocumentRegistry:
    return DocumentRegistry([
        VectorStoreInfo(
            id="vs-1", name="A", description="", vector_store_id="vs_aaa",
            documents=[_doc("d1"), _doc("d2")],
        ),
        VectorStoreInfo(id="vs-2", name="B", description="", vector_store_id="vs_bbb"),
        VectorStoreInfo(id="vs-3", name="C", description="", vector_store_id="vs_ccc"),
    ])


class TestVectorStoreIds:

    def test_enabled_ids_in_order(self):
        assert _registry().get_vector_store_ids() == ["vs_aaa", "vs_bbb", "vs_ccc"]

    def test_disabled_collection_is_skipped(self):
        registry = _registry()
        registry.toggle_collection_enabled("vs-2")
        assert registry.get_vector_store_ids() == ["vs_aaa", "vs_ccc"]

    def test_toggle_twice_restores(self):
        registry = _registry()
        registry.toggle_collection_enabled("vs-1")
        registry.toggle_collection_enabled("vs-1")
        assert registry.get_vector_store_ids()[0] == "vs_aaa"

    def test_empty_registry(self):
        assert DocumentRegistry().get_vector_store_ids() == []


class TestMutations:

    def test_add_document_to_unknown_collection(self):
        assert _registry().add_document("vs-x", _doc("d9")) is False

    def test_update_status_records_file_id(self):
        registry = _registry()
        registry.add_document("vs-2", _doc("d3", status="uploading"))

        assert registry.update_document_status("vs-2", "d3", "ready", "file-123")

        doc = registry.get_collection("vs-2").documents[0]
        assert doc.status == "ready"
        assert doc.openai_file_id == "file-123"

    def test_update_unknown_document(self):
        assert _registry().update_document_status("vs-1", "nope", "error") is False

    def test_toggle_document(self):
        registry = _registry()
        assert registry.toggle_document_enabled("vs-1", "d2")
        docs = registry.get_collection("vs-1").documents
        assert [d.enabled for d in docs] == [True, False]

    def test_remove_document(self):
        registry = _registry()
        assert registry.remove_document("vs-1", "d1")
        assert [d.id for d in registry.get_collection("vs-1").documents] == ["d2"]
        assert registry.remove_document("vs-1", "d1") is False

    def test_remove_collection(self):
        registry = _registry()
        assert registry.remove_collection("vs-2")
        assert [s.id for s in registry.list_collections()] == ["vs-1", "vs-3"]
        assert registry.remove_collection("vs-2") is False

    def test_add_collection_goes_last(self):
        registry = _registry()
        registry.add_collection(
            VectorStoreInfo(id="vs-4", name="D", description="", vector_store_id="vs_ddd"),
        )
        assert registry.get_vector_store_ids()[-1] == "vs_ddd"


class TestDefaultCollections:

    def test_seeds_two_default_collections(self):
        with patch.object(
            document_registry.settings, "default_project_vector_store_id", "vs_p",
        ), patch.object(
            document_registry.settings, "default_permit_vector_store_id", "vs_s",
        ):
            stores = default_collections()

        assert [s.id for s in stores] == ["vs-1", "vs-2"]
        assert [s.vector_store_id for s in stores] == ["vs_p", "vs_s"]
        assert all(s.is_default and s.enabled for s in stores)
        assert stores[0].documents[0].id == "doc-1-default"
        assert stores[1].documents[0].status == "ready"

    def test_empty_id_is_skipped(self):
        with patch.object(
            document_registry.settings, "default_project_vector_store_id", "",
        ), patch.object(
            document_registry.settings, "default_permit_vector_store_id", "vs_s",
        ):
            stores = default_collections()

        assert [s.id for s in stores] == ["vs-2"]
