# =============================================================================
# Unit Tests — OpenAI File Search
# =============================================================================
#
# Response-text extraction and the request shapes sent to the Responses,
# Files and Vector Stores APIs. The AsyncOpenAI client is a mock.
# =============================================================================

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.services import file_search
from app.services.file_search import (
    NO_ANSWER_SENTINEL,
    OpenAIFileSearch,
    extract_response_text,
)


def _run(coro):
    """Helper to run async functions in sync tests."""
    return asyncio.run(coro)


def _message(*texts: str) -> SimpleNamespace:
    return SimpleNamespace(
        type="message",
        content=[SimpleNamespace(type="output_text", text=t) for t in texts],
    )


class TestExtractResponseText:

    def test_first_message_text_wins(self):
        response = SimpleNamespace(
            output=[
                SimpleNamespace(type="file_search_call", content=None),
                _message("Počet podzemných podlaží: 2", "druhý"),
            ],
            output_text="agregovaný text",
        )
        assert extract_response_text(response) == "Počet podzemných podlaží: 2"

    def test_falls_back_to_output_text(self):
        response = SimpleNamespace(
            output=[SimpleNamespace(type="file_search_call")],
            output_text="agregovaný text",
        )
        assert extract_response_text(response) == "agregovaný text"

    def test_empty_message_text_is_skipped(self):
        response = SimpleNamespace(output=[_message("")], output_text="")
        assert extract_response_text(response) == NO_ANSWER_SENTINEL

    def test_no_output_at_all(self):
        assert extract_response_text(SimpleNamespace()) == NO_ANSWER_SENTINEL


class TestOpenAIFileSearch:

    def _searcher(self) -> OpenAIFileSearch:
        searcher = OpenAIFileSearch(api_key="test-key", model="gpt-4.1")
        searcher._client = MagicMock()
        return searcher

    def test_search_binds_exactly_one_vector_store(self):
        searcher = self._searcher()
        create = AsyncMock(return_value=SimpleNamespace(output=[_message("ok")]))
        searcher._client.responses.create = create

        answer = _run(searcher.search_and_extract(
            "vs_abc", "počet podlaží objektu", "Zisti počet podlaží.",
        ))

        assert answer == "ok"
        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "gpt-4.1"
        assert kwargs["tools"] == [
            {"type": "file_search", "vector_store_ids": ["vs_abc"]},
        ]
        assert kwargs["input"].startswith("Zisti počet podlaží.")
        assert kwargs["input"].endswith("počet podlaží objektu")

    def test_transport_errors_propagate(self):
        searcher = self._searcher()
        searcher._client.responses.create = AsyncMock(
            side_effect=ConnectionError("reset"),
        )

        with pytest.raises(ConnectionError):
            _run(searcher.search_and_extract("vs_abc", "q", "i"))

    def test_upload_and_attach(self):
        searcher = self._searcher()
        searcher._client.files.create = AsyncMock(
            return_value=SimpleNamespace(id="file-1"),
        )
        searcher._client.vector_stores.files.create = AsyncMock()

        file_id = _run(searcher.upload_file("a.pdf", b"data"))
        _run(searcher.attach_file("vs_abc", file_id))

        searcher._client.files.create.assert_awaited_once_with(
            file=("a.pdf", b"data"), purpose="assistants",
        )
        searcher._client.vector_stores.files.create.assert_awaited_once_with(
            vector_store_id="vs_abc", file_id="file-1",
        )

    def test_create_vector_store(self):
        searcher = self._searcher()
        searcher._client.vector_stores.create = AsyncMock(
            return_value=SimpleNamespace(id="vs_new"),
        )
        assert _run(searcher.create_vector_store("Nahraté dokumenty")) == "vs_new"

    def test_missing_key_raises(self):
        with patch.object(file_search.settings, "openai_api_key", ""):
            with pytest.raises(ValueError, match="OPENAI_API_KEY"):
                OpenAIFileSearch()
