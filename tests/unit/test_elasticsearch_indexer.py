import json
import uuid
from datetime import datetime, timezone

import httpx
import pytest

from docworker.database.models import DocumentView, MetadataRecord, NoteRecord
from docworker.indexing.elasticsearch_indexer import ElasticsearchIndexer
from docworker.indexing.exceptions import IndexingError

_DOC_ID = uuid.UUID("7d9f1c2a-0b3e-4c5d-8e6f-a1b2c3d4e5f6")


def _make_document() -> DocumentView:
    created = datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)
    return DocumentView(
        id=_DOC_ID,
        file_name="lease.pdf",
        content_type="application/pdf",
        file_size=2048,
        created_at=created,
        metadata=MetadataRecord(
            ocr_text="Lease agreement text",
            summary="Lease between A and B",
            created_at=created,
            updated_at=created,
        ),
        tags=["contracts", "property"],
        notes=[NoteRecord(id=uuid.UUID(int=1), text="Renew in May", created_at=created)],
    )


def _make_indexer(handler) -> ElasticsearchIndexer:  # type: ignore[no-untyped-def]
    return ElasticsearchIndexer(
        base_uri="http://search.test:9200/",
        index_name="documents",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


class TestElasticsearchIndexer:
    def test_puts_document_under_its_id(self) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(201, json={"result": "created"})

        _make_indexer(handler).index(_make_document())

        assert len(requests) == 1
        assert requests[0].method == "PUT"
        assert str(requests[0].url) == f"http://search.test:9200/documents/_doc/{_DOC_ID}"
        payload = json.loads(requests[0].content)
        assert payload["id"] == str(_DOC_ID)
        assert payload["fileName"] == "lease.pdf"
        assert payload["tags"] == ["contracts", "property"]
        assert payload["metadata"]["summary"] == "Lease between A and B"
        assert payload["notes"][0]["text"] == "Renew in May"

    def test_error_response_raises_with_diagnostic(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"error": {"type": "mapper_parsing_exception"}})

        with pytest.raises(IndexingError) as exc_info:
            _make_indexer(handler).index(_make_document())
        assert "HTTP 400" in str(exc_info.value)
        assert "mapper_parsing_exception" in (exc_info.value.diagnostic or "")

    def test_transport_error_raises_indexing_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused")

        with pytest.raises(IndexingError, match="connection refused"):
            _make_indexer(handler).index(_make_document())


class TestIndexPayload:
    def test_document_without_metadata_has_empty_metadata_fields(self) -> None:
        document = DocumentView(
            id=_DOC_ID, file_name="a.pdf", content_type="application/pdf", file_size=1
        )
        payload = document.to_index_payload()

        assert payload["metadata"] == {
            "ocrText": None,
            "summary": None,
            "createdAt": None,
            "updatedAt": None,
        }
        assert payload["notes"] == []
