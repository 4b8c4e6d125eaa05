import httpx

from docworker.config.settings import Settings
from docworker.database.models import DocumentView
from docworker.indexing.base import BaseSearchIndexer
from docworker.indexing.exceptions import IndexingError
from docworker.logging.logger import Log


class ElasticsearchIndexer(BaseSearchIndexer):
    """Writes documents to Elasticsearch through its REST document API."""

    def __init__(
        self,
        *,
        base_uri: str,
        index_name: str,
        http_client: httpx.Client | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._base_uri = base_uri.rstrip("/")
        self._index_name = index_name
        self._client = http_client or httpx.Client()
        self._timeout = httpx.Timeout(timeout_seconds)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ElasticsearchIndexer":
        return cls(
            base_uri=settings.elasticsearch_uri,
            index_name=settings.elasticsearch_index,
            http_client=httpx.Client(),
            timeout_seconds=settings.elasticsearch_timeout_seconds,
        )

    def index(self, document: DocumentView) -> None:
        url = f"{self._base_uri}/{self._index_name}/_doc/{document.id}"
        Log.info(f"Indexing document {document.id} into '{self._index_name}'")
        try:
            response = self._client.put(
                url, json=document.to_index_payload(), timeout=self._timeout
            )
        except httpx.HTTPError as exc:
            raise IndexingError(
                f"Failed to reach search backend for document {document.id}: {exc}",
                diagnostic=str(exc),
            ) from exc

        if not response.is_success:
            raise IndexingError(
                f"Failed to index document {document.id}: HTTP {response.status_code}",
                diagnostic=response.text,
            )
        Log.info(f"Document {document.id} successfully indexed")

    def close(self) -> None:
        self._client.close()
