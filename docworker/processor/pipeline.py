from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from docworker.database.repositories.document_repository import DocumentRepository
from docworker.extraction.text_extractor import TextExtractor
from docworker.indexing.base import BaseSearchIndexer
from docworker.messaging.events import UploadEvent
from docworker.processor.cancellation import CancellationToken
from docworker.processor.models import ProcessingOutcome
from docworker.storage.base import BaseBlobStore
from docworker.summarization.base import BaseSummarizer
from docworker.summarization.models import SummaryResult


@dataclass(slots=True)
class ProcessingServices:
    """Collaborators used by the pipeline steps."""

    blob_store: BaseBlobStore
    text_extractor: TextExtractor
    summarizer: BaseSummarizer
    document_repository: DocumentRepository
    search_indexer: BaseSearchIndexer
    summary_max_length: int = 200


@dataclass(slots=True)
class PipelineContext:
    event: UploadEvent
    services: ProcessingServices
    cancel_token: CancellationToken = field(default_factory=CancellationToken)
    raw_bytes: bytes = b""
    extracted_text: str = ""
    summary: SummaryResult | None = None
    outcome: ProcessingOutcome | None = None

    @property
    def document_id(self) -> str:
        return str(self.event.document_id)


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
