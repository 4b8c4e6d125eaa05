from docworker.config.settings import Settings
from docworker.database.repositories.document_repository import DocumentRepository
from docworker.extraction.text_extractor import build_text_extractor
from docworker.indexing.elasticsearch_indexer import ElasticsearchIndexer
from docworker.logging.logger import Log
from docworker.messaging.events import UploadEvent
from docworker.processor.cancellation import CancellationToken, OperationCancelledError
from docworker.processor.exceptions import DocumentNotFoundError, StageError
from docworker.processor.models import ProcessingOutcome
from docworker.processor.pipeline import PipelineContext, PipelineStep, ProcessingServices
from docworker.processor.steps import (
    DownloadStep,
    ExtractTextStep,
    IndexDocumentStep,
    PersistExtractionStep,
    SummarizeStep,
)
from docworker.storage.minio_storage import MinioBlobStore
from docworker.summarization.factory import SummarizerFactory


class Processor:
    """Orchestrates the document processing pipeline for one upload event.

    Pipeline: download -> extract -> summarize -> persist -> index.
    A failing stage stops the pipeline and is reported as an outcome;
    `handle` itself never raises.
    """

    def __init__(
        self,
        services: ProcessingServices,
        steps: list[PipelineStep] | None = None,
    ) -> None:
        self._services = services
        self._steps = steps or [
            DownloadStep(),
            ExtractTextStep(),
            SummarizeStep(),
            PersistExtractionStep(),
            IndexDocumentStep(),
        ]

    @property
    def services(self) -> ProcessingServices:
        return self._services

    def handle(
        self,
        event: UploadEvent,
        cancel_token: CancellationToken | None = None,
    ) -> ProcessingOutcome:
        """Run the pipeline for `event` and report how it ended."""
        document_id = event.document_id
        Log.info(f"Processing document {document_id} ({event.file_name!r})")

        if not event.has_storage_path:
            Log.warning(f"Document {document_id} has no storage path, nothing to process")
            return ProcessingOutcome.SKIPPED_NO_STORAGE_PATH

        context = PipelineContext(
            event=event,
            services=self._services,
            cancel_token=cancel_token or CancellationToken(),
        )
        try:
            for step in self._steps:
                context = step.run(context)
            context.outcome = ProcessingOutcome.COMPLETED
            Log.info(
                "Document processed successfully",
                document_id=document_id,
                outcome=context.outcome.value,
            )
        except StageError as exc:
            context.outcome = exc.outcome
            Log.error(
                f"Document processing failed: {exc}",
                document_id=document_id,
                outcome=exc.outcome.value,
            )
        except DocumentNotFoundError as exc:
            context.outcome = ProcessingOutcome.DOCUMENT_NOT_FOUND
            Log.warning(f"Document {document_id} skipped: {exc}")
        except OperationCancelledError:
            context.outcome = ProcessingOutcome.CANCELLED
            Log.warning(
                "Document processing was cancelled",
                document_id=document_id,
                outcome=context.outcome.value,
            )
        except Exception:
            context.outcome = ProcessingOutcome.FAILED
            Log.exception(
                "Unexpected error while processing document",
                document_id=document_id,
                outcome=context.outcome.value,
            )
        return context.outcome

    def close(self) -> None:
        """Release long-lived clients held by the services."""
        self._services.summarizer.close()
        self._services.search_indexer.close()
        self._services.text_extractor.shutdown()


def build_processor(settings: Settings) -> Processor:
    """Build a Processor with all required adapters."""
    services = ProcessingServices(
        blob_store=MinioBlobStore.from_settings(settings),
        text_extractor=build_text_extractor(settings),
        summarizer=SummarizerFactory.create(settings),
        document_repository=DocumentRepository(),
        search_indexer=ElasticsearchIndexer.from_settings(settings),
        summary_max_length=settings.summary_max_length,
    )
    return Processor(services)
