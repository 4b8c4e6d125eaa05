from docworker.indexing.exceptions import IndexingError
from docworker.logging.logger import Log
from docworker.processor.cancellation import OperationCancelledError
from docworker.processor.exceptions import DocumentNotFoundError, StageError
from docworker.processor.models import ProcessingOutcome
from docworker.processor.pipeline import PipelineContext, PipelineStep
from docworker.summarization.models import SummaryResult


class DownloadStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.cancel_token.raise_if_cancelled()
        storage_path = context.event.storage_path or ""
        try:
            context.raw_bytes = context.services.blob_store.download(storage_path)
        except Exception as exc:
            raise StageError(
                f"Download of '{storage_path}' failed: {exc}", ProcessingOutcome.DOWNLOAD_FAILED
            ) from exc
        Log.info(f"Loaded {len(context.raw_bytes)} bytes for document {context.document_id}")
        return context


class ExtractTextStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        try:
            context.extracted_text = context.services.text_extractor.extract(
                context.raw_bytes, cancel_token=context.cancel_token
            )
        except OperationCancelledError:
            raise
        except Exception as exc:
            raise StageError(
                f"Text extraction failed: {exc}", ProcessingOutcome.EXTRACTION_FAILED
            ) from exc
        Log.info(
            f"Extracted {len(context.extracted_text)} chars from document {context.document_id}"
        )
        return context


class SummarizeStep(PipelineStep):
    """Asks the summarizer for a summary and falls back to truncation on any failure."""

    def run(self, context: PipelineContext) -> PipelineContext:
        max_length = context.services.summary_max_length
        try:
            text = context.services.summarizer.summarize(
                context.extracted_text,
                max_length=max_length,
                cancel_token=context.cancel_token,
            )
        except OperationCancelledError:
            raise
        except Exception as exc:
            Log.warning(
                f"Summarization failed for document {context.document_id}, "
                f"using fallback summary: {exc}"
            )
            context.summary = SummaryResult.fallback(context.extracted_text, max_length)
            return context

        if text:
            context.summary = SummaryResult.from_ai(text)
        else:
            context.summary = SummaryResult.fallback(context.extracted_text, max_length)
        Log.info(
            f"Summary for document {context.document_id} ready "
            f"({context.summary.source.value}, {len(context.summary.text)} chars)"
        )
        return context


class PersistExtractionStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.cancel_token.raise_if_cancelled()
        summary = context.summary.text if context.summary is not None else ""
        try:
            updated = context.services.document_repository.update_with_extraction(
                context.event.document_id, context.extracted_text, summary
            )
        except Exception as exc:
            raise StageError(
                f"Metadata update failed: {exc}", ProcessingOutcome.UPDATE_FAILED
            ) from exc
        if not updated:
            raise DocumentNotFoundError(f"Document {context.document_id} metadata not found")
        return context


class IndexDocumentStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.cancel_token.raise_if_cancelled()
        try:
            document = context.services.document_repository.find_with_details(
                context.event.document_id
            )
        except Exception as exc:
            raise StageError(
                f"Loading document for indexing failed: {exc}", ProcessingOutcome.INDEX_FAILED
            ) from exc
        if document is None:
            raise DocumentNotFoundError(
                f"Document {context.document_id} disappeared before indexing"
            )

        try:
            context.services.search_indexer.index(document)
        except IndexingError as exc:
            if exc.diagnostic:
                Log.debug(f"Search backend response: {exc.diagnostic}")
            raise StageError(str(exc), ProcessingOutcome.INDEX_FAILED) from exc
        except Exception as exc:
            raise StageError(
                f"Indexing failed: {exc}", ProcessingOutcome.INDEX_FAILED
            ) from exc
        return context
