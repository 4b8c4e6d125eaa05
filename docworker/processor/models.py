from enum import Enum


class ProcessingOutcome(str, Enum):
    """How handling of one upload event ended."""

    COMPLETED = "completed"
    SKIPPED_NO_STORAGE_PATH = "skipped_no_storage_path"
    DOWNLOAD_FAILED = "download_failed"
    EXTRACTION_FAILED = "extraction_failed"
    DOCUMENT_NOT_FOUND = "document_not_found"
    UPDATE_FAILED = "update_failed"
    INDEX_FAILED = "index_failed"
    CANCELLED = "cancelled"
    FAILED = "failed"
