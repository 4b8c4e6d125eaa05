from docworker.processor.models import ProcessingOutcome


class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class DocumentNotFoundError(ProcessorError):
    """Raised when a document or its metadata no longer exists in the database."""


class StageError(ProcessorError):
    """Raised by a pipeline step when its stage fails."""

    def __init__(self, message: str, outcome: ProcessingOutcome) -> None:
        super().__init__(message)
        self.outcome = outcome
