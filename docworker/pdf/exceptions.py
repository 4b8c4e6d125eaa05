class PdfExtractionError(Exception):
    """Base exception for text extraction failures."""


class EmptyDocumentError(PdfExtractionError):
    """Raised when the input contains no bytes at all."""


class CorruptDocumentError(PdfExtractionError):
    """Raised when the input cannot be parsed as a PDF."""
