class OcrError(Exception):
    """Base exception for rasterization and OCR failures."""


class RasterizationError(OcrError):
    """Raised when PDF pages cannot be rendered to images."""


class OcrEngineUnavailableError(OcrError):
    """Raised when the OCR engine binary or its language data is missing."""
