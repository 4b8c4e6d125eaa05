class IndexingError(Exception):
    """Raised when a document cannot be written to the search index."""

    def __init__(self, message: str, diagnostic: str | None = None) -> None:
        super().__init__(message)
        self.diagnostic = diagnostic
