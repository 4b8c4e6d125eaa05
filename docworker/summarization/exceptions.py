class SummarizationError(Exception):
    """Raised when a summary cannot be produced by the AI provider."""


class SummarizerTimeoutError(SummarizationError, TimeoutError):
    """Raised when the provider did not answer within the request timeout."""


class SummarizerRequestError(SummarizationError):
    """Raised on transport failures and non-success HTTP responses."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidResponseError(SummarizationError):
    """Raised when a successful response does not carry a usable summary."""
