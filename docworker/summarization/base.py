from abc import ABC, abstractmethod

from docworker.processor.cancellation import CancellationToken


class BaseSummarizer(ABC):
    """Contract for summary providers."""

    @abstractmethod
    def summarize(
        self,
        text: str | None,
        max_length: int = 200,
        cancel_token: CancellationToken | None = None,
    ) -> str:
        """Produce a short summary of extracted document text.

        Args:
            text: Extracted document text. Blank input yields "".
            max_length: Requested upper bound for the summary, in characters.
            cancel_token: Aborts pending attempts when cancelled.

        Returns:
            The summary text.

        Raises:
            SummarizerTimeoutError: if every attempt timed out.
            SummarizerRequestError: if the provider kept failing.
            InvalidResponseError: if a successful response could not be parsed.
            OperationCancelledError: if `cancel_token` was cancelled.
        """

    def close(self) -> None:
        """Release provider resources. No-op by default."""
