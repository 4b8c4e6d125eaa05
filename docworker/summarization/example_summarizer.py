"""Offline summary provider.

Use this module as a reference when adding new providers: implement
BaseSummarizer and register the provider in SummarizerFactory.
"""

from docworker.processor.cancellation import CancellationToken
from docworker.summarization.base import BaseSummarizer
from docworker.summarization.models import truncate_summary


class ExampleSummarizer(BaseSummarizer):
    """Summarizes by keeping the first line of text. No network calls."""

    def summarize(
        self,
        text: str | None,
        max_length: int = 200,
        cancel_token: CancellationToken | None = None,
    ) -> str:
        if text is None or not text.strip():
            return ""
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        first_line = next(line.strip() for line in text.splitlines() if line.strip())
        return truncate_summary(first_line, max_length)
