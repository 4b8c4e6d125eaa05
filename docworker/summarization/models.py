from dataclasses import dataclass
from enum import Enum

FALLBACK_ELLIPSIS = "..."


class SummarySource(str, Enum):
    AI = "ai"
    FALLBACK = "fallback"


def truncate_summary(text: str, max_length: int) -> str:
    """Local summary: the first `max_length` characters, plus '...' if cut."""
    if len(text) > max_length:
        return text[:max_length] + FALLBACK_ELLIPSIS
    return text


@dataclass(frozen=True)
class SummaryResult:
    """A document summary together with the path that produced it."""

    text: str
    source: SummarySource

    @classmethod
    def from_ai(cls, text: str) -> "SummaryResult":
        return cls(text=text, source=SummarySource.AI)

    @classmethod
    def fallback(cls, extracted_text: str, max_length: int) -> "SummaryResult":
        return cls(text=truncate_summary(extracted_text, max_length), source=SummarySource.FALLBACK)

    @property
    def is_fallback(self) -> bool:
        return self.source is SummarySource.FALLBACK
