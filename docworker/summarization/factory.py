import httpx

from docworker.config.settings import Settings
from docworker.summarization.base import BaseSummarizer
from docworker.summarization.example_summarizer import ExampleSummarizer
from docworker.summarization.gemini_client import GeminiSummarizer


class SummarizerFactory:
    """Creates the configured summary provider."""

    PROVIDERS = ("example", "gemini")

    @classmethod
    def create(cls, settings: Settings) -> BaseSummarizer:
        provider = settings.summarizer_provider.strip().lower()
        if provider == "example":
            return ExampleSummarizer()
        if provider == "gemini":
            if not settings.gemini_api_key.strip():
                raise ValueError("gemini_api_key is required for summarizer_provider=gemini")
            return GeminiSummarizer(
                api_key=settings.gemini_api_key,
                model=settings.gemini_model,
                api_endpoint=settings.gemini_api_endpoint,
                http_client=httpx.Client(),
                max_retries=settings.gemini_max_retries,
                timeout_seconds=settings.gemini_timeout_seconds,
                max_prompt_length=settings.gemini_max_prompt_length,
                retry_base_delay_seconds=settings.gemini_retry_base_delay_seconds,
                retry_max_delay_seconds=settings.gemini_retry_max_delay_seconds,
            )
        raise ValueError(
            f"Unknown summarizer provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
