from docworker.summarization.base import BaseSummarizer
from docworker.summarization.factory import SummarizerFactory
from docworker.summarization.gemini_client import GeminiSummarizer

__all__ = ["BaseSummarizer", "GeminiSummarizer", "SummarizerFactory"]
