"""Summaries from Google's Gemini generateContent REST API."""

import json
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Any

import httpx
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from docworker.logging.logger import Log
from docworker.processor.cancellation import CancellationToken, ensure_token
from docworker.summarization.base import BaseSummarizer
from docworker.summarization.exceptions import (
    InvalidResponseError,
    SummarizerRequestError,
    SummarizerTimeoutError,
)
from docworker.summarization.prompt_loader import load_prompt_template

_RETRYABLE_ERRORS = (SummarizerTimeoutError, SummarizerRequestError)
_CANCEL_POLL_SECONDS = 0.1


class GeminiSummarizer(BaseSummarizer):
    """Calls Gemini with bounded retries and exponential backoff.

    Timeouts, transport errors and non-2xx responses (429 and 5xx included)
    are retried up to `max_retries` attempts in total. A 200 response that
    cannot be parsed is not retried.

    Each attempt runs on a request thread and is bounded by `timeout_seconds`
    end to end. Cancelling the token abandons the attempt in flight; its
    response, if it ever arrives, is discarded.
    """

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        api_endpoint: str,
        http_client: httpx.Client | None = None,
        max_retries: int = 3,
        timeout_seconds: float = 30,
        max_prompt_length: int = 10000,
        retry_base_delay_seconds: float = 1.0,
        retry_max_delay_seconds: float = 30.0,
        prompt_template_path: Path | None = None,
    ) -> None:
        if not 1 <= max_retries <= 10:
            raise ValueError("max_retries must be between 1 and 10")
        self._api_key = api_key
        self._url = f"{api_endpoint.rstrip('/')}/{model}:generateContent"
        self._client = http_client or httpx.Client()
        self._max_retries = max_retries
        self._timeout_seconds = timeout_seconds
        self._timeout = httpx.Timeout(timeout_seconds)
        self._executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="gemini")
        self._max_prompt_length = max_prompt_length
        self._retry_base_delay_seconds = retry_base_delay_seconds
        self._retry_max_delay_seconds = retry_max_delay_seconds
        self._prompt_template = load_prompt_template(prompt_template_path)

    def summarize(
        self,
        text: str | None,
        max_length: int = 200,
        cancel_token: CancellationToken | None = None,
    ) -> str:
        if text is None or not text.strip():
            return ""
        token = ensure_token(cancel_token)

        if len(text) > self._max_prompt_length:
            Log.info(
                f"Truncating summary input from {len(text)} to "
                f"{self._max_prompt_length} characters"
            )
            text = text[: self._max_prompt_length]

        payload = self._build_payload(text, max_length)
        retrying = Retrying(
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(
                multiplier=self._retry_base_delay_seconds,
                max=self._retry_max_delay_seconds,
            ),
            retry=retry_if_exception_type(_RETRYABLE_ERRORS),
            sleep=token.sleep,
            before_sleep=self._log_retry,
            reraise=True,
        )
        summary: str = retrying(self._attempt, payload, token)
        Log.info(f"Gemini returned a {len(summary)} character summary")
        return summary

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
        self._client.close()

    def _build_payload(self, text: str, max_length: int) -> dict[str, Any]:
        prompt = self._prompt_template.format(max_length=max_length, text=text)
        return {"contents": [{"parts": [{"text": prompt}]}]}

    def _attempt(self, payload: dict[str, Any], token: CancellationToken) -> str:
        token.raise_if_cancelled()
        future: Future[httpx.Response] = self._executor.submit(self._post, payload)
        deadline = time.monotonic() + self._timeout_seconds
        while True:
            if token.cancelled:
                future.cancel()
                Log.info("Gemini request abandoned after cancellation")
                token.raise_if_cancelled()
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                future.cancel()
                raise SummarizerTimeoutError(
                    f"Gemini request exceeded {self._timeout_seconds}s"
                )
            done, _pending = wait([future], timeout=min(_CANCEL_POLL_SECONDS, remaining))
            if done:
                response = future.result()
                break

        if not response.is_success:
            raise SummarizerRequestError(
                f"Gemini returned HTTP {response.status_code}: {response.text[:500]}",
                status_code=response.status_code,
            )
        return self._parse_response(response.text)

    def _post(self, payload: dict[str, Any]) -> httpx.Response:
        try:
            response = self._client.post(
                self._url,
                json=payload,
                headers={"x-goog-api-key": self._api_key},
                timeout=self._timeout,
            )
        except httpx.TimeoutException as exc:
            raise SummarizerTimeoutError(f"Gemini request timed out: {exc}") from exc
        except httpx.TransportError as exc:
            raise SummarizerRequestError(f"Gemini transport error: {exc}") from exc
        return response

    @staticmethod
    def _parse_response(raw: str) -> str:
        try:
            body = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise InvalidResponseError(f"Invalid JSON response: {exc}") from exc

        candidates = body.get("candidates") if isinstance(body, dict) else None
        if not isinstance(candidates, list) or not candidates:
            raise InvalidResponseError("Response contains no candidates")
        content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
            raise InvalidResponseError("First candidate has no content parts")
        summary = parts[0].get("text")
        if not isinstance(summary, str) or not summary.strip():
            raise InvalidResponseError("First content part has no text")
        return summary.strip()

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        Log.warning(
            f"Gemini attempt {retry_state.attempt_number} failed ({error}), "
            f"retrying in {delay:.1f}s"
        )
