import logging
import sys
from collections.abc import Iterator

import pytest

from docworker.logging.logger import Log, _ContextFormatter


def _make_record(message: str, context: dict | None = None) -> logging.LogRecord:
    record = logging.LogRecord("docworker", logging.INFO, __file__, 1, message, None, None)
    if context is not None:
        record.context = context
    return record


@pytest.fixture
def restored_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("docworker")
    handlers, level = list(logger.handlers), logger.level
    botocore_level = logging.getLogger("botocore").level
    logger.handlers.clear()
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logging.getLogger("botocore").setLevel(botocore_level)


class TestContextFormatter:
    def test_appends_context_pairs(self) -> None:
        formatter = _ContextFormatter("%(message)s")
        record = _make_record("Document processed", {"document_id": "abc", "outcome": "completed"})

        assert formatter.format(record) == "Document processed | document_id=abc outcome=completed"

    def test_plain_message_without_context(self) -> None:
        formatter = _ContextFormatter("%(message)s")

        assert formatter.format(_make_record("Worker started", {})) == "Worker started"
        assert formatter.format(_make_record("Worker started")) == "Worker started"

    def test_context_stays_on_first_line_before_traceback(self) -> None:
        formatter = _ContextFormatter("%(message)s")
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord(
                "docworker", logging.ERROR, __file__, 1, "Failed", None, sys.exc_info()
            )
        record.context = {"outcome": "failed"}

        first, _, rest = formatter.format(record).partition("\n")
        assert first == "Failed | outcome=failed"
        assert "RuntimeError: boom" in rest


class TestConfigure:
    def test_attaches_single_handler(self, restored_logger: logging.Logger) -> None:
        Log.configure("debug")
        Log.configure("debug")

        assert len(restored_logger.handlers) == 1
        assert restored_logger.level == logging.DEBUG
        assert isinstance(restored_logger.handlers[0].formatter, _ContextFormatter)

    def test_quiets_client_libraries(self, restored_logger: logging.Logger) -> None:
        Log.configure("DEBUG", library_level="ERROR")

        assert logging.getLogger("botocore").level == logging.ERROR
