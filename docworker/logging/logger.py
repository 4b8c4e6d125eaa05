import logging
import sys

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Client libraries that flood DEBUG output with wire-level detail.
_CHATTY_LOGGERS = ("amqp", "kombu", "botocore", "boto3", "urllib3", "httpx", "httpcore", "pdfminer")


class _ContextFormatter(logging.Formatter):
    """Appends `key=value` pairs passed to the Log methods after the message."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = getattr(record, "context", None)
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        head, sep, tail = line.partition("\n")
        return f"{head} | {pairs}{sep}{tail}"


class Log:
    """Worker-wide logging facade.

    Keyword arguments become structured context on the line, e.g.
    `Log.info("Document processed", document_id=doc_id, outcome="completed")`.
    """

    _logger: logging.Logger = logging.getLogger("docworker")

    @classmethod
    def configure(cls, log_level: str, library_level: str = "WARNING") -> None:
        """Set levels and attach the stdout handler once."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(_ContextFormatter(_FORMAT))
            cls._logger.addHandler(handler)
        for name in _CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(library_level.upper())

    @classmethod
    def debug(cls, message: str, **context: object) -> None:
        cls._logger.debug(message, extra={"context": context})

    @classmethod
    def info(cls, message: str, **context: object) -> None:
        cls._logger.info(message, extra={"context": context})

    @classmethod
    def warning(cls, message: str, **context: object) -> None:
        cls._logger.warning(message, extra={"context": context})

    @classmethod
    def error(cls, message: str, **context: object) -> None:
        cls._logger.error(message, extra={"context": context})

    @classmethod
    def exception(cls, message: str, **context: object) -> None:
        """Log at ERROR with the traceback of the exception being handled."""
        cls._logger.error(message, exc_info=True, extra={"context": context})
