import threading


class OperationCancelledError(Exception):
    """Raised when a cancellation token is triggered while work is in flight."""


class CancellationToken:
    """Cooperative cancellation flag shared by every stage of one message."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelledError("Operation was cancelled")

    def sleep(self, seconds: float) -> None:
        """Sleep up to `seconds`, waking early and raising if cancelled."""
        if self._event.wait(timeout=max(0.0, seconds)):
            raise OperationCancelledError("Operation was cancelled")


def ensure_token(token: CancellationToken | None) -> CancellationToken:
    """Return the given token, or a fresh one that is never cancelled."""
    return token if token is not None else CancellationToken()
