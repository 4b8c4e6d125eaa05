from collections.abc import Callable
from typing import Any

from docworker.logging.logger import Log
from docworker.messaging.events import UploadEvent, decode_upload_event
from docworker.messaging.exceptions import MessageDeserializationError
from docworker.processor.cancellation import CancellationToken

EventHandler = Callable[[UploadEvent, CancellationToken], object]


class MessageRunner:
    """Decode one broker message, hand it to the handler, then settle it.

    Undecodable messages are rejected without requeue. A message whose token
    was cancelled while it was being handled goes back to the queue for
    redelivery. Everything else is acknowledged once the handler returns,
    whatever the processing outcome.
    """

    def __init__(self, handler: EventHandler) -> None:
        self._handler = handler

    def run(self, message: Any, cancel_token: CancellationToken | None = None) -> None:
        """Execute a single message with error handling."""
        try:
            event = decode_upload_event(message.body)
        except MessageDeserializationError as exc:
            Log.error(f"Rejecting undecodable message {message.delivery_tag}: {exc}")
            message.reject(requeue=False)
            return

        Log.info(f"Received upload event for document {event.document_id}")
        token = cancel_token or CancellationToken()
        try:
            self._handler(event, token)
        except Exception:
            Log.exception(f"Handler failed for document {event.document_id}")

        if token.cancelled:
            message.requeue()
            Log.warning(f"Requeued cancelled message for document {event.document_id}")
            return
        message.ack()
        Log.debug(f"Acknowledged message for document {event.document_id}")
