from kombu import Connection, Queue

from docworker.logging.logger import Log
from docworker.messaging.events import UploadEvent, encode_upload_event


class MessagePublisher:
    """Publishes upload events after a document record has been created."""

    def __init__(self, connection: Connection, queue: Queue) -> None:
        self._connection = connection
        self._queue = queue

    def publish(self, event: UploadEvent) -> None:
        """Publish one persistent event to the upload queue.

        Raises:
            kombu/amqp connection errors after the publish retries are exhausted.
        """
        body = encode_upload_event(event)
        with self._connection.Producer() as producer:
            producer.publish(
                body,
                exchange="",
                routing_key=self._queue.name,
                declare=[self._queue],
                content_type="application/json",
                content_encoding="utf-8",
                delivery_mode=2,
                retry=True,
                retry_policy={"max_retries": 3},
            )
        Log.info(
            f"Published upload event for document {event.document_id} "
            f"to queue '{self._queue.name}'"
        )
