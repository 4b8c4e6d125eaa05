import socket
import time
from typing import Any

from kombu import Connection, Queue

from docworker.config.settings import Settings
from docworker.logging.logger import Log
from docworker.processor.cancellation import CancellationToken
from docworker.worker.message_runner import MessageRunner


class QueueWorker:
    """Consume loop: drain -> dispatch -> ack, reconnecting when the broker drops."""

    def __init__(
        self,
        connection: Connection,
        queue: Queue,
        runner: MessageRunner,
        settings: Settings,
    ) -> None:
        self._connection = connection
        self._queue = queue
        self._runner = runner
        self._settings = settings
        self._stopping = False
        self._messages_done = 0
        self._current_token: CancellationToken | None = None

    def run(self, max_messages: int | None = None) -> None:
        """Main consume loop. Runs until interrupted or stopped.

        If max_messages is set, stop after handling that many messages (for testing).
        """
        Log.info(f"Worker started, consuming from queue '{self._queue.name}'")
        self._messages_done = 0
        try:
            while not self._should_stop(max_messages):
                try:
                    self._consume(max_messages)
                except self._connection.connection_errors as exc:
                    delay = self._settings.rabbitmq_reconnect_delay_seconds
                    Log.warning(f"Broker connection lost, reconnecting in {delay}s: {exc}")
                    self._connection.collect()
                    time.sleep(delay)
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")
        finally:
            self._connection.release()
        Log.info(f"Worker stopped after {self._messages_done} message(s)")

    def stop(self) -> None:
        """Ask the loop to exit and cancel the in-flight message, if any."""
        self._stopping = True
        if self._current_token is not None:
            self._current_token.cancel()

    def _should_stop(self, max_messages: int | None) -> bool:
        if self._stopping:
            return True
        return max_messages is not None and self._messages_done >= max_messages

    def _consume(self, max_messages: int | None) -> None:
        with self._connection.Consumer(
            queues=[self._queue],
            on_message=self._on_message,
            auto_declare=True,
        ) as consumer:
            consumer.qos(prefetch_count=self._settings.rabbitmq_prefetch_count)
            Log.info(f"Subscribed to queue '{self._queue.name}'")
            while not self._should_stop(max_messages):
                try:
                    self._connection.drain_events(
                        timeout=self._settings.rabbitmq_poll_timeout_seconds
                    )
                except socket.timeout:
                    continue

    def _on_message(self, message: Any) -> None:
        token = CancellationToken()
        self._current_token = token
        try:
            self._runner.run(message, token)
        finally:
            self._current_token = None
            self._messages_done += 1
