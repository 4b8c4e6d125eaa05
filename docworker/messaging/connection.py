from kombu import Connection, Queue

from docworker.config.settings import Settings


def build_connection(settings: Settings) -> Connection:
    """Create a lazy kombu connection to the configured RabbitMQ broker."""
    return Connection(
        settings.rabbitmq_url,
        connect_timeout=settings.rabbitmq_reconnect_delay_seconds or None,
        heartbeat=30,
    )


def build_upload_queue(settings: Settings) -> Queue:
    """Durable, non-exclusive upload queue reached through the default exchange."""
    return Queue(
        settings.rabbitmq_queue_name,
        routing_key=settings.rabbitmq_queue_name,
        durable=True,
        exclusive=False,
        auto_delete=False,
    )
