import signal
from types import FrameType

from docworker.config.settings import Settings
from docworker.database.connection import close_pool, init_pool
from docworker.logging.logger import Log
from docworker.messaging.connection import build_connection, build_upload_queue
from docworker.processor.processor import build_processor
from docworker.worker.message_runner import MessageRunner
from docworker.worker.worker import QueueWorker


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> start consuming."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        processor = build_processor(settings)
        try:
            runner = MessageRunner(processor.handle)
            worker = QueueWorker(
                build_connection(settings),
                build_upload_queue(settings),
                runner,
                settings,
            )

            def _handle_sigterm(signum: int, frame: FrameType | None) -> None:
                Log.info(f"Received signal {signum}, stopping worker")
                worker.stop()

            signal.signal(signal.SIGTERM, _handle_sigterm)
            worker.run()
        finally:
            processor.close()
    finally:
        close_pool()


if __name__ == "__main__":
    main()
