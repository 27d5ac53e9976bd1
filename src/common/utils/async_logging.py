import logging
import logging.handlers
import queue
import atexit
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Global reference to prevent garbage collection
_queue_listener: Optional[logging.handlers.QueueListener] = None
_shutdown_registered = False


def setup_async_logging(
    log_level=logging.INFO,
    log_file_path: Optional[str] = None,
    console: bool = True,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> None:
    """
    Route all log records through a queue so gesture callbacks never block on I/O.

    Args:
        log_level: The logging level (e.g., logging.INFO)
        log_file_path: Optional rotating log file
        console: Also write records to stderr
        max_bytes: Maximum size of each log file before rotation
        backup_count: Number of backup files to keep
    """
    global _queue_listener, _shutdown_registered

    # Calling setup twice must not leave a second listener thread running
    shutdown_async_logging()

    log_queue = queue.Queue(-1)
    queue_handler = logging.handlers.QueueHandler(log_queue)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    root_logger.addHandler(queue_handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handlers = []

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    if log_file_path:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    _queue_listener = logging.handlers.QueueListener(log_queue, *handlers, respect_handler_level=True)
    _queue_listener.start()

    if not _shutdown_registered:
        atexit.register(shutdown_async_logging)
        _shutdown_registered = True

    logging.getLogger(__name__).debug("Asynchronous logging started (level=%s)", logging.getLevelName(log_level))


def setup_logging_from_config(config, log_file_path: Optional[str] = None) -> None:
    """Start async logging at the level configured in [General] log_level."""
    setup_async_logging(log_level=config.log_level, log_file_path=log_file_path)
    config.log_config_location()


def shutdown_async_logging():
    """Drain the queue and stop the listener thread (idempotent)."""
    global _queue_listener

    if _queue_listener is None:
        return

    listener = _queue_listener
    _queue_listener = None
    # stop() processes everything still queued before joining the thread
    listener.stop()

    for handler in listener.handlers:
        handler.flush()
        handler.close()


def is_async_logging_active() -> bool:
    return _queue_listener is not None
