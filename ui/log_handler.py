"""
Logging bridge from the conversion worker to the UI log view.

Records are formatted and handed to a callback, which normally
publishes them on the ``log`` PubSub topic.
"""
from __future__ import annotations

import logging
from typing import Callable

UI_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
UI_DATE_FORMAT = "%H:%M:%S"


class PubSubLogHandler(logging.Handler):
    """Logging handler that forwards formatted messages to a callback."""

    def __init__(self, callback: Callable[[str], None]):
        """
        Args:
            callback: Receives each formatted log line.
        """
        super().__init__()
        self.callback = callback
        self.setFormatter(logging.Formatter(UI_LOG_FORMAT, datefmt=UI_DATE_FORMAT))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.callback(self.format(record))
        except Exception:
            self.handleError(record)


def setup_logger(
    name: str,
    callback: Callable[[str], None],
    level: int = logging.INFO
) -> logging.Logger:
    """
    Attach a PubSub handler to a named logger.

    Existing handlers on the logger are replaced, so calling this again
    (e.g. when the view is rebuilt) does not duplicate output. Records
    still propagate to the root logger for console output.

    Args:
        name: Logger name.
        callback: Function to receive log messages.
        level: Logging level (default: INFO).

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = PubSubLogHandler(callback)
    handler.setLevel(level)
    logger.addHandler(handler)

    return logger
