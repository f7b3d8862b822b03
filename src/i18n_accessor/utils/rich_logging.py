"""Console logging for the accessor and its CLI."""

import logging
import sys
from datetime import datetime
from typing import Optional, TextIO

PACKAGE_LOGGER = "i18n_accessor"


class AccessorLogFormatter(logging.Formatter):
    """Formatter showing time, level, logger and (when set) the translation key."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",      # Cyan
        "INFO": "\033[32m",       # Green
        "WARNING": "\033[33m",    # Yellow
        "ERROR": "\033[31m",      # Red
        "CRITICAL": "\033[35m",   # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with context."""
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        key_context = ""
        if hasattr(record, "i18n_key"):
            key_context = f"[{record.i18n_key}] "

        if self.use_colors:
            level_color = self.LEVEL_COLORS.get(record.levelname, "")
            reset = self.RESET
        else:
            level_color = ""
            reset = ""

        name = record.name
        if name.startswith(PACKAGE_LOGGER + "."):
            name = name[len(PACKAGE_LOGGER) + 1:]

        message = (
            f"{timestamp} {level_color}{record.levelname:8s}{reset} "
            f"[{name}] {key_context}{record.getMessage()}"
        )
        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)
        return message


def setup_logging(
    log_level: str = "INFO",
    stream: Optional[TextIO] = None,
    use_colors: Optional[bool] = None,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        stream: Output stream (defaults to stderr)
        use_colors: Force colors on/off; defaults to whether the stream is a TTY

    Returns:
        The configured package logger
    """
    stream = stream or sys.stderr
    if use_colors is None:
        use_colors = stream.isatty() if hasattr(stream, "isatty") else False

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, log_level.upper()))

    # Close existing handlers before replacing them
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(AccessorLogFormatter(use_colors=use_colors))
    logger.addHandler(handler)
    return logger
