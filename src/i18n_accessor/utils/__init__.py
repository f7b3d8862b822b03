"""Shared utility functions for the accessor."""

from .error_handling import handle_filesystem_errors, log_and_reraise
from .rich_logging import AccessorLogFormatter, setup_logging

__all__ = [
    # Error handling
    "handle_filesystem_errors",
    "log_and_reraise",
    # Logging
    "AccessorLogFormatter",
    "setup_logging",
]
