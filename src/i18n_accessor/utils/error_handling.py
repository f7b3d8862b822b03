"""Standardized error handling utilities."""

import functools
import logging
from typing import TypeVar, Callable, Optional

import yaml

logger = logging.getLogger(__name__)

T = TypeVar('T')


def log_and_reraise(
    error: Exception,
    message: str,
    *,
    logger_instance: Optional[logging.Logger] = None,
    level: int = logging.ERROR,
) -> None:
    """
    Log an error with context and re-raise it.

    Must be called from inside an ``except`` block.

    Args:
        error: Exception to log and re-raise
        message: Context message to log
        logger_instance: Logger to use (defaults to module logger)
        level: Log level (default: ERROR)

    Raises:
        The original exception
    """
    log = logger_instance or logger
    log.log(level, f"{message}: {error}")
    raise error


def handle_filesystem_errors(
    operation: str,
    *,
    logger_instance: Optional[logging.Logger] = None,
) -> Callable:
    """
    Decorator to log filesystem and parse errors with consistent messaging.

    Args:
        operation: Description of the operation (e.g., "load translations")
        logger_instance: Logger to use (defaults to module logger)

    Returns:
        Decorator function
    """
    log = logger_instance or logger

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except PermissionError as e:
                log.error(f"Permission denied during {operation}: {e}")
                raise
            except FileNotFoundError as e:
                log.error(f"File not found during {operation}: {e}")
                raise
            except OSError as e:
                log.error(f"OS error during {operation}: {e}")
                raise
            except yaml.YAMLError as e:
                # Parser errors carry the line and column of the problem
                log.error(f"Invalid YAML during {operation}: {e}")
                raise
            except ValueError as e:
                log.error(f"Invalid content during {operation}: {e}")
                raise

        return wrapper

    return decorator
