"""Errors raised when translation keys are missing or mis-tagged."""

from .text_errors import (
    InvalidKeyError,
    MissingPluralError,
    TextError,
    capture_call_site,
    format_call_site,
)

__all__ = [
    "TextError",
    "InvalidKeyError",
    "MissingPluralError",
    "capture_call_site",
    "format_call_site",
]
