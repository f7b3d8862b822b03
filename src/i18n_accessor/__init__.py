"""Strict, string-only access to translation trees."""

from .accessor import KeyAccessor, TranslationAccessor, keys_of, node_of, path_of, resolve_key, wrap
from .errors import InvalidKeyError, MissingPluralError, TextError
from .tree import build_tree, load_locale, load_translations, validate_tree

__version__ = "0.1.0"

__all__ = [
    "TranslationAccessor",
    "KeyAccessor",
    "wrap",
    "keys_of",
    "path_of",
    "node_of",
    "resolve_key",
    "TextError",
    "InvalidKeyError",
    "MissingPluralError",
    "build_tree",
    "load_translations",
    "load_locale",
    "validate_tree",
]
