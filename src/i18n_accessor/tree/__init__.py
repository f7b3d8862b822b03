"""Translation tree nodes, YAML loading and validation."""

from .loader import TranslationLoader, load_locale, load_translations, parse_translations
from .nodes import (
    DictNode,
    LeafNode,
    PluralForms,
    PluralNode,
    TranslatedString,
    TranslationNode,
    build_tree,
    is_plural_index,
)
from .validator import PluralIssue, ValidationReport, validate_tree

__all__ = [
    # Nodes
    "TranslationNode",
    "DictNode",
    "LeafNode",
    "PluralNode",
    "PluralForms",
    "TranslatedString",
    "build_tree",
    "is_plural_index",
    # Loading
    "TranslationLoader",
    "load_translations",
    "load_locale",
    "parse_translations",
    # Validation
    "ValidationReport",
    "PluralIssue",
    "validate_tree",
]
