"""In-memory translation tree nodes."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Union

logger = logging.getLogger(__name__)

Key = Union[str, int]

# Fallback form for counts with no explicit plural entry
PLURAL_FALLBACK_KEY = "n"


def is_plural_index(key: Any) -> bool:
    """Return True for raw integer keys (bool is not an index)."""
    return isinstance(key, int) and not isinstance(key, bool)


def join_path(path: str, key: Key) -> str:
    """Append a key to a dotted path."""
    return f"{path}.{key}" if path else str(key)


def normalise_key(key: Any) -> Key:
    """Keep str and integer keys, stringify any other scalar key."""
    if isinstance(key, str) or is_plural_index(key):
        return key
    return str(key)


def normalise_keys(path: str, mapping: Mapping) -> Dict[Key, Any]:
    """
    Normalise the keys of a mapping, keeping source order.

    Raises:
        ValueError: If two keys normalise to the same key (``True`` and ``"True"``)
    """
    result: Dict[Key, Any] = {}
    for raw_key, value in mapping.items():
        key = normalise_key(raw_key)
        if key in result:
            raise ValueError(f"Duplicate key {join_path(path, key)!r} (from {raw_key!r})")
        result[key] = value
    return result


class TranslatedString(str):
    """A translated value that remembers where it came from."""

    def __new__(cls, value: str, path: str = "", locale: Optional[str] = None):
        obj = super().__new__(cls, value)
        obj.path = path
        obj.locale = locale
        return obj

    def __repr__(self) -> str:
        return f"TranslatedString({str.__repr__(self)}, path={self.path!r})"


class PluralForms(dict):
    """Mapping of plural forms tagged with '!!pl' in the source."""


class TranslationNode(ABC):
    """A point in a translation tree."""

    def __init__(self, path: str = "", locale: Optional[str] = None):
        self.path = path
        self.locale = locale

    @abstractmethod
    def keys(self) -> List[Key]:
        """Child keys in source order."""

    @abstractmethod
    def child(self, key: Key, *args) -> "TranslationNode":
        """
        Look up a child node.

        Args:
            key: Child key
            *args: Lookup arguments (a count selects a plural form)

        Raises:
            KeyError: If the key is not defined
        """

    @abstractmethod
    def is_branch(self) -> bool:
        """Whether this node can hold children."""

    @abstractmethod
    def to_display_string(self) -> str:
        """Value of this node for display."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self.path!r})"


class LeafNode(TranslationNode):
    """A single translated value."""

    def __init__(self, path: str, value: Any, locale: Optional[str] = None):
        super().__init__(path, locale)
        self.value = value

    def keys(self) -> List[Key]:
        return []

    def child(self, key: Key, *args) -> TranslationNode:
        raise KeyError(f"{join_path(self.path, key)}: {self.path} is a leaf")

    def is_branch(self) -> bool:
        return False

    def to_display_string(self) -> str:
        text = "" if self.value is None else str(self.value)
        return TranslatedString(text, self.path, self.locale)


class PluralNode(TranslationNode):
    """Plural forms of one entry, keyed by count (plus an optional 'n' fallback).

    The node is a leaf from the tree's point of view: its integer keys are
    legitimate and are never exposed as translatable children.
    """

    def __init__(self, path: str, forms: Mapping, locale: Optional[str] = None):
        super().__init__(path, locale)
        self.forms: Dict[Key, Any] = normalise_keys(path, forms)

    def keys(self) -> List[Key]:
        return list(self.forms)

    def child(self, key: Key, *args) -> TranslationNode:
        if key not in self.forms:
            raise KeyError(join_path(self.path, key))
        return LeafNode(join_path(self.path, key), self.forms[key], self.locale)

    def is_branch(self) -> bool:
        return False

    def select(self, count: int) -> TranslationNode:
        """Pick the form for a count: exact match, then 'n', then the highest index."""
        if count in self.forms:
            return self.child(count)
        if PLURAL_FALLBACK_KEY in self.forms:
            return self.child(PLURAL_FALLBACK_KEY)
        indexes = [k for k in self.forms if is_plural_index(k)]
        if not indexes:
            return LeafNode(self.path, None, self.locale)
        return self.child(max(indexes))

    def to_display_string(self) -> str:
        value = self.forms.get(PLURAL_FALLBACK_KEY)
        text = "" if value is None else str(value)
        return TranslatedString(text, self.path, self.locale)


class DictNode(TranslationNode):
    """A namespace of translations backed by a mapping."""

    def __init__(self, path: str, mapping: Mapping, locale: Optional[str] = None):
        super().__init__(path, locale)
        self._children: Dict[Key, TranslationNode] = {}
        for key, value in normalise_keys(path, mapping).items():
            self._children[key] = make_node(join_path(path, key), value, locale)

    def keys(self) -> List[Key]:
        return list(self._children)

    def child(self, key: Key, *args) -> TranslationNode:
        try:
            node = self._children[key]
        except KeyError:
            raise KeyError(f"{join_path(self.path, key)} is not defined") from None

        if isinstance(node, PluralNode) and args and is_plural_index(args[0]):
            return node.select(args[0])
        return node

    def is_branch(self) -> bool:
        return True

    def to_display_string(self) -> str:
        return TranslatedString("", self.path, self.locale)


def make_node(path: str, value: Any, locale: Optional[str] = None) -> TranslationNode:
    """Build the node type matching a raw translation value."""
    if isinstance(value, PluralForms):
        return PluralNode(path, value, locale)
    if isinstance(value, Mapping):
        return DictNode(path, value, locale)
    return LeafNode(path, value, locale)


def build_tree(data: Mapping, locale: Optional[str] = None) -> DictNode:
    """
    Build a translation tree from nested mappings.

    Args:
        data: Nested translations; ``PluralForms`` values become plural entries
        locale: Locale code recorded on every node

    Returns:
        Root node of the tree

    Raises:
        ValueError: If data is not a mapping
    """
    if not isinstance(data, Mapping):
        raise ValueError(
            f"Translations must be a mapping at the top level, got {type(data).__name__}"
        )
    root = DictNode("", data, locale)
    logger.debug(f"Built translation tree with {len(root.keys())} top-level keys (locale={locale})")
    return root
