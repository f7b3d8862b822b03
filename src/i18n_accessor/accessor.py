"""String-only access to a translation tree.

``TranslationAccessor`` wraps one node of a translation tree and exposes each
of its children as a callable ``KeyAccessor``::

    text = wrap(tree)
    text.errors.not_found()        # -> "missing"
    text.errors()                  # -> TranslationAccessor over "errors"
    text.items.count(5)            # -> plural form for 5

Calling a key resolves it. Reading an attribute (or item) of a key resolves
the key first, so ``text.errors.not_found()`` and ``text.errors().not_found()``
are the same lookup.

Leaves always come back as plain ``str``. Asking for a key that does not exist
raises ``InvalidKeyError``; wrapping a node whose children include raw integer
keys (plural forms without the '!!pl' marker) raises ``MissingPluralError``.
"""

import logging
from types import MappingProxyType
from typing import Any, Iterator, List, Mapping, Union

from .errors import InvalidKeyError, MissingPluralError
from .tree.nodes import Key, TranslationNode, is_plural_index, join_path

logger = logging.getLogger(__name__)


def _resolve(node: TranslationNode, key: Key, *args) -> Union[str, "TranslationAccessor"]:
    """Look up a child: wrap branches with children, stringify everything else."""
    child = node.child(key, *args)
    if child.is_branch() and child.keys():
        return TranslationAccessor(child)
    # Never hand back the tree library's own string type
    return str(child.to_display_string())


class KeyAccessor:
    """One registered key of an accessor.

    Call it to resolve the key (arguments go to the tree, so a count selects a
    plural form). Any non-dunder attribute or item is a child key of the
    resolved branch; on a leaf it raises ``InvalidKeyError``.
    """

    __slots__ = ("_node", "_key")

    def __init__(self, node: TranslationNode, key: Key):
        object.__setattr__(self, "_node", node)
        object.__setattr__(self, "_key", key)

    def __call__(self, *args) -> Union[str, "TranslationAccessor"]:
        node = object.__getattribute__(self, "_node")
        return _resolve(node, object.__getattribute__(self, "_key"), *args)

    def _descend(self, name: Any) -> "KeyAccessor":
        node = object.__getattribute__(self, "_node")
        key = object.__getattribute__(self, "_key")
        branch = _resolve(node, key)
        if not isinstance(branch, TranslationAccessor):
            raise InvalidKeyError(join_path(node.path, key), name)
        return TranslationAccessor._lookup(branch, name)

    def __getattribute__(self, name: str):
        if name.startswith("__") and name.endswith("__"):
            return object.__getattribute__(self, name)
        return KeyAccessor._descend(self, name)

    def __getitem__(self, key: Key) -> "KeyAccessor":
        return KeyAccessor._descend(self, key)

    def __setattr__(self, name: str, value: Any):
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name: str):
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __repr__(self) -> str:
        node = object.__getattribute__(self, "_node")
        key = object.__getattribute__(self, "_key")
        return f"<KeyAccessor key={join_path(node.path, key)!r}>"


class TranslationAccessor:
    """Read-only view of one translation tree node.

    Every non-dunder attribute name is a translation key: ``accessor.name``
    returns a ``KeyAccessor`` for a defined child and raises ``InvalidKeyError``
    otherwise, even for names like ``_node`` or ``wrap``. Use ``keys_of``,
    ``path_of`` and ``node_of`` to inspect an accessor.
    """

    __slots__ = ("_node", "_accessors")

    def __init__(self, node: TranslationNode):
        accessors = {}
        for key in node.keys():
            # Integer keys are plural counts, which only belong under a '!!pl' entry.
            if is_plural_index(key):
                raise MissingPluralError(node.path, key)
            accessors[key] = KeyAccessor(node, key)

        object.__setattr__(self, "_node", node)
        object.__setattr__(self, "_accessors", MappingProxyType(accessors))
        logger.debug(f"Wrapped '{node.path or '<root>'}' with {len(accessors)} keys")

    @classmethod
    def wrap(cls, node: TranslationNode) -> "TranslationAccessor":
        """Wrap a tree (or subtree) node."""
        return cls(node)

    def _lookup(self, key: Any) -> KeyAccessor:
        accessors = object.__getattribute__(self, "_accessors")
        try:
            return accessors[key]
        except (KeyError, TypeError):
            node = object.__getattribute__(self, "_node")
            raise InvalidKeyError(node.path, key) from None

    def __getattribute__(self, name: str):
        if name.startswith("__") and name.endswith("__"):
            return object.__getattribute__(self, name)
        return TranslationAccessor._lookup(self, name)

    def __getitem__(self, key: Key) -> KeyAccessor:
        return TranslationAccessor._lookup(self, key)

    def __setattr__(self, name: str, value: Any):
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name: str):
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __contains__(self, key: object) -> bool:
        return key in object.__getattribute__(self, "_accessors")

    def __iter__(self) -> Iterator[Key]:
        return iter(object.__getattribute__(self, "_accessors"))

    def __len__(self) -> int:
        return len(object.__getattribute__(self, "_accessors"))

    def __dir__(self) -> List[str]:
        return [str(k) for k in object.__getattribute__(self, "_accessors")]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TranslationAccessor):
            return NotImplemented
        return node_of(self) is node_of(other)

    def __hash__(self) -> int:
        return hash(id(node_of(self)))

    def __repr__(self) -> str:
        node = object.__getattribute__(self, "_node")
        keys = ", ".join(str(k) for k in object.__getattribute__(self, "_accessors"))
        return f"<TranslationAccessor path={node.path!r} keys=[{keys}]>"


def wrap(node: TranslationNode) -> TranslationAccessor:
    """Wrap a translation tree node; see ``TranslationAccessor``."""
    return TranslationAccessor(node)


def node_of(accessor: TranslationAccessor) -> TranslationNode:
    """Tree node wrapped by an accessor."""
    return object.__getattribute__(accessor, "_node")


def path_of(accessor: TranslationAccessor) -> str:
    """Dotted path of the node wrapped by an accessor."""
    return node_of(accessor).path


def keys_of(accessor: TranslationAccessor) -> List[Key]:
    """Keys registered on an accessor, in source order."""
    accessors: Mapping = object.__getattribute__(accessor, "_accessors")
    return list(accessors)


def resolve_key(accessor: TranslationAccessor, dotted_key: str, *args) -> Union[str, TranslationAccessor]:
    """
    Resolve a dotted key such as ``errors.not_found`` through an accessor.

    Intermediate segments are called without arguments; ``args`` go to the
    last segment only.

    Raises:
        InvalidKeyError: If any segment is not defined
        MissingPluralError: If an intermediate branch holds untagged plural forms
    """
    segments = [s for s in dotted_key.split(".") if s]
    if not segments:
        return accessor

    current: Union[str, TranslationAccessor] = accessor
    path = path_of(accessor)
    for index, segment in enumerate(segments):
        if not isinstance(current, TranslationAccessor):
            # A leaf was reached before the key ran out
            raise InvalidKeyError(path, segment)
        is_last = index == len(segments) - 1
        current = current[segment](*args) if is_last else current[segment]()
        path = f"{path}.{segment}" if path else segment
    return current
