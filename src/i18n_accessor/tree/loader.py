"""Load translation trees from YAML files."""

import logging
from pathlib import Path
from typing import Optional, Union

import yaml

from ..utils.error_handling import handle_filesystem_errors
from .nodes import DictNode, PluralForms, build_tree

logger = logging.getLogger(__name__)

# `!!pl` in a source file expands to this tag
PLURAL_TAG = "tag:yaml.org,2002:pl"

LOCALE_SUFFIXES = (".yml", ".yaml")

STR_TAG = "tag:yaml.org,2002:str"

# Key tags left alone: text and plural indexes
_TYPED_KEY_TAGS = (STR_TAG, "tag:yaml.org,2002:int")

# Implicit value types read back as the text written in the file
_TEXT_VALUE_TAGS = (
    "tag:yaml.org,2002:bool",
    "tag:yaml.org,2002:int",
    "tag:yaml.org,2002:float",
    "tag:yaml.org,2002:timestamp",
)


class TranslationLoader(yaml.SafeLoader):
    """Safe YAML loader that understands the '!!pl' plural marker.

    Mapping keys are translation keys, so YAML 1.1 scalars like ``yes``,
    ``off`` or ``1.5`` stay as the text written in the file. Integer keys
    are kept as ints because they mark plural forms. Scalar values are
    text too: ``ok: Yes`` displays "Yes", not "True".
    """

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            # Pull in `<<` merges first so merged keys are retagged too
            self.flatten_mapping(node)
        for key_node, value_node in node.value:
            if isinstance(key_node, yaml.ScalarNode) and key_node.tag not in _TYPED_KEY_TAGS:
                key_node.tag = STR_TAG
            if isinstance(value_node, yaml.ScalarNode) and value_node.tag in _TEXT_VALUE_TAGS:
                value_node.tag = STR_TAG
        return super().construct_mapping(node, deep=deep)


def _construct_plural(loader: TranslationLoader, node: yaml.Node) -> PluralForms:
    if not isinstance(node, yaml.MappingNode):
        raise yaml.constructor.ConstructorError(
            None, None,
            f"'!!pl' must tag a mapping of plural forms, found {node.id}",
            node.start_mark,
        )
    return PluralForms(loader.construct_mapping(node, deep=True))


TranslationLoader.add_constructor(PLURAL_TAG, _construct_plural)


def parse_translations(text: str, locale: Optional[str] = None) -> DictNode:
    """Build a translation tree from YAML source text."""
    data = yaml.load(text, Loader=TranslationLoader)
    return build_tree(data or {}, locale)


@handle_filesystem_errors("load translations")
def load_translations(path: Union[str, Path], locale: Optional[str] = None) -> DictNode:
    """
    Load a translation tree from a YAML file.

    Args:
        path: YAML file with nested translations
        locale: Locale code; defaults to the file stem

    Returns:
        Root node of the tree

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If the file is not valid YAML
        ValueError: If the top level is not a mapping
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        text = f.read()

    tree = parse_translations(text, locale or path.stem)
    logger.debug(f"Loaded translations from {path}")
    return tree


def load_locale(directory: Union[str, Path], locale: str) -> DictNode:
    """
    Load ``<directory>/<locale>.yml`` (or ``.yaml``).

    Raises:
        FileNotFoundError: If no file exists for the locale
    """
    directory = Path(directory)
    for suffix in LOCALE_SUFFIXES:
        candidate = directory / f"{locale}{suffix}"
        if candidate.exists():
            return load_translations(candidate, locale)
    raise FileNotFoundError(
        f"No translations for locale '{locale}' in {directory} "
        f"(looked for {', '.join(locale + s for s in LOCALE_SUFFIXES)})"
    )
