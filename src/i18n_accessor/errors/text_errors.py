"""Translation key errors with call-site context."""

import inspect
import os
import re
from pathlib import Path
from typing import Optional, Union

# Everything under the package directory is accessor machinery, not a caller.
# The CLI counts as a caller.
_PACKAGE_DIR = str(Path(__file__).resolve().parent.parent) + os.sep
_CLI_DIR = _PACKAGE_DIR + "cli" + os.sep

_CALL_SITE_PATTERN = re.compile(r".*[/\\](?:src|lib|site-packages)[/\\](.+\.py):(\d+)$")

UNKNOWN_CALL_SITE = "<unknown>"


def format_call_site(filename: str, lineno: int) -> str:
    """
    Describe a source location for an error message.

    Locations under a ``src/``, ``lib/`` or ``site-packages/`` directory are
    shortened to ``File: <relative path> Line: <n>``; anything else is returned
    as the raw ``<filename>:<lineno>`` description.

    Args:
        filename: Source file of the frame
        lineno: Line number within the file

    Returns:
        Human-readable call-site description
    """
    description = f"{filename}:{lineno}"
    match = _CALL_SITE_PATTERN.match(description)
    if match:
        return f"File: {match.group(1)} Line: {match.group(2)}"
    return description


def _is_internal(filename: str) -> bool:
    path = os.path.realpath(filename)
    return path.startswith(_PACKAGE_DIR) and not path.startswith(_CLI_DIR)


def capture_call_site() -> str:
    """Describe the first stack frame outside this package."""
    frame = inspect.currentframe()
    try:
        while frame is not None:
            filename = frame.f_code.co_filename
            if not _is_internal(filename):
                return format_call_site(filename, frame.f_lineno)
            frame = frame.f_back
    finally:
        # Break the frame reference cycle
        del frame
    return UNKNOWN_CALL_SITE


class TextError(RuntimeError):
    """Base class for errors raised while accessing a translation tree.

    Attributes:
        path: Dotted path of the node being accessed ("" for the root)
        terminus: Key that caused the failure
        line: Description of the call site that triggered the failure
    """

    def __init__(
        self,
        path: str,
        terminus: Union[str, int],
        call_site: Optional[str] = None,
    ):
        self.path = path
        self.terminus = terminus
        self.line = call_site if call_site is not None else capture_call_site()
        super().__init__(self.describe())

    @property
    def key(self) -> str:
        """Full dotted key of the failed lookup."""
        if self.path:
            return f"{self.path}.{self.terminus}"
        return str(self.terminus)

    def describe(self) -> str:
        raise NotImplementedError

    def __reduce__(self):
        return (self.__class__, (self.path, self.terminus, self.line))


class InvalidKeyError(TextError):
    """A key was requested that is not defined under the wrapped node."""

    def describe(self) -> str:
        # Only engineering should see this, so it is not itself translated.
        return (
            f"i18n key {self.key} does not exist.\n"
            f"  Referenced from {self.line}"
        )


class MissingPluralError(TextError):
    """A node has integer child keys but is not tagged with '!!pl'."""

    def describe(self) -> str:
        return (
            f"i18n key {self.key} appears to reference a pluralization.\n"
            f"  Please append the plural indicator '!!pl' to the end of {self.path or '<root>'}.\n"
            f"  Referenced from {self.line}"
        )
