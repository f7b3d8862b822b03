"""Eager validation of a whole translation tree.

The accessor only checks the node it wraps, so a mis-tagged plural deep in the
tree surfaces the first time that subtree is reached. ``validate_tree`` walks
every branch up front, which lets the check run as a lint step over the
translation sources instead of at runtime.
"""

import logging
from dataclasses import dataclass
from typing import List, Union

from ..errors import MissingPluralError
from .nodes import TranslationNode, is_plural_index

logger = logging.getLogger(__name__)


@dataclass
class PluralIssue:
    """An integer key found under a node that is not tagged '!!pl'."""
    path: str
    terminus: Union[str, int]

    @property
    def key(self) -> str:
        return f"{self.path}.{self.terminus}" if self.path else str(self.terminus)


class ValidationReport:
    """Result of validating a translation tree."""

    def __init__(self, source: str = ""):
        self.source = source
        self.issues: List[PluralIssue] = []
        self.nodes_checked = 0

    def add_issue(self, path: str, terminus: Union[str, int]):
        """Record a missing plural marker."""
        self.issues.append(PluralIssue(path, terminus))

    @property
    def passed(self) -> bool:
        return not self.issues

    def raise_first(self, call_site: str = None) -> None:
        """Raise the first recorded issue as a MissingPluralError."""
        if self.issues:
            issue = self.issues[0]
            raise MissingPluralError(issue.path, issue.terminus, call_site=call_site)

    def __str__(self) -> str:
        title = f"Translation Report: {self.source}" if self.source else "Translation Report"
        lines = [title, "=" * 50]
        if self.passed:
            lines.append(f"✓ PASS: {self.nodes_checked} nodes checked")
            return "\n".join(lines)

        lines.append(f"✗ FAIL: {len(self.issues)} missing plural marker(s)")
        for issue in self.issues:
            lines.append(f"  - {issue.key}: append '!!pl' to {issue.path or '<root>'}")
        return "\n".join(lines)


def validate_tree(node: TranslationNode, source: str = "") -> ValidationReport:
    """
    Check every branch of a tree for integer keys.

    Plural nodes are leaves, so their integer keys are never reported.

    Args:
        node: Root of the tree (or any subtree)
        source: Label for the report, usually the file name

    Returns:
        ValidationReport listing every offending key
    """
    report = ValidationReport(source)
    pending = [node]
    while pending:
        current = pending.pop()
        if not current.is_branch():
            continue
        report.nodes_checked += 1

        branches = []
        for key in current.keys():
            if is_plural_index(key):
                report.add_issue(current.path, key)
                continue
            branches.append(current.child(key))
        # Depth-first in source order
        pending.extend(reversed(branches))

    if not report.passed:
        logger.warning(f"{len(report.issues)} missing plural marker(s) in {source or 'translation tree'}")
    return report
