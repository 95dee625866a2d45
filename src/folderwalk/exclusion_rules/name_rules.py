"""Exact base-name exclusion rules."""

from typing import Iterable, Optional, Set

from .base_rules import BaseExclusionRules


class NameExclusionRules(BaseExclusionRules):
    """Exclude entries whose base name is a member of a fixed set of names.

    Matching is an exact, case-sensitive comparison against the last path component;
    there is no globbing. A trailing slash (used for directory candidates) is ignored.

    Attributes:
        names (Set[str]): The names to exclude.

    Example:
        >>> rules = NameExclusionRules([".git", "node_modules"])
        >>> rules.exclude(".git/")
        True
        >>> rules.exclude("src/node_modules/")
        True
        >>> rules.exclude("node_modules.txt")
        False
        >>> rules.add_rule("dist")
        >>> rules.exclude("dist")
        True
    """

    def __init__(self, names: Optional[Iterable[str]] = None) -> None:
        self.names: Set[str] = set(names) if names is not None else set()

    def exclude(self, path: str) -> bool:
        name = path.rstrip("/").rsplit("/", 1)[-1]
        return name in self.names

    def has_rules(self) -> bool:
        return bool(self.names)

    def add_rule(self, rule: str) -> None:
        """Add one exact name to the exclusion set."""
        self.names.add(rule)
