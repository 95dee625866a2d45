"""Gitignore-style exclusion patterns backed by pathspec."""

from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import PathSpec

from folderwalk.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Exclusion patterns written in .gitignore syntax.

    Patterns are kept as raw lines in the order they were given, from ignore files
    (``load_rules``, the CLI's ``-e``) or one by one (``add_rule``, the CLI's
    ``-i``). They are compiled into a single pathspec matcher on demand. As in Git,
    the last matching pattern decides, so ``!keep.log`` after ``*.log`` re-includes
    a file.

    Candidate paths are relative to the walk root and use forward slashes.
    Directories are offered with a trailing slash, which is what directory-only
    patterns such as ``build/`` match.

    Attributes:
        lines (List[str]): Pattern lines in order, comments and blanks included.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("*.log")
        >>> rules.add_rule("!keep.log")
        >>> rules.exclude("logs/app.log"), rules.exclude("keep.log")
        (True, False)
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Create the rule set, optionally loading ignore files.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self.lines: List[str] = []
        self._spec: Optional[PathSpec] = None

        if rules_files is not None:
            self.load_rules(rules_files)

    @property
    def spec(self) -> PathSpec:
        """The compiled matcher for the current pattern lines."""
        if self._spec is None:
            self._spec = PathSpec.from_lines("gitwildmatch", self.lines)
        return self._spec

    def exclude(self, path: str) -> bool:
        return self.spec.match_file(path)

    def has_rules(self) -> bool:
        # Comments and blank lines compile to patterns that never match
        return any(pattern.include is not None for pattern in self.spec.patterns)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Append the patterns of one or more ignore files.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.is_file():
                raise FileNotFoundError(f"Rules file not found: {path}")
            self._extend(path.read_text(encoding="utf-8").splitlines())

    def add_rule(self, rule: str) -> None:
        """Append one pattern, e.g. ``"*.pyc"``, ``"build/"`` or ``"!keep.txt"``."""
        self._extend([rule])

    def _extend(self, lines: Sequence[str]) -> None:
        self.lines.extend(lines)
        self._spec = None
