"""Resolved configuration for a single walk-and-render pass."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Optional

from folderwalk.exclusion_rules.base_rules import BaseExclusionRules
from folderwalk.types import GlyphSet
from folderwalk.walker.permission_action import PermissionAction

# Name of the report written inside the root directory when not printing to stdout
DEFAULT_OUTPUT_FILENAME = "files.txt"

# Version-control metadata, dependency caches and build output
DEFAULT_EXCLUDED_NAMES: FrozenSet[str] = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        "node_modules",
        ".venv",
        "__pycache__",
        ".mypy_cache",
        ".pytest_cache",
        ".tox",
        "target",
        "build",
        "dist",
    }
)


@dataclass
class WalkConfig:
    """Options consumed by the walker and the renderer.

    A WalkConfig is built once per invocation (usually by the command-line layer)
    and discarded after the output has been flushed.

    Attributes:
        root_path: Directory to walk. Validated when the walk starts.
        include_content: Attach each file's full text beneath its entry.
        max_depth: Deepest level listed; directories at this level are not expanded.
            None means unbounded.
        glyph_set: Unicode box-drawing or plain ASCII connectors.
        excluded_names: Exact entry names pruned from the walk.
        exclusion_rules: Additional rules (e.g. gitignore patterns) matched against
            root-relative paths.
        permission_action: What to do with directories and entries that cannot be read.
        omit_paths: Absolute paths never listed, such as the report file itself.

    Example:
        >>> config = WalkConfig("project", max_depth=2)
        >>> config.root_path
        PosixPath('project')
        >>> "node_modules" in config.excluded_names
        True
        >>> WalkConfig("project", max_depth=0)
        Traceback (most recent call last):
            ...
        ValueError: max_depth must be a positive integer, got 0
    """

    root_path: Path
    include_content: bool = False
    max_depth: Optional[int] = None
    glyph_set: GlyphSet = GlyphSet.UNICODE
    excluded_names: FrozenSet[str] = DEFAULT_EXCLUDED_NAMES
    exclusion_rules: Optional[BaseExclusionRules] = None
    permission_action: PermissionAction = PermissionAction.WARN
    omit_paths: FrozenSet[Path] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        self.root_path = Path(self.root_path)
        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError(f"max_depth must be a positive integer, got {self.max_depth}")
        if isinstance(self.glyph_set, str):
            self.glyph_set = GlyphSet(self.glyph_set.lower())
        if isinstance(self.permission_action, str):
            self.permission_action = PermissionAction(self.permission_action.lower())
        self.excluded_names = frozenset(self.excluded_names)
        self.omit_paths = frozenset(Path(p).absolute() for p in self.omit_paths)
