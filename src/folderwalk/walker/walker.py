"""Lazy depth-first directory walker with exclusion rules and a depth ceiling.

This module provides the DirectoryWalker class, which enumerates a directory subtree
in pre-order and yields one TreeNode per visible entry. Exclusion is a hard prune:
excluded directories are never listed. Symbolic links are never followed, which keeps
the walk finite even when links form cycles.
"""

import dataclasses
import os
import sys
from pathlib import Path
from typing import Iterator, List, NamedTuple, Optional, Tuple

from folderwalk.config import WalkConfig
from folderwalk.exceptions import EntryUnreadableError, InvalidRootError
from folderwalk.exclusion_rules.base_rules import BaseExclusionRules
from folderwalk.exclusion_rules.composite_rules import CompositeExclusionRules
from folderwalk.exclusion_rules.name_rules import NameExclusionRules
from folderwalk.types import ContentKind, NodeKind, PathType
from folderwalk.walker.binary_detector import is_binary_file
from folderwalk.walker.permission_action import PermissionAction
from folderwalk.walker.tree_node import TreeNode

BINARY_MARKER = "[binary file]"
UNREADABLE_LINK_TARGET = "<unreadable>"


class _Entry(NamedTuple):
    name: str
    path: Path
    relative_path: str
    kind: NodeKind
    regular: bool


def read_file_content(path: PathType) -> Tuple[str, ContentKind]:
    """Read a file's full text, or produce a marker explaining why it has none.

    Text is decoded as strict UTF-8 with newline translation disabled, so line
    endings are preserved verbatim.

    Args:
        path: File to read.

    Returns:
        A ``(content, kind)`` pair. ``kind`` is TEXT for the verbatim text, BINARY
        (with the ``[binary file]`` marker) for binary or non-UTF-8 data, and
        UNREADABLE (with an ``[unreadable: ...]`` marker) when the file cannot be read.
    """
    try:
        if is_binary_file(path):
            return BINARY_MARKER, ContentKind.BINARY
        with open(path, "r", encoding="utf-8", newline="") as file:
            return file.read(), ContentKind.TEXT
    except UnicodeDecodeError:
        return BINARY_MARKER, ContentKind.BINARY
    except OSError as e:
        return f"[unreadable: {e.strerror or e}]", ContentKind.UNREADABLE


class DirectoryWalker:
    """Enumerates a directory subtree as a lazy, depth-first, pre-order node sequence.

    Siblings are sorted by name in codepoint order, with files and directories
    interleaved. Each yielded TreeNode knows whether it closes its sibling group and
    the same for each of its ancestors, which is all a renderer needs.

    Unreadable directories are still yielded as nodes; their contents are skipped
    according to the configured PermissionAction:
        - IGNORE: skip silently
        - WARN (default): skip and print a warning to stderr
        - RAISE: raise EntryUnreadableError

    Counts of directories, files and symlinks are accumulated during the walk and
    are final once the generator is exhausted.

    Attributes:
        config (WalkConfig): The walk options.
        root_path (Path): Directory being walked.
        exclusion_rules (BaseExclusionRules): Exact names combined with any extra rules.
        unreadable_paths (List[str]): Paths skipped because they could not be read.

    Example:
        >>> walker = DirectoryWalker(WalkConfig("src"))  # doctest: +SKIP
        >>> for node in walker.walk():  # doctest: +SKIP
        ...     print("  " * (node.depth - 1) + node.name)
        folderwalk
          __init__.py
    """

    def __init__(self, config: WalkConfig) -> None:
        self.config = config
        self.root_path = config.root_path

        rules: List[BaseExclusionRules] = [NameExclusionRules(config.excluded_names)]
        if config.exclusion_rules is not None:
            rules.append(config.exclusion_rules)
        self.exclusion_rules: BaseExclusionRules = CompositeExclusionRules(rules)

        self.unreadable_paths: List[str] = []
        self._directory_count = 0
        self._file_count = 0
        self._symlink_count = 0

    @property
    def directory_count(self) -> int:
        """Directories yielded so far (the root is not counted)."""
        return self._directory_count

    @property
    def file_count(self) -> int:
        """Files yielded so far."""
        return self._file_count

    @property
    def symlink_count(self) -> int:
        """Symlinks yielded so far."""
        return self._symlink_count

    def validate_root(self) -> None:
        """Check that the root exists and is a directory.

        Raises:
            InvalidRootError: If the root path is missing or is not a directory.
        """
        if not self.root_path.exists():
            raise InvalidRootError(str(self.root_path), InvalidRootError.NOT_FOUND)
        if not self.root_path.is_dir():
            raise InvalidRootError(str(self.root_path), InvalidRootError.NOT_A_DIRECTORY)

    def walk(self) -> Iterator[TreeNode]:
        """Validate the root, then return an iterator over the subtree's nodes.

        Validation happens immediately, before the first node is requested, so an
        invalid root fails fast even if the iterator is never consumed.

        Returns:
            Iterator yielding TreeNode objects in depth-first pre-order.

        Raises:
            InvalidRootError: If the root path is missing or is not a directory.
            EntryUnreadableError: While iterating, if an entry cannot be read and the
                permission action is RAISE.
        """
        self.validate_root()
        self.unreadable_paths = []
        self._directory_count = 0
        self._file_count = 0
        self._symlink_count = 0
        # The root closes its (imaginary) sibling group
        return self._walk_directory(self.root_path, "", (True,), 1)

    def _walk_directory(
        self, directory: Path, relative_dir: str, flags: Tuple[bool, ...], depth: int
    ) -> Iterator[TreeNode]:
        entries = self._list_entries(directory, relative_dir)
        max_depth = self.config.max_depth

        for index, entry in enumerate(entries):
            node = self._create_node(entry, depth, flags, index == len(entries) - 1)
            yield node

            if node.is_dir and (max_depth is None or depth < max_depth):
                yield from self._walk_directory(entry.path, entry.relative_path + "/", node.child_flags, depth + 1)

    def _list_entries(self, directory: Path, relative_dir: str) -> List[_Entry]:
        """List, sort and filter the direct entries of a directory."""
        try:
            with os.scandir(directory) as iterator:
                dir_entries = sorted(iterator, key=lambda e: e.name)
        except OSError as e:
            self._handle_unreadable(f"directory {directory}", e)
            return []

        entries = []
        for dir_entry in dir_entries:
            path = Path(dir_entry.path)
            regular = False
            try:
                if dir_entry.is_symlink():
                    kind = NodeKind.SYMLINK
                elif dir_entry.is_dir(follow_symlinks=False):
                    kind = NodeKind.DIRECTORY
                else:
                    # FIFOs, sockets and devices are listed as files but never opened
                    kind = NodeKind.FILE
                    regular = dir_entry.is_file(follow_symlinks=False)
            except OSError as e:
                self._handle_unreadable(str(path), e)
                continue

            relative_path = relative_dir + dir_entry.name
            if self._is_excluded(path, relative_path, kind):
                continue
            entries.append(_Entry(dir_entry.name, path, relative_path, kind, regular))

        return entries

    def _is_excluded(self, path: Path, relative_path: str, kind: NodeKind) -> bool:
        if self.config.omit_paths and path.absolute() in self.config.omit_paths:
            return True
        if self.exclusion_rules.exclude(relative_path):
            return True
        # Directory-only patterns such as "build/" need the trailing slash to match
        return kind == NodeKind.DIRECTORY and self.exclusion_rules.exclude(relative_path + "/")

    def _create_node(self, entry: _Entry, depth: int, flags: Tuple[bool, ...], is_last: bool) -> TreeNode:
        content: Optional[str] = None
        content_kind: Optional[ContentKind] = None
        link_target: Optional[str] = None

        if entry.kind == NodeKind.SYMLINK:
            self._symlink_count += 1
            try:
                link_target = os.readlink(entry.path)
            except OSError:
                link_target = UNREADABLE_LINK_TARGET
        elif entry.kind == NodeKind.DIRECTORY:
            self._directory_count += 1
        else:
            self._file_count += 1
            if self.config.include_content and entry.regular:
                content, content_kind = read_file_content(entry.path)

        return TreeNode(
            name=entry.name,
            kind=entry.kind,
            depth=depth,
            is_last_sibling=is_last,
            ancestor_last_flags=flags,
            path=entry.path,
            content=content,
            content_kind=content_kind,
            link_target=link_target,
        )

    def _handle_unreadable(self, description: str, error: OSError) -> None:
        action = self.config.permission_action
        if action == PermissionAction.RAISE:
            raise EntryUnreadableError(description, error) from error

        self.unreadable_paths.append(description)
        if action == PermissionAction.WARN:
            print(f"Warning: cannot read {description}: {error.strerror or error}", file=sys.stderr)


def walk(root_path: PathType, config: Optional[WalkConfig] = None) -> Iterator[TreeNode]:
    """Walk ``root_path`` and return its nodes in depth-first pre-order.

    Args:
        root_path: Directory to walk.
        config: Walk options. Defaults to a WalkConfig with default exclusions; when
            given, its ``root_path`` is replaced by ``root_path``.

    Returns:
        Iterator yielding TreeNode objects.

    Raises:
        InvalidRootError: If the root path is missing or is not a directory.
    """
    if config is None:
        config = WalkConfig(Path(root_path))
    elif Path(root_path) != config.root_path:
        config = dataclasses.replace(config, root_path=Path(root_path))
    return DirectoryWalker(config).walk()
