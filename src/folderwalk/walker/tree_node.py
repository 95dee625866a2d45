"""Node records emitted by the directory walker."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from folderwalk.types import ContentKind, NodeKind


@dataclass(frozen=True)
class TreeNode:
    """One filesystem entry visited during a walk.

    Nodes carry everything the renderer needs to draw connectors without looking at
    any other node: the depth, whether this entry closes its sibling group, and the
    same flag for every ancestor level.

    The root directory is not a node. It counts as a last sibling, so
    ``ancestor_last_flags[0]`` is always True and ``len(ancestor_last_flags) == depth``.

    Attributes:
        name: The entry's base name.
        kind: Directory, file or symlink.
        depth: Distance from the root; children of the root have depth 1.
        is_last_sibling: True iff this is the last entry of its sorted, filtered group.
        ancestor_last_flags: Last-sibling flags of each ancestor level, root first.
        path: Full path of the entry.
        content: File text or a marker, only when content inclusion is enabled.
        content_kind: How to read ``content``; None when there is no content.
        link_target: Target of a symlink node.

    Example:
        >>> node = TreeNode("b.txt", NodeKind.FILE, 2, True, (True, False), Path("a/b.txt"))
        >>> node.is_file, node.has_content
        (True, False)
    """

    name: str
    kind: NodeKind
    depth: int
    is_last_sibling: bool
    ancestor_last_flags: Tuple[bool, ...]
    path: Path
    content: Optional[str] = None
    content_kind: Optional[ContentKind] = None
    link_target: Optional[str] = None

    @property
    def is_dir(self) -> bool:
        return self.kind == NodeKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind == NodeKind.FILE

    @property
    def is_symlink(self) -> bool:
        return self.kind == NodeKind.SYMLINK

    @property
    def has_content(self) -> bool:
        return self.content is not None

    @property
    def child_flags(self) -> Tuple[bool, ...]:
        """Ancestor flags inherited by this node's children."""
        return self.ancestor_last_flags + (self.is_last_sibling,)
