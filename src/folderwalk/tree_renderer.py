"""Text rendering of walker output as a tree diagram.

This module turns the TreeNode sequence produced by the walker into lines of text,
similar to the Unix 'tree' command, optionally followed by fenced content blocks
holding each file's verbatim text. Connector glyphs come from anytree's render
styles, so the Unicode and ASCII variants share one drawing routine.
"""

import os
import sys
from typing import Dict, Iterable, Iterator, List, Sequence, Union

from anytree import AbstractStyle, ContStyle

from folderwalk.config import WalkConfig
from folderwalk.types import ContentKind, GlyphSet
from folderwalk.walker.tree_node import TreeNode

GLYPH_STYLES: Dict[GlyphSet, AbstractStyle] = {
    GlyphSet.UNICODE: ContStyle(),
    GlyphSet.ASCII: AbstractStyle("|   ", "|-- ", "`-- "),
}

CONTENT_START = "--- FILE CONTENT START ---"
CONTENT_END = "--- FILE CONTENT END ---"
SYMLINK_ARROW = " -> "
# Closes a block whose file does not end with a newline, as in unified diffs
NO_NEWLINE_MARKER = "\\ No newline at end of file"


def display_name(name: str) -> str:
    """Make a file name printable as UTF-8.

    Names that are not valid in the filesystem encoding come back from the OS
    with surrogate escapes. Each undecodable byte is shown as U+FFFD instead.

    Example:
        >>> display_name("bad\\udcff.txt") == "bad\\ufffd.txt"
        True
    """
    return os.fsencode(name).decode(sys.getfilesystemencoding(), "replace")


def split_content_lines(text: str) -> List[str]:
    """Split file text into the lines of a content block.

    Lines are split on ``\\n`` only, so carriage returns and other characters are
    kept verbatim. A trailing newline does not produce an extra empty line, and an
    empty file produces no lines at all.

    Example:
        >>> split_content_lines("a\\n\\nb\\n")
        ['a', '', 'b']
        >>> split_content_lines("")
        []
    """
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return lines


def strip_content_block(block: Sequence[str]) -> str:
    """Recover a file's text from one rendered content block.

    Args:
        block: The rendered lines from the start fence through the end fence, inclusive.

    Returns:
        The text between the fences with the block indent removed. Every line is
        newline-terminated unless the block ends with NO_NEWLINE_MARKER, so the
        file's text is recovered exactly.

    Raises:
        ValueError: If the lines are not framed by the content fences.

    Example:
        >>> strip_content_block(["│   --- FILE CONTENT START ---", "│   x = 1", "│   --- FILE CONTENT END ---"])
        'x = 1\\n'
    """
    if len(block) < 2 or not block[0].endswith(CONTENT_START) or not block[-1].endswith(CONTENT_END):
        raise ValueError("Lines are not a fenced content block")

    indent = block[0][: len(block[0]) - len(CONTENT_START)]
    inner = []
    for line in block[1:-1]:
        if not line.startswith(indent):
            raise ValueError(f"Content line does not carry the block indent: {line!r}")
        inner.append(line[len(indent) :])  # noqa: E203

    if inner and inner[-1] == NO_NEWLINE_MARKER:
        return "\n".join(inner[:-1])
    return "".join(line + "\n" for line in inner)


class TreeRenderer:
    """Formats tree nodes as text lines.

    Each node becomes ``<prefix><connector><name>``: the prefix has one four-column
    segment per ancestor below the root (blank under a last sibling, a vertical bar
    otherwise), and the connector marks a middle or last sibling. Directories get a
    trailing ``/`` and symlinks show their target.

    Attributes:
        glyph_set (GlyphSet): The glyph family in use.
        style (AbstractStyle): The anytree style supplying the glyphs.

    Example:
        >>> from pathlib import Path
        >>> from folderwalk.types import NodeKind
        >>> nodes = [
        ...     TreeNode("a.txt", NodeKind.FILE, 1, False, (True,), Path("a.txt")),
        ...     TreeNode("b", NodeKind.DIRECTORY, 1, True, (True,), Path("b")),
        ...     TreeNode("c.txt", NodeKind.FILE, 2, True, (True, True), Path("b/c.txt")),
        ... ]
        >>> for line in TreeRenderer(GlyphSet.ASCII).render("project", nodes):
        ...     print(line)
        project
        |-- a.txt
        `-- b/
            `-- c.txt
    """

    def __init__(self, glyph_set: Union[str, GlyphSet] = GlyphSet.UNICODE) -> None:
        self.glyph_set = GlyphSet(glyph_set)
        self.style = GLYPH_STYLES[self.glyph_set]

    def render(self, root_label: str, nodes: Iterable[TreeNode]) -> Iterator[str]:
        """Render the header line and then every node, one line at a time.

        Nodes are consumed lazily, so a streaming walk is rendered with bounded memory.

        Args:
            root_label: Text of the header line, usually the root path as given.
            nodes: TreeNode objects in depth-first pre-order.

        Yields:
            Lines of output without trailing newlines.
        """
        yield display_name(root_label)
        for node in nodes:
            yield from self.render_node(node)

    def render_node(self, node: TreeNode) -> Iterator[str]:
        """Render a node's entry line followed by its content block, if any."""
        prefix = self.prefix(node.ancestor_last_flags)
        connector = self.style.end if node.is_last_sibling else self.style.cont
        yield f"{prefix}{connector}{self.label(node)}"

        if node.has_content:
            yield from self._render_content(node, prefix + self._segment(node.is_last_sibling))

    def prefix(self, ancestor_last_flags: Sequence[bool]) -> str:
        """Build the indentation drawn to the left of a connector.

        The first flag belongs to the root, whose header has no connector, so it
        contributes nothing.
        """
        return "".join(self._segment(is_last) for is_last in ancestor_last_flags[1:])

    def label(self, node: TreeNode) -> str:
        name = display_name(node.name)
        if node.is_dir:
            return name + "/"
        if node.is_symlink:
            return f"{name}{SYMLINK_ARROW}{display_name(node.link_target or '')}"
        return name

    def _segment(self, is_last: bool) -> str:
        return self.style.empty if is_last else self.style.vertical

    def _render_content(self, node: TreeNode, indent: str) -> Iterator[str]:
        content = node.content or ""
        if node.content_kind != ContentKind.TEXT:
            # Markers are a single unfenced line so they cannot be mistaken for file text
            yield f"{indent}{content}"
            return

        yield f"{indent}{CONTENT_START}"
        for line in split_content_lines(content):
            yield f"{indent}{line}"
        if content and not content.endswith("\n"):
            yield f"{indent}{NO_NEWLINE_MARKER}"
        yield f"{indent}{CONTENT_END}"


def render(nodes: Iterable[TreeNode], config: WalkConfig) -> Iterator[str]:
    """Render a node sequence using the glyph set and root path of ``config``.

    Args:
        nodes: TreeNode objects in depth-first pre-order.
        config: The walk configuration; its root path as given becomes the header.

    Returns:
        Iterator yielding output lines without trailing newlines.
    """
    return TreeRenderer(config.glyph_set).render(str(config.root_path), nodes)
