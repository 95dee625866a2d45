import dataclasses
from pathlib import Path

import pytest

from folderwalk.types import ContentKind, NodeKind
from folderwalk.walker.tree_node import TreeNode


def make_node(**overrides):
    fields = dict(
        name="c.txt",
        kind=NodeKind.FILE,
        depth=2,
        is_last_sibling=True,
        ancestor_last_flags=(True, False),
        path=Path("root/b/c.txt"),
    )
    fields.update(overrides)
    return TreeNode(**fields)


def test_kind_properties():
    assert make_node().is_file
    assert make_node(kind=NodeKind.DIRECTORY).is_dir
    symlink = make_node(kind=NodeKind.SYMLINK, link_target="../a.txt")
    assert symlink.is_symlink
    assert not symlink.is_file


def test_has_content():
    assert not make_node().has_content
    node = make_node(content="gamma\n", content_kind=ContentKind.TEXT)
    assert node.has_content
    # An empty file still has (empty) content
    assert make_node(content="", content_kind=ContentKind.TEXT).has_content


def test_child_flags():
    node = make_node(kind=NodeKind.DIRECTORY, is_last_sibling=False)
    assert node.child_flags == (True, False, False)
    assert len(node.child_flags) == node.depth + 1


def test_nodes_are_immutable():
    node = make_node()
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.depth = 3
