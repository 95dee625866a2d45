"""Test configuration and fixtures for folderwalk."""

import os

import pytest


@pytest.fixture
def sample_tree(tmp_path):
    """Root with a.txt, b/c.txt and an excluded node_modules/ holding one file."""
    root = tmp_path / "root"
    root.mkdir()
    (root / "a.txt").write_text("alpha\n")
    (root / "b").mkdir()
    (root / "b" / "c.txt").write_text("gamma\n")
    (root / "node_modules").mkdir()
    (root / "node_modules" / "pkg.js").write_text("module.exports = {}\n")
    return root


@pytest.fixture
def deep_tree(tmp_path):
    """Four levels of nested directories with a file at every level."""
    root = tmp_path / "deep"
    current = root
    for level in range(1, 5):
        current = current / f"level{level}"
        current.mkdir(parents=True)
        (current / f"file{level}.txt").write_text(f"level {level}\n")
    (root / "top.txt").write_text("top\n")
    return root


@pytest.fixture
def symlinks_supported(tmp_path):
    """Whether the platform lets this process create symbolic links."""
    link = tmp_path / "check_link"
    try:
        link.symlink_to(tmp_path)
    except (OSError, NotImplementedError):
        return False
    link.unlink()
    return True


@pytest.fixture
def non_utf8_tree(tmp_path):
    """Root with a.txt, a file whose name holds the byte 0xFF, and z.txt."""
    root = tmp_path / "names"
    root.mkdir()
    (root / "a.txt").write_text("a\n")
    (root / "z.txt").write_text("z\n")
    try:
        with open(os.path.join(os.fsencode(root), b"bad\xff.txt"), "wb") as f:
            f.write(b"bad\n")
    except OSError:
        pytest.skip("Filesystem rejects names that are not valid UTF-8")
    return root
