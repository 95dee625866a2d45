import pytest

from folderwalk.exclusion_rules.git_rules import GitIgnoreExclusionRules


@pytest.fixture
def gitignore_file(tmp_path):
    path = tmp_path / ".gitignore"
    path.write_text("# build output\n*.txt\n!important.txt\nsubdir/\n*.py[cod]\n**/__pycache__/\n")
    return path


@pytest.fixture
def extra_ignore_file(tmp_path):
    path = tmp_path / ".extraignore"
    path.write_text("*.log\n!keep.log\n")
    return path


@pytest.mark.parametrize(
    "path,expected",
    [
        ("file.txt", True),
        ("important.txt", False),
        ("file.py", False),
        ("file.pyc", True),
        ("subdir/", True),
        ("subdir/file.py", True),
        ("src/__pycache__/", True),
        ("src/__pycache__/mod.cpython-312.pyc", True),
        ("src/main.py", False),
        ("docs/notes.txt", True),
    ],
)
def test_exclude(gitignore_file, path, expected):
    rules = GitIgnoreExclusionRules(gitignore_file)
    assert rules.exclude(path) == expected


def test_empty_rules():
    rules = GitIgnoreExclusionRules()
    assert not rules.has_rules()
    assert not rules.exclude("anything.txt")


def test_directory_pattern_needs_trailing_slash():
    rules = GitIgnoreExclusionRules()
    rules.add_rule("build/")
    assert rules.exclude("build/")
    assert not rules.exclude("build")
    assert not rules.exclude("builder/")


def test_add_rule():
    rules = GitIgnoreExclusionRules()
    rules.add_rule("*.log")
    assert rules.has_rules()
    assert rules.exclude("server.log")
    assert not rules.exclude("server.py")


def test_load_multiple_files(gitignore_file, extra_ignore_file):
    rules = GitIgnoreExclusionRules([gitignore_file, extra_ignore_file])
    assert rules.exclude("file.txt")
    assert rules.exclude("debug.log")
    assert not rules.exclude("keep.log")


def test_later_rules_override_earlier(extra_ignore_file):
    rules = GitIgnoreExclusionRules(extra_ignore_file)
    assert not rules.exclude("keep.log")
    rules.add_rule("keep.log")
    assert rules.exclude("keep.log")


def test_missing_rules_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Rules file not found"):
        GitIgnoreExclusionRules(tmp_path / "missing")
