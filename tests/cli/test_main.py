"""Unit tests for the CLI main module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from folderwalk.cli.argparser import create_parser
from folderwalk.cli.main import build_config, format_counts, main
from folderwalk.exclusion_rules.git_rules import GitIgnoreExclusionRules
from folderwalk.types import GlyphSet
from folderwalk.walker.permission_action import PermissionAction


@pytest.fixture(autouse=True)
def no_signal_handlers():
    """Keep main() from installing process-wide signal handlers during tests."""
    with patch("folderwalk.cli.main.setup_signal_handling"):
        yield


def run_main(*args):
    with patch("sys.argv", ["folderwalk", *[str(arg) for arg in args]]):
        main()


def exit_code(*args):
    with pytest.raises(SystemExit) as exc_info:
        run_main(*args)
    return exc_info.value.code


def test_format_counts():
    counts = {"directories": 2, "files": 5, "symlinks": 0, "lines": 12, "characters": 300, "tokens": None}
    assert format_counts(counts) == "Directories: 2\nFiles: 5\nSymlinks: 0\nLines: 12\nCharacters: 300"

    counts["tokens"] = 80
    assert format_counts(counts).splitlines()[4] == "Tokens: 80"


def test_build_config():
    rules = GitIgnoreExclusionRules()
    args = create_parser(rules).parse_args(
        ["proj", "--ascii", "-c", "--max-depth", "2", "-x", "fixtures", "-P", "fail", "-i", "*.log"]
    )
    config = build_config(args, rules)

    assert config.root_path == Path("proj")
    assert config.glyph_set == GlyphSet.ASCII
    assert config.include_content
    assert config.max_depth == 2
    assert "fixtures" in config.excluded_names
    assert "node_modules" in config.excluded_names
    assert config.permission_action == PermissionAction.RAISE
    assert config.exclusion_rules is rules
    assert config.omit_paths == frozenset({(Path("proj") / "files.txt").absolute()})


def test_build_config_without_defaults_or_rules():
    rules = GitIgnoreExclusionRules()
    args = create_parser(rules).parse_args(["proj", "--no-default-excludes", "-o"])
    config = build_config(args, rules)

    assert config.excluded_names == frozenset()
    assert config.exclusion_rules is None
    assert config.omit_paths == frozenset()


def test_writes_files_txt_into_root(sample_tree, capsys):
    run_main(sample_tree)

    output = sample_tree / "files.txt"
    assert output.read_text(encoding="utf-8") == f"{sample_tree}\n├── a.txt\n└── b/\n    └── c.txt\n"
    assert f"Wrote {output}" in capsys.readouterr().err


def test_report_does_not_list_itself(sample_tree):
    run_main(sample_tree, "-c")
    first = (sample_tree / "files.txt").read_text(encoding="utf-8")

    run_main(sample_tree, "-c")
    second = (sample_tree / "files.txt").read_text(encoding="utf-8")

    assert first == second
    assert "files.txt" not in second


def test_ascii_and_depth_options(deep_tree):
    run_main(deep_tree, "--ascii", "--max-depth", "1")
    assert (deep_tree / "files.txt").read_text(encoding="utf-8").splitlines() == [
        str(deep_tree),
        "|-- level1/",
        "`-- top.txt",
    ]


def test_exclude_name_and_ignore_pattern(sample_tree):
    (sample_tree / "debug.log").write_text("noise\n")
    run_main(sample_tree, "-x", "b", "-i", "*.log")
    text = (sample_tree / "files.txt").read_text(encoding="utf-8")
    assert text == f"{sample_tree}\n└── a.txt\n"


def test_no_default_excludes(sample_tree):
    run_main(sample_tree, "--no-default-excludes")
    assert "node_modules/" in (sample_tree / "files.txt").read_text(encoding="utf-8")


def test_summary(sample_tree, capsys):
    run_main(sample_tree, "-s")
    err = capsys.readouterr().err
    assert "Directories: 1" in err
    assert "Files: 2" in err
    assert "Lines: 4" in err
    assert "Tokens:" not in err


def test_missing_root_exits_1_without_output(tmp_path, capsys):
    assert exit_code(tmp_path / "missing") == 1
    assert "Error: Root path does not exist" in capsys.readouterr().err
    assert not (tmp_path / "missing").exists()


def test_file_root_exits_1_without_output(sample_tree, capsys):
    assert exit_code(sample_tree / "a.txt") == 1
    assert "Error: Root path is not a directory" in capsys.readouterr().err
    assert not (sample_tree / "files.txt").exists()


def test_unreadable_directory_with_fail_action_exits_126(sample_tree, monkeypatch, capsys):
    real_scandir = os.scandir

    def fake_scandir(path):
        if Path(path).name == "b":
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)
    assert exit_code(sample_tree, "-P", "fail") == 126
    assert "Error: Cannot read directory" in capsys.readouterr().err


def test_unreadable_directory_warns_by_default(sample_tree, monkeypatch, capsys):
    real_scandir = os.scandir

    def fake_scandir(path):
        if Path(path).name == "b":
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)
    run_main(sample_tree)

    assert "Warning: cannot read directory" in capsys.readouterr().err
    assert (sample_tree / "files.txt").read_text(encoding="utf-8").endswith("└── b/\n")


def test_tokenizer_requires_summary(sample_tree, capsys):
    assert exit_code(sample_tree, "-t", "gpt-4") == 1
    assert "requires -s/--summary" in capsys.readouterr().err


def test_tokenizer_without_tiktoken(sample_tree, capsys):
    with patch("folderwalk.cli.main.check_tiktoken_available", return_value=False):
        assert exit_code(sample_tree, "-s", "-t", "gpt-4") == 1

    err = capsys.readouterr().err
    assert "Error: Token counting was requested with -t/--tokenizer" in err
    assert 'pip install "folderwalk[token_counting]"' in err
    assert not (sample_tree / "files.txt").exists()


def test_non_utf8_name_does_not_abort_the_report(non_utf8_tree, capsys):
    run_main(non_utf8_tree, "-c")

    report = (non_utf8_tree / "files.txt").read_text(encoding="utf-8").splitlines()
    assert report[1:4] == ["├── a.txt", "│   --- FILE CONTENT START ---", "│   a"]
    assert "├── bad�.txt" in report
    assert report[-1] == "    --- FILE CONTENT END ---"
    assert "Error" not in capsys.readouterr().err
