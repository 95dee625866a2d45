"""Command-line argument parsing for folderwalk.

This module defines the command-line interface for folderwalk,
handling argument parsing and validation.
"""

import argparse
import os
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from folderwalk import __version__
from folderwalk.config import DEFAULT_EXCLUDED_NAMES, DEFAULT_OUTPUT_FILENAME
from folderwalk.exclusion_rules.base_rules import BaseExclusionRules


def positive_int(value: str) -> int:
    """argparse type for --max-depth: an integer of at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid depth value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"depth must be a positive integer, got {number}")
    return number


def create_exclusion_action(exclusion_rules: BaseExclusionRules) -> Type[argparse.Action]:
    """Create a custom action class that feeds gitignore rules into ``exclusion_rules``.

    Rules are added as the options are parsed, which preserves the exact order of
    -e/--exclude files and -i/--ignore patterns on the command line. Order matters
    for negated patterns.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class ExclusionRulesAction(argparse.Action):
        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return

            if option_string in ("-e", "--exclude"):
                if isinstance(values, (str, os.PathLike)):
                    exclusion_rules.load_rules(values)
                else:
                    exclusion_rules.load_rules(Path(str(values)))
            else:  # -i/--ignore
                exclusion_rules.add_rule(str(values))

            recorded = getattr(namespace, self.dest, None) or []
            recorded.append(values)
            setattr(namespace, self.dest, recorded)

    return ExclusionRulesAction


def create_parser(exclusion_rules: BaseExclusionRules) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        exclusion_rules: The exclusion rules object updated by -e/--exclude and -i/--ignore.

    Returns:
        An ArgumentParser instance configured with folderwalk's options.
    """
    description = f"""
    folderwalk: render a directory as a text tree, optionally with file contents.

    The report starts with the root path, followed by one line per entry drawn
    with box-drawing (or ASCII) connectors. With --content, the full text of each
    file is inserted under its entry between

        --- FILE CONTENT START ---
        --- FILE CONTENT END ---

    fences. Binary and unreadable files get a one-line marker instead.

    By default the report is written to {DEFAULT_OUTPUT_FILENAME} inside the target
    directory; --stdout prints it instead.

    Names excluded by default: {", ".join(sorted(DEFAULT_EXCLUDED_NAMES))}
    """

    epilog = """
    Examples:
      # Write files.txt into the current directory
      folderwalk

      # Print a two-level ASCII tree of a project
      folderwalk /path/to/project --max-depth 2 --ascii -o

      # Include file contents, e.g. to paste a codebase into an LLM prompt
      folderwalk /path/to/project -c

      # Exclude more names, or gitignore-style patterns and files
      folderwalk /path/to/project -x fixtures -i "*.log" -e .gitignore

      # Count tokens of the report and print a summary to stderr
      folderwalk /path/to/project -c -s -t gpt-4
    """

    parser = argparse.ArgumentParser(
        prog="folderwalk",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"folderwalk {__version__}", help="Show the version and exit"
    )

    ExclusionAction = create_exclusion_action(exclusion_rules)

    parser.add_argument(
        "directory",
        type=Path,
        nargs="?",
        default=Path("."),
        help="Directory to scan (default: current directory).",
    )
    parser.add_argument(
        "--max-depth",
        type=positive_int,
        metavar="N",
        help="Limit recursion depth. Entries deeper than N are not listed.",
    )
    parser.add_argument(
        "--ascii",
        action="store_true",
        help="Use ASCII tree characters instead of Unicode box drawing.",
    )
    parser.add_argument(
        "-c",
        "--content",
        action="store_true",
        help="Include the contents of each file beneath its entry.",
    )
    parser.add_argument(
        "-o",
        "--stdout",
        action="store_true",
        help=f"Write to stdout instead of {DEFAULT_OUTPUT_FILENAME} in the target directory.",
    )
    parser.add_argument(
        "-x",
        "--exclude-name",
        action="append",
        metavar="NAME",
        default=[],
        help="Exact entry name to exclude, in addition to the defaults (can be specified multiple times).",
    )
    parser.add_argument(
        "--no-default-excludes",
        action="store_true",
        help="Do not exclude the default names (version control, dependency and build directories).",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        type=Path,
        metavar="FILE",
        action=ExclusionAction,
        help="Path to a gitignore-style exclusion file (can be specified multiple times).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        type=str,
        metavar="PATTERN",
        action=ExclusionAction,
        help=(
            "Gitignore-style pattern to exclude (e.g. '*.log', 'build/', '!keep.log'). Can be "
            "specified multiple times; patterns apply in command-line order, mixed with -e/--exclude."
        ),
    )
    parser.add_argument(
        "-P",
        "--permission-action",
        choices=["ignore", "warn", "fail"],
        default="warn",
        help="How to handle unreadable directories: skip silently, skip with a warning (default), or fail.",
    )
    parser.add_argument(
        "-s",
        "--summary",
        action="store_true",
        help="Print directory, file, symlink, line and character counts to stderr.",
    )
    parser.add_argument(
        "-t",
        "--tokenizer",
        metavar="MODEL",
        help="Tokenizer model used to count tokens in the summary (e.g. gpt-4). Requires -s/--summary.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments beyond what argparse checks.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.tokenizer and not args.summary:
        raise ValueError("-t/--tokenizer requires -s/--summary to be specified")
