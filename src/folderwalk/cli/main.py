"""Command-line interface for folderwalk.

This module resolves command-line arguments into a WalkConfig, streams the rendered
report to its sink (files.txt inside the target directory, or stdout), and maps
failures to exit codes.

Signal Handling Notes:
    - SIGPIPE: Handled when the output pipe is closed (e.g. piping to `head`) on Unix-like systems
    - SIGINT: Handled for clean exit on Ctrl+C

Exit Codes:
    0: Successful completion
    1: Invalid root directory, output write failure, or other runtime error
    2: Command-line syntax error
    126: Unreadable entry with --permission-action fail
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Write files.txt into the project directory
    $ folderwalk /path/to/project

    # Print an ASCII tree with file contents to stdout
    $ folderwalk /path/to/project --ascii -c -o
"""

import argparse
import sys
from collections.abc import Mapping
from typing import Optional

from folderwalk.cli.argparser import create_parser, validate_args
from folderwalk.cli.safe_writer import SafeWriter
from folderwalk.cli.signal_handler import setup_signal_handling, signal_handler
from folderwalk.config import DEFAULT_EXCLUDED_NAMES, DEFAULT_OUTPUT_FILENAME, WalkConfig
from folderwalk.exceptions import EntryUnreadableError, TokenizerNotAvailableError
from folderwalk.exclusion_rules.git_rules import GitIgnoreExclusionRules
from folderwalk.folderwalk import StreamingFolderWalk
from folderwalk.token_counter import check_tiktoken_available
from folderwalk.types import GlyphSet
from folderwalk.walker.permission_action import PermissionAction


def format_counts(counts: Mapping[str, Optional[int]]) -> str:
    """Format the counts into a human-readable string.

    Args:
        counts: Mapping containing various count metrics.

    Returns:
        A formatted string showing all counts with appropriate labels.
    """
    result = [
        f"Directories: {counts['directories']}",
        f"Files: {counts['files']}",
        f"Symlinks: {counts['symlinks']}",
        f"Lines: {counts['lines']}",
        f"Characters: {counts['characters']}",
    ]

    if counts["tokens"] is not None:
        result.insert(4, f"Tokens: {counts['tokens']}")

    return "\n".join(result)


def build_config(args: argparse.Namespace, exclusion_rules: GitIgnoreExclusionRules) -> WalkConfig:
    """Resolve parsed arguments into the configuration consumed by the walker and renderer."""
    excluded_names = set() if args.no_default_excludes else set(DEFAULT_EXCLUDED_NAMES)
    excluded_names.update(args.exclude_name)

    # The report must not list itself
    omit_paths = frozenset() if args.stdout else frozenset({args.directory / DEFAULT_OUTPUT_FILENAME})

    # Map CLI permission actions to internal enum
    permission_action = {
        "ignore": PermissionAction.IGNORE,
        "warn": PermissionAction.WARN,
        "fail": PermissionAction.RAISE,
    }[args.permission_action]

    return WalkConfig(
        root_path=args.directory,
        include_content=args.content,
        max_depth=args.max_depth,
        glyph_set=GlyphSet.ASCII if args.ascii else GlyphSet.UNICODE,
        excluded_names=frozenset(excluded_names),
        exclusion_rules=exclusion_rules if exclusion_rules.has_rules() else None,
        permission_action=permission_action,
        omit_paths=omit_paths,
    )


def main() -> None:
    """Main entry point for the folderwalk command-line interface.

    Exit codes:
        0: Successful completion
        1: Invalid root directory, output write failure, or other runtime error
        2: Command-line syntax error
        126: Unreadable entry with --permission-action fail
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    setup_signal_handling()

    try:
        # Populated by -e/--exclude and -i/--ignore while parsing
        exclusion_rules = GitIgnoreExclusionRules()

        parser = create_parser(exclusion_rules)
        args = parser.parse_args()
        validate_args(args)

        if args.tokenizer and not check_tiktoken_available():
            raise TokenizerNotAvailableError(
                "Token counting was requested with -t/--tokenizer, but the required tiktoken library is not installed."
            )

        config = build_config(args, exclusion_rules)

        try:
            # Validates the root before the output file is created
            report = StreamingFolderWalk(config, tokenizer_model=args.tokenizer)

            output = sys.stdout.fileno() if args.stdout else config.root_path / DEFAULT_OUTPUT_FILENAME

            with SafeWriter(output) as safe_writer:
                try:
                    for line in report.stream_lines():
                        safe_writer.write(line)
                except BrokenPipeError:
                    pass  # SafeWriter will automatically close in the context manager

            if not args.stdout and report.streaming_complete:
                print(f"Wrote {output}", file=sys.stderr)

            if args.summary:
                counts = {
                    "directories": report.directory_count,
                    "files": report.file_count,
                    "symlinks": report.symlink_count,
                    "lines": report.line_count,
                    "tokens": report.token_count,
                    "characters": report.character_count,
                }
                print(format_counts(counts), file=sys.stderr)

        except EntryUnreadableError as e:
            print(f"Error: {str(e)}", file=sys.stderr)
            sys.exit(126)

    except TokenizerNotAvailableError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        print('    pip install "folderwalk[token_counting]"', file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    # Handle exit codes based on received signals
    if signal_handler.sigpipe_received.is_set():
        sys.exit(141)
    elif signal_handler.sigint_received.is_set():
        sys.exit(130)


if __name__ == "__main__":
    main()
