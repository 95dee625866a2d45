"""Directory-to-tree-text conversion with streaming support.

This module wires the walker, the renderer and the token counter together. The
streaming class emits the report one line at a time so memory stays bounded by a
single file's content; the complete class renders everything up front.
"""

from typing import Iterator, Optional

from folderwalk.config import WalkConfig
from folderwalk.exceptions import TokenizationError
from folderwalk.token_counter import TokenCounter
from folderwalk.tree_renderer import TreeRenderer
from folderwalk.walker.walker import DirectoryWalker


class StreamingFolderWalk:
    """Streaming report generator for one walk-and-render pass.

    The root is validated on construction, so an invalid root is reported before
    any output sink is opened.

    Streaming properties:
    - The report can only be streamed once
    - Counts are updated incrementally and are final once streaming_complete is True

    Attributes:
        config (WalkConfig): The walk options.
        streaming_complete (bool): Whether the report has been fully streamed.

    Example:
        >>> report = StreamingFolderWalk(WalkConfig("src"))  # doctest: +SKIP
        >>> for line in report.stream_lines():  # doctest: +SKIP
        ...     print(line, end="")
        src
        └── folderwalk/
            ├── __init__.py
            └── config.py

    Raises:
        InvalidRootError: If the root path is missing or is not a directory.
        TokenizerNotAvailableError: If a tokenizer model is given but tiktoken is missing.
    """

    def __init__(self, config: WalkConfig, *, tokenizer_model: Optional[str] = None) -> None:
        """Initialize the report and validate the root.

        Args:
            config: Walk options.
            tokenizer_model: Model whose tokenizer counts tokens, or None to disable token counting.
        """
        self.config = config
        self._walker = DirectoryWalker(config)
        self._walker.validate_root()
        self._renderer = TreeRenderer(config.glyph_set)
        self._counter = TokenCounter(model=tokenizer_model)
        self._started = False
        self._complete = False

    @property
    def directory_count(self) -> int:
        """Number of directories listed (excluding the root)."""
        return self._walker.directory_count

    @property
    def file_count(self) -> int:
        return self._walker.file_count

    @property
    def symlink_count(self) -> int:
        return self._walker.symlink_count

    @property
    def line_count(self) -> int:
        """Number of output lines streamed so far."""
        return self._counter.get_total_lines()

    @property
    def character_count(self) -> int:
        return self._counter.get_total_characters()

    @property
    def token_count(self) -> Optional[int]:
        """Tokens streamed so far, or None if token counting is disabled."""
        return self._counter.get_total_tokens()

    @property
    def streaming_complete(self) -> bool:
        return self._complete

    def stream_lines(self) -> Iterator[str]:
        """Stream the report line by line.

        Yields:
            Lines of the report, each with a trailing newline; the root header comes first.

        Raises:
            RuntimeError: If the report has already been streamed.
            EntryUnreadableError: If an entry cannot be read and the permission action is RAISE.
        """
        if self._started:
            raise RuntimeError("Report has already been streamed")
        self._started = True

        nodes = self._walker.walk()
        for line in self._renderer.render(str(self.config.root_path), nodes):
            yield self._count_and_yield(line + "\n")

        self._complete = True

    def _count_and_yield(self, text: str) -> str:
        try:
            self._counter.count(text)
        except TokenizationError:
            # Continue even if token counting fails
            pass
        return text


class FolderWalk(StreamingFolderWalk):
    """Report generator that renders the whole report during initialization.

    Memory Usage Note:
        The complete report, including every included file's content, is held in
        memory. Use StreamingFolderWalk for very large trees.

    Example:
        >>> report = FolderWalk(WalkConfig("src", max_depth=1))  # doctest: +SKIP
        >>> print(report.text, end="")  # doctest: +SKIP
        src
        └── folderwalk/
    """

    def __init__(self, config: WalkConfig, *, tokenizer_model: Optional[str] = None) -> None:
        super().__init__(config, tokenizer_model=tokenizer_model)
        self._text = "".join(self.stream_lines())

    @property
    def text(self) -> str:
        """The complete report."""
        return self._text
