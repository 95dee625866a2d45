"""Counter for tokens, lines, and characters in rendered output.

Reports are often pasted into an LLM context window, so the size of a report in
tokens is worth knowing. Token counting uses OpenAI's tiktoken library, which is an
optional dependency (the ``token_counting`` extra). Lines and characters are always
counted.
"""

import importlib.util
from collections import namedtuple
from typing import Any, Optional

from folderwalk.exceptions import TokenizationError, TokenizerNotAvailableError

CountResult = namedtuple("CountResult", ["lines", "tokens", "characters"])


def check_tiktoken_available() -> bool:
    """Check if the tiktoken library is installed."""
    return importlib.util.find_spec("tiktoken") is not None


class TokenCounter:
    """Running totals of lines, characters and (optionally) tokens.

    Token counting is enabled only when a model is named. Naming a model without
    tiktoken installed is an error rather than a silent fallback.

    Attributes:
        model (Optional[str]): Model whose tokenizer is used, or None.
        encoder (Optional[Any]): The tiktoken encoding, when token counting is enabled.

    Example:
        >>> counter = TokenCounter()
        >>> counter.count("one\\ntwo\\n")
        CountResult(lines=2, tokens=None, characters=8)
        >>> counter.get_total_lines()
        2

    Raises:
        TokenizerNotAvailableError: If a model is given but tiktoken is not installed.
        ValueError: If tiktoken does not know the model.
    """

    def __init__(self, model: Optional[str] = None):
        self.model = model
        self.encoder: Optional[Any] = None

        if model is not None:
            if not check_tiktoken_available():
                raise TokenizerNotAvailableError()
            self.encoder = self._get_encoder(model)

        self._total_tokens: Optional[int] = None if self.encoder is None else 0
        self._total_lines = 0
        self._total_characters = 0

    @staticmethod
    def _get_encoder(model: str) -> Any:
        import tiktoken

        try:
            return tiktoken.encoding_for_model(model)
        except KeyError:
            raise ValueError(
                f"Could not load tokenizer for model '{model}'. Use a well-supported model such as "
                "'gpt-4' (cl100k_base encoding); counts will approximate other models."
            )

    def count(self, text: str) -> CountResult:
        """Count lines, tokens, and characters in text and add them to the totals.

        Args:
            text: The text to analyze.

        Returns:
            CountResult: newlines, tokens (None when token counting is disabled) and characters.

        Raises:
            TokenizationError: If token counting is enabled but fails. Line and
                character totals are still updated.
        """
        lines = text.count("\n")
        chars = len(text)
        tokens = None

        self._total_lines += lines
        self._total_characters += chars

        if self.encoder is not None:
            try:
                tokens = len(self.encoder.encode(text))
            except Exception as e:
                raise TokenizationError(f"Failed to tokenize text: {str(e)}")
            self._total_tokens = (self._total_tokens or 0) + tokens

        return CountResult(lines=lines, tokens=tokens, characters=chars)

    def get_total_tokens(self) -> Optional[int]:
        """Total tokens so far, or None when token counting is disabled."""
        return self._total_tokens

    def get_total_lines(self) -> int:
        return self._total_lines

    def get_total_characters(self) -> int:
        return self._total_characters
