from typing import Optional


class InvalidRootError(Exception):
    """
    Exception raised when the root path of a walk does not exist or is not a directory.

    This is a fatal precondition failure: it is raised before any output is produced.

    Attributes:
        path (str): The root path as given by the caller.
        reason (str): Either ``"not_found"`` or ``"not_a_directory"``.

    Example:
        >>> error = InvalidRootError("/no/such/dir", "not_found")
        >>> str(error)
        'Root path does not exist: /no/such/dir'
        >>> InvalidRootError("setup.py", "not_a_directory").reason
        'not_a_directory'
    """

    NOT_FOUND = "not_found"
    NOT_A_DIRECTORY = "not_a_directory"

    def __init__(self, path: str, reason: str) -> None:
        """
        Initialize the exception with the offending path and the reason it was rejected.

        Args:
            path (str): The root path as given by the caller.
            reason (str): ``InvalidRootError.NOT_FOUND`` or ``InvalidRootError.NOT_A_DIRECTORY``.
        """
        self.path = path
        self.reason = reason
        if reason == self.NOT_FOUND:
            message = f"Root path does not exist: {path}"
        else:
            message = f"Root path is not a directory: {path}"
        super().__init__(message)


class EntryUnreadableError(PermissionError):
    """
    Exception raised when a directory cannot be listed or an entry cannot be inspected.

    Unreadable entries are normally absorbed by the walker (skipped, with or without a
    warning). This exception only propagates when the walker is configured with
    ``PermissionAction.RAISE``. It subclasses PermissionError so callers handling
    access problems generically still catch it.

    Attributes:
        path (str): Path of the entry that could not be read.
        error (Optional[OSError]): The underlying operating system error.

    Example:
        >>> error = EntryUnreadableError("/root/secret", PermissionError("denied"))
        >>> str(error)
        'Cannot read /root/secret: denied'
    """

    def __init__(self, path: str, error: Optional[OSError] = None) -> None:
        self.path = path
        self.error = error
        detail = f": {error}" if error is not None else ""
        super().__init__(f"Cannot read {path}{detail}")


class OutputWriteError(OSError):
    """
    Exception raised when the output sink cannot be opened or written.

    Attributes:
        destination (str): Description of the sink (a file path or ``<stdout>``).
        error (OSError): The underlying operating system error.

    Example:
        >>> error = OutputWriteError("/full/disk/files.txt", OSError(28, "No space left on device"))
        >>> str(error)
        'Cannot write output to /full/disk/files.txt: [Errno 28] No space left on device'
    """

    def __init__(self, destination: str, error: OSError) -> None:
        self.destination = destination
        self.error = error
        super().__init__(f"Cannot write output to {destination}: {error}")


class TokenizerNotAvailableError(Exception):
    """
    Exception raised when attempting to use token counting functionality without the required tokenizer package.

    This exception is raised when the `tiktoken` package is not installed but token counting
    functionality is requested. The tiktoken package is an optional dependency that must be
    explicitly installed using the 'token_counting' extra.

    Attributes:
        message (str): Detailed error message including installation instructions.

    Example:
        >>> error = TokenizerNotAvailableError()
        >>> str(error).startswith('Tokenizer (tiktoken) is not installed')
        True
    """

    def __init__(self, message: str = "Tokenizer (tiktoken) is not installed.") -> None:
        self.message = (
            f"{message} To enable token counting, install folderwalk with the 'token_counting' "
            "extra: 'pip install folderwalk[token_counting]'."
        )
        super().__init__(self.message)


class TokenizationError(Exception):
    """
    Exception raised when token counting fails during execution.

    Example:
        >>> error = TokenizationError("Failed to tokenize: invalid input")
        >>> str(error)
        'Failed to tokenize: invalid input'
    """

    pass
