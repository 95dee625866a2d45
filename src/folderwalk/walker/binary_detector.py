"""Binary file detection utilities."""

from pathlib import Path

from folderwalk.types import PathType

# Common binary file extensions (high confidence)
BINARY_EXTENSIONS = frozenset(
    {
        # Executables and objects
        ".exe",
        ".dll",
        ".so",
        ".dylib",
        ".o",
        ".a",
        ".class",
        ".pyc",
        ".bin",
        # Images
        ".jpg",
        ".jpeg",
        ".png",
        ".gif",
        ".bmp",
        ".tiff",
        ".psd",
        ".ico",
        ".webp",
        # Videos
        ".mp4",
        ".mkv",
        ".avi",
        ".mov",
        ".wmv",
        # Audio
        ".mp3",
        ".aac",
        ".wav",
        ".flac",
        ".ogg",
        # Archives
        ".zip",
        ".rar",
        ".7z",
        ".tar",
        ".gz",
        ".bz2",
        ".xz",
        ".iso",
        # Documents and databases
        ".pdf",
        ".sqlite",
        ".sqlite3",
        ".db",
    }
)

# Bytes inspected when the extension gives no answer
DEFAULT_CHUNK_SIZE = 8192


def is_binary_file(file_path: PathType, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bool:
    """Decide whether a file should be treated as binary rather than text.

    The heuristic is fixed:

    1. A well-known binary extension (case-insensitive) means binary.
    2. An empty file is text.
    3. A null byte within the first ``chunk_size`` bytes means binary.
    4. Anything else is text.

    Callers reading the file as text still decode it as strict UTF-8, so a file
    that passes this check but is not valid UTF-8 is caught at read time.

    Args:
        file_path: Path to the file to analyze.
        chunk_size: Number of bytes to inspect. Defaults to 8192.

    Returns:
        True if the file appears to be binary, False if it appears to be text.

    Raises:
        OSError: If the file cannot be opened or read.

    Example:
        >>> is_binary_file("logo.PNG")
        True
        >>> is_binary_file("README.md")  # doctest: +SKIP
        False
    """
    path_obj = Path(file_path)

    if path_obj.suffix.lower() in BINARY_EXTENSIONS:
        return True

    with open(path_obj, "rb") as file:
        chunk = file.read(chunk_size)

    # Empty files are text
    if not chunk:
        return False

    return b"\0" in chunk
