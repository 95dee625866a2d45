"""Directory tree rendering utilities.

This package renders a directory subtree as a text tree diagram, optionally
followed under each file by the file's full contents, for reading by people or
for feeding a codebase to a Large Language Model (LLM).
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("folderwalk")
except PackageNotFoundError:
    __version__ = "unknown"
