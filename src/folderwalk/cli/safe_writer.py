"""Safe output writing for the folderwalk CLI.

The report is written exactly once per invocation, either to a file or to a file
descriptor (stdout). Write failures other than a closed pipe are fatal and are
reported as OutputWriteError.
"""

import errno
import os
import types
from pathlib import Path
from typing import Optional, Type, Union

from folderwalk.cli.signal_handler import signal_handler
from folderwalk.exceptions import OutputWriteError


class SafeWriter:
    """Signal-aware writer for a file path or an already open file descriptor.

    Writes to a file go through a buffered text stream. Writes to a descriptor
    are issued directly with os.write, so a closed pipe surfaces on the next line.

    Attributes:
        file: Either a file path or file descriptor for output.
        fd: The actual file descriptor being written to.
        destination: Human-readable name of the sink, used in error messages.
    """

    def __init__(self, file: Union[int, str, Path]):
        """Open the sink.

        Args:
            file: A file descriptor (int) or a path to create or truncate.

        Raises:
            OutputWriteError: If the file cannot be opened for writing.
            TypeError: If ``file`` is neither an int nor path-like.
        """
        self.file = file
        self._closed = False

        if isinstance(file, int):
            self.fd = file
            self.destination = "<stdout>" if file == 1 else f"<fd {file}>"
            self._file_obj = None
        elif isinstance(file, (str, os.PathLike)):
            path = Path(file)
            self.destination = str(path)
            try:
                self._file_obj = path.open("w", encoding="utf-8")
            except OSError as e:
                raise OutputWriteError(self.destination, e) from e
            self.fd = self._file_obj.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(file).__name__}")

    def write(self, data: str) -> None:
        """Write all of ``data`` to the sink.

        Raises:
            BrokenPipeError: If SIGPIPE or SIGINT was received, or the pipe is closed.
            OutputWriteError: If any other I/O error occurs.
            ValueError: If the writer is closed.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        if signal_handler.interrupted:
            raise BrokenPipeError()

        if self._file_obj is not None:
            # File sinks are buffered and flushed on close
            try:
                self._file_obj.write(data)
            except OSError as e:
                raise OutputWriteError(self.destination, e) from e
            return

        payload = data.encode("utf-8")
        try:
            # os.write may write fewer bytes than requested
            while payload:
                written = os.write(self.fd, payload)
                payload = payload[written:]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError()
            raise OutputWriteError(self.destination, e) from e

    def close(self) -> None:
        """Close the file if this writer opened it. Descriptors passed in are left open."""
        if self._closed:
            return

        if self._file_obj is not None:
            try:
                self._file_obj.close()
            except OSError as e:
                if e.errno != errno.EPIPE:
                    raise OutputWriteError(self.destination, e) from e

        self._closed = True

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        """Close the writer, letting an exception from the with block take priority."""
        try:
            self.close()
        except OSError:
            if exc_type is None:
                raise
