"""Unit tests for the SafeWriter class in the folderwalk CLI."""

import errno
import os
from unittest.mock import patch

import pytest

from folderwalk.cli.safe_writer import SafeWriter
from folderwalk.exceptions import OutputWriteError


@pytest.fixture
def mock_signals():
    """Replace the signal handler so writes see no pending signals."""
    with patch("folderwalk.cli.safe_writer.signal_handler") as mock:
        mock.interrupted = False
        yield mock


@pytest.fixture
def pipe():
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    for fd in (read_fd, write_fd):
        try:
            os.close(fd)
        except OSError:
            pass


def test_init_with_fd():
    writer = SafeWriter(1)
    assert writer.fd == 1
    assert writer.destination == "<stdout>"
    assert writer._file_obj is None


def test_init_rejects_other_types():
    with pytest.raises(TypeError):
        SafeWriter(3.5)


def test_write_to_file(tmp_path, mock_signals):
    path = tmp_path / "files.txt"
    with SafeWriter(path) as writer:
        assert writer.destination == str(path)
        writer.write("root\n")
        writer.write("└── héllo.txt\n")

    assert path.read_text(encoding="utf-8") == "root\n└── héllo.txt\n"
    assert writer._closed


def test_file_is_truncated(tmp_path, mock_signals):
    path = tmp_path / "files.txt"
    path.write_text("stale report from an earlier run\n")
    with SafeWriter(str(path)) as writer:
        writer.write("new\n")
    assert path.read_text() == "new\n"


def test_open_failure_raises_output_write_error(tmp_path):
    with pytest.raises(OutputWriteError) as exc_info:
        SafeWriter(tmp_path / "missing_dir" / "files.txt")
    assert isinstance(exc_info.value.error, FileNotFoundError)


def test_write_to_fd(pipe, mock_signals):
    read_fd, write_fd = pipe
    with SafeWriter(write_fd) as writer:
        writer.write("line\n")
    assert os.read(read_fd, 100) == b"line\n"
    # Descriptors passed in stay open
    os.fstat(write_fd)


def test_write_after_close(tmp_path, mock_signals):
    writer = SafeWriter(tmp_path / "out.txt")
    writer.close()
    writer.close()  # closing twice is harmless
    with pytest.raises(ValueError, match="closed"):
        writer.write("x")


def test_write_after_signal_raises_broken_pipe(tmp_path):
    with patch("folderwalk.cli.safe_writer.signal_handler") as mock:
        mock.interrupted = True
        with SafeWriter(tmp_path / "out.txt") as writer:
            with pytest.raises(BrokenPipeError):
                writer.write("x")


def test_epipe_becomes_broken_pipe(mock_signals):
    writer = SafeWriter(1)
    with patch("os.write", side_effect=OSError(errno.EPIPE, "Broken pipe")):
        with pytest.raises(BrokenPipeError):
            writer.write("x")


def test_other_write_errors_become_output_write_error(mock_signals):
    writer = SafeWriter(1)
    with patch("os.write", side_effect=OSError(errno.ENOSPC, "No space left on device")):
        with pytest.raises(OutputWriteError, match="No space left on device"):
            writer.write("x")


def test_partial_writes_are_completed(mock_signals):
    written = []

    def one_byte_at_a_time(fd, data):
        written.append(data[:1])
        return 1

    writer = SafeWriter(1)
    with patch("os.write", side_effect=one_byte_at_a_time):
        writer.write("abc")
    assert b"".join(written) == b"abc"


def test_file_sink_is_buffered(tmp_path, mock_signals):
    path = tmp_path / "files.txt"
    with patch("os.write") as os_write:
        with SafeWriter(path) as writer:
            for number in range(100):
                writer.write(f"line {number}\n")
    os_write.assert_not_called()
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 100
    assert lines[-1] == "line 99"
