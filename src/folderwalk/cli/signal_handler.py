"""Signal handling utilities for the folderwalk CLI.

SIGINT (Ctrl+C) and, where the platform has it, SIGPIPE (reader of stdout went
away, e.g. ``folderwalk -o | head``) are recorded instead of killing the process
mid-write, so the writer can stop cleanly and the CLI can exit with the
conventional status code.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Optional

# SIGPIPE does not exist on Windows
SIGPIPE = getattr(signal, "SIGPIPE", None)


class SignalHandler:
    """Records SIGPIPE and SIGINT so the CLI can wind down gracefully.

    Attributes:
        sigpipe_received: Event that is set when a SIGPIPE signal is received.
        sigint_received: Event that is set when a SIGINT signal is received.
        original_sigpipe_handler: SIGPIPE handler in place before setup, if the platform has SIGPIPE.
        original_sigint_handler: SIGINT handler in place before setup.
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self.original_sigpipe_handler = signal.getsignal(SIGPIPE) if SIGPIPE is not None else None
        self.original_sigint_handler = signal.getsignal(signal.SIGINT)

    @property
    def interrupted(self) -> bool:
        """True once either signal has been received."""
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()

    def handle_sigpipe(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigpipe_received.set()
        signal.signal(signum, self.original_sigpipe_handler)

    def handle_sigint(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigint_received.set()
        signal.signal(signal.SIGINT, self.original_sigint_handler)


# Singleton shared by the writer and the CLI entry point
signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Install the SIGPIPE (when available) and SIGINT handlers."""
    if SIGPIPE is not None:
        signal.signal(SIGPIPE, signal_handler.handle_sigpipe)
    signal.signal(signal.SIGINT, signal_handler.handle_sigint)


def cleanup() -> None:
    """Silence stdout at exit after an interruption.

    Pointing stdout at the null device keeps the interpreter from reporting a
    broken pipe while it flushes during shutdown.
    """
    if signal_handler.interrupted:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


atexit.register(cleanup)
