"""Graceful shutdown handling for long crawls.

The first SIGINT/SIGTERM sets a flag that the crawler checks between pages,
so the browser session is closed through the normal cleanup path. A second
signal exits immediately.
"""

import signal
import sys
import threading
from typing import Optional

from acscrape.logging_config import get_logger

__all__ = [
    "ShutdownHandler",
    "get_shutdown_handler",
    "shutdown_requested",
]

logger = get_logger("shutdown")


class ShutdownHandler:
    """Tracks whether a shutdown signal was received.

    Usage:
        handler = get_shutdown_handler().install()
        try:
            crawl()
        finally:
            handler.uninstall()
    """

    _instance: Optional["ShutdownHandler"] = None
    _lock = threading.Lock()

    def __init__(self) -> None:
        self._event = threading.Event()
        self._previous = {}
        self._installed = False

    @classmethod
    def get_instance(cls) -> "ShutdownHandler":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def install(self) -> "ShutdownHandler":
        """Install signal handlers. Only possible from the main thread."""
        if self._installed:
            return self
        for signum in (signal.SIGINT, signal.SIGTERM):
            self._previous[signum] = signal.getsignal(signum)
            signal.signal(signum, self._handle_signal)
        self._installed = True
        return self

    def uninstall(self) -> None:
        """Restore the original signal handlers."""
        if not self._installed:
            return
        for signum, previous in self._previous.items():
            signal.signal(signum, previous)
        self._previous.clear()
        self._installed = False

    def _handle_signal(self, signum: int, frame) -> None:
        name = signal.Signals(signum).name
        logger.warning(f"Received {name}, stopping after the current page (repeat to force quit)")
        self._event.set()
        signal.signal(signum, self._force_exit)

    def _force_exit(self, signum: int, frame) -> None:
        logger.error("Force quitting")
        sys.exit(1)

    @property
    def shutdown_requested(self) -> bool:
        return self._event.is_set()

    def request_shutdown(self) -> None:
        self._event.set()

    def reset(self) -> None:
        """Clear the shutdown flag (for tests or reuse)."""
        self._event.clear()


def get_shutdown_handler() -> ShutdownHandler:
    """Get the process-wide shutdown handler."""
    return ShutdownHandler.get_instance()


def shutdown_requested() -> bool:
    """Check if shutdown has been requested."""
    return get_shutdown_handler().shutdown_requested
