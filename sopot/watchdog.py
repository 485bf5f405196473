"""Watch-dog timer that notices when the observed code stops checking in."""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

logger = logging.getLogger(__name__)

_NOT_RESPONDING_MESSAGE = (
    "Process is not responding! Hold the Alt key for a few seconds to kill the process "
    "and generate a crash report that will allow to debug the problem..."
)


def _report_not_responding() -> None:
    logger.info(_NOT_RESPONDING_MESSAGE)


class WatchDogTimer:
    """Calls on_timeout from a checker thread while restart() has not been called for timeout_ms.

    The checker wakes every check_interval seconds and calls on_timeout on each
    wake-up for as long as the timer stays expired.
    """

    def __init__(
        self,
        timeout_ms: int = 5000,
        on_timeout: Optional[Callable[[], None]] = None,
        check_interval: float = 1.0,
    ) -> None:
        if timeout_ms < 0:
            raise ValueError(f"timeout must not be negative, got {timeout_ms}")
        if check_interval <= 0:
            raise ValueError(f"check interval must be positive, got {check_interval}")
        self._timeout = timeout_ms / 1000
        self._on_timeout = on_timeout or _report_not_responding
        self._check_interval = check_interval
        self._last_reset = time.monotonic()
        self._exiting = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None

    def start(self) -> None:
        if self.running:
            logger.error("Trying to start a running watch-dog timer")
            return
        self._last_reset = time.monotonic()
        self._exiting.clear()
        self._thread = threading.Thread(target=self._checker, name="watchdog", daemon=True)
        self._thread.start()
        logger.info("Watchdog timer started")

    def stop(self) -> None:
        if not self.running:
            logger.error("Trying to stop a watch-dog timer that is not running")
            return
        self._exiting.set()
        self._thread.join()
        self._thread = None
        logger.info("Watchdog timer stopped")

    def restart(self) -> None:
        """Reset the countdown."""
        self._last_reset = time.monotonic()

    @contextmanager
    def paused(self) -> Iterator[WatchDogTimer]:
        """Stop the timer for the duration of a with block if it is running."""
        was_running = self.running
        if was_running:
            self.stop()
        try:
            yield self
        finally:
            if was_running:
                self.start()

    def __enter__(self) -> WatchDogTimer:
        self.start()
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()

    def __del__(self) -> None:
        thread = getattr(self, "_thread", None)
        if thread is not None:
            self._exiting.set()
            if thread is not threading.current_thread():
                thread.join()

    def _timed_out(self) -> bool:
        return time.monotonic() - self._last_reset >= self._timeout

    def _checker(self) -> None:
        while not self._exiting.is_set():
            if self._timed_out():
                try:
                    self._on_timeout()
                except Exception:
                    logger.exception("Watch-dog timeout handler failed")
            self._exiting.wait(self._check_interval)