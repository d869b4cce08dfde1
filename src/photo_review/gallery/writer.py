"""Background single-slot write queue for collection snapshots."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from photo_review.gallery.store import Collection


logger = logging.getLogger(__name__)


class PersistQueue:
    """Serializes collection writes on one worker thread.

    The queue holds at most one pending snapshot: submitting a new one
    replaces any snapshot that has not started writing yet. Each write
    waits ``settle_delay`` seconds first, so bursts of navigation collapse
    into a single write of the newest snapshot.
    """

    def __init__(
        self,
        write: Callable[[Collection], bool],
        settle_delay: float = 0.05,
    ):
        self._write = write
        self._settle_delay = settle_delay
        self._pending: Collection | None = None
        self._in_flight = False
        self._running = True
        self._condition = threading.Condition()
        self._thread = threading.Thread(
            target=self._run, name="persist-queue", daemon=True
        )
        self._thread.start()

    @property
    def is_running(self) -> bool:
        return self._running

    def submit(self, snapshot: Collection) -> None:
        """Queue a snapshot for writing; returns immediately."""
        with self._condition:
            if not self._running:
                logger.warning("Persist queue is shut down; snapshot dropped")
                return
            if self._pending is not None:
                logger.debug("Superseding pending snapshot")
            self._pending = snapshot
            self._condition.notify_all()

    def wait_idle(self, timeout: float | None = None) -> bool:
        """Block until nothing is pending or in flight. Returns False on timeout."""
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._condition:
            while self._pending is not None or self._in_flight:
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    return False
                self._condition.wait(remaining)
        return True

    def shutdown(self, timeout: float | None = 5.0) -> None:
        """Write anything still pending, then stop the worker thread."""
        with self._condition:
            self._running = False
            self._condition.notify_all()
        self._thread.join(timeout)

    def _run(self) -> None:
        while True:
            with self._condition:
                while self._running and self._pending is None:
                    self._condition.wait()
                if self._pending is None:
                    break
                self._in_flight = True
                if self._settle_delay > 0:
                    # Newer submits land in the slot meanwhile; shutdown cuts the wait short
                    self._condition.wait_for(lambda: not self._running, self._settle_delay)
                snapshot = self._pending
                self._pending = None

            try:
                self._write(snapshot)
            except Exception:
                logger.exception("Unexpected error while saving gallery")
            finally:
                with self._condition:
                    self._in_flight = False
                    self._condition.notify_all()
