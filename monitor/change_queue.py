"""Bounded notification queue with drop-on-full semantics.

Producers push without ever blocking; consumers pull through a read-only
``ChangeStream`` and may block while waiting.

Usage:
    changes = ChangeQueue(capacity=128)
    stream = changes.stream()

    changes.push(change)        # never blocks
    change = stream.get()       # blocks until a change is available
"""
import logging
import queue
import threading
from typing import Iterator, List, Optional

from config import TRACKER, ConfigurationError, get_logger

from .changes import Change

logger = get_logger(__name__)


class ChangeStream:
    """Read-only view over a ChangeQueue.

    The stream is never closed by the tracker; iterating it blocks
    indefinitely waiting for the next change.
    """

    def __init__(self, changes: queue.Queue):
        self._queue = changes

    @property
    def maxsize(self) -> int:
        return self._queue.maxsize

    def qsize(self) -> int:
        return self._queue.qsize()

    def get(self, timeout: Optional[float] = None) -> Change:
        """Wait for the next change.

        Raises:
            queue.Empty: If ``timeout`` elapses with nothing to read.
        """
        return self._queue.get(block=True, timeout=timeout)

    def get_nowait(self) -> Change:
        return self._queue.get_nowait()

    def drain(self, max_items: Optional[int] = None) -> List[Change]:
        """Return all pending changes (up to ``max_items``) without blocking."""
        drained: List[Change] = []
        while max_items is None or len(drained) < max_items:
            try:
                drained.append(self._queue.get_nowait())
            except queue.Empty:
                break
        return drained

    def __iter__(self) -> Iterator[Change]:
        while True:
            yield self._queue.get()


class ChangeQueue:
    """Fixed-capacity FIFO of changes.

    Attributes:
        dropped: Number of changes discarded because the queue was full.
    """

    def __init__(self, capacity: Optional[int] = None, observer: Optional[logging.Logger] = None):
        capacity = TRACKER.QUEUE_CAPACITY if capacity is None else capacity
        if capacity <= 0:
            raise ConfigurationError("Queue capacity must be positive", {"value": capacity})

        self._queue: queue.Queue = queue.Queue(maxsize=capacity)
        self._observer = observer or logger
        self._dropped_lock = threading.Lock()
        self.dropped = 0

    @property
    def capacity(self) -> int:
        return self._queue.maxsize

    def push(self, change: Change) -> bool:
        """Enqueue a change, dropping it if the queue is full.

        Returns:
            True if queued, False if dropped.
        """
        try:
            self._queue.put_nowait(change)
            return True
        except queue.Full:
            with self._dropped_lock:
                self.dropped += 1
            self._observer.warning(f"dropping change, notification queue full: {change}")
            return False

    def stream(self) -> ChangeStream:
        return ChangeStream(self._queue)
