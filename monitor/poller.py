"""Background drivers around the host tracker.

``HostPoller`` periodically reads an observation source and feeds it to a
HostMap. ``ChangeConsumer`` drains the tracker's notification stream and
hands each change to a callback. Both run on daemon threads owned by the
caller, never by the tracker.

Usage:
    hosts = HostMap()
    consumer = ChangeConsumer(hosts.notifications())
    poller = HostPoller(hosts, local_interface_addresses, interval=15.0)

    consumer.start()
    poller.start()
    ...
    poller.stop()
    consumer.stop()
"""
import queue
import threading
from typing import Callable, Iterable, Optional

from config import INTERVALS, ConfigurationError, LogContext, get_logger, log_exception

from .addresses import Address
from .change_queue import ChangeStream
from .changes import Change
from .host_map import HostMap

logger = get_logger(__name__)

ObservationSource = Callable[[], Iterable[Address]]
ChangeHandler = Callable[[Change], None]


class HostPoller:
    """Feeds a HostMap from an observation source on a fixed interval.

    A failing source is logged and its batch skipped, so the tracker only
    ever sees complete batches.

    Attributes:
        interval: Seconds between polls.
        polls: Number of batches successfully applied.
        failures: Number of source reads that raised.
    """

    def __init__(self, host_map: HostMap, source: ObservationSource,
                 interval: Optional[float] = None, seed: bool = False):
        """Initialize the poller.

        Args:
            host_map: Tracker to feed.
            source: Returns the current observations when called.
            interval: Seconds between polls. Defaults to INTERVALS.POLL_SECONDS.
            seed: Load the first batch with reset_and_load (no notifications).
        """
        interval = INTERVALS.POLL_SECONDS if interval is None else interval
        if interval <= 0:
            raise ConfigurationError("Poll interval must be positive", {"value": interval})

        self.interval = interval
        self.polls = 0
        self.failures = 0
        self._host_map = host_map
        self._source = source
        self._seed_pending = seed
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def poll_once(self) -> bool:
        """Read the source once and apply the batch.

        Returns:
            True if the tracker reported a change.
        """
        try:
            observations = list(self._source())
        except Exception as e:
            self.failures += 1
            log_exception(logger, "Observation source failed, skipping batch", e)
            return False

        with LogContext(logger, f"Applying {len(observations)} observations"):
            if self._seed_pending:
                self._seed_pending = False
                self._host_map.reset_and_load(observations)
                changed = False
            else:
                changed = self._host_map.ingest(observations)

        self.polls += 1
        return changed

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.poll_once()
            except Exception as e:
                self.failures += 1
                log_exception(logger, "Poll cycle failed, continuing", e)
            self._stop_event.wait(self.interval)

    def start(self) -> None:
        """Start polling in a background thread (first poll is immediate)."""
        if self.is_running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name="HostPoller")
        self._thread.start()
        logger.debug(f"HostPoller started with interval {self.interval}s")

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop polling and wait for the thread to exit."""
        if timeout is None:
            timeout = INTERVALS.SHUTDOWN_JOIN_SECONDS
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=timeout)
            self._thread = None
        logger.debug("HostPoller stopped")


def log_change(change: Change) -> None:
    """Default handler: log each change at INFO."""
    logger.info(f"change detected: {change}")


class ChangeConsumer:
    """Drains a ChangeStream on a background thread.

    Handler errors are logged and do not stop the consumer.

    Attributes:
        processed: Number of changes handed to the handler.
    """

    def __init__(self, stream: ChangeStream, handler: Optional[ChangeHandler] = None):
        self._stream = stream
        self._handler = handler or log_change
        self._running = False
        self._thread: Optional[threading.Thread] = None
        self.processed = 0

    @property
    def is_running(self) -> bool:
        return self._running

    def _process_changes(self) -> None:
        while self._running:
            try:
                change = self._stream.get(timeout=INTERVALS.CONSUMER_POLL_SECONDS)
            except queue.Empty:
                continue

            try:
                self._handler(change)
            except Exception as e:
                logger.error(f"Error in change handler for {change.change_type.value}: {e}",
                             exc_info=True)
            self.processed += 1

    def start(self) -> None:
        if self._running:
            return

        self._running = True
        self._thread = threading.Thread(
            target=self._process_changes,
            daemon=True,
            name="ChangeConsumer"
        )
        self._thread.start()
        logger.debug("ChangeConsumer started")

    def stop(self, timeout: Optional[float] = None) -> None:
        if timeout is None:
            timeout = INTERVALS.SHUTDOWN_JOIN_SECONDS
        self._running = False
        if self._thread:
            self._thread.join(timeout=timeout)
            self._thread = None
        logger.debug("ChangeConsumer stopped")
