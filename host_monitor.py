#!/usr/bin/env python3
"""
Host Monitor - tracks hosts on the local network.
Polls the local interface table, logs hosts coming online, changing IP
address and going offline, and periodically logs the current host table.
"""
import signal
import sys
import threading
from datetime import timedelta
from pathlib import Path

from config import INTERVALS, STORAGE, TRACKER, get_logger, setup_logging
from monitor import ChangeConsumer, HostMap, HostPoller, local_interface_addresses

logger = get_logger(__name__)


def main():
    data_dir = Path.home() / STORAGE.DATA_DIR_NAME
    setup_logging(data_dir=data_dir, debug=False, console_output=True)
    logger.info("Host Monitor starting...")

    hosts = HostMap(
        offline_timeout=timedelta(seconds=TRACKER.OFFLINE_TIMEOUT_SECONDS),
        queue_capacity=TRACKER.QUEUE_CAPACITY,
    )
    consumer = ChangeConsumer(hosts.notifications())
    poller = HostPoller(hosts, local_interface_addresses, interval=INTERVALS.POLL_SECONDS)

    stop_event = threading.Event()

    def signal_handler(signum, frame):
        """Handle SIGTERM/SIGINT by stopping the main loop."""
        logger.info(f"Received signal {signum}, stopping...")
        stop_event.set()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    try:
        consumer.start()
        poller.start()
        while not stop_event.wait(INTERVALS.TABLE_LOG_SECONDS):
            hosts.log_table()
    except Exception as e:
        logger.critical(f"Host Monitor crashed: {e}", exc_info=True)
        raise
    finally:
        poller.stop()
        consumer.stop()
        logger.info(
            f"Host Monitor stopped ({hosts.host_count()} hosts tracked, "
            f"{hosts.dropped_changes} changes dropped)"
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
