"""Centralized constants and configuration for Host Monitor.

This module contains the tunable values for the host tracker, the polling
drivers and the logging system. Keeping them in one place makes defaults
easy to find and override.

Usage:
    from config.constants import TRACKER, INTERVALS

    timeout = TRACKER.OFFLINE_TIMEOUT_SECONDS
    poll_every = INTERVALS.POLL_SECONDS
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class TrackerConfig:
    """Host presence tracker defaults."""
    # A member unseen for longer than this is reaped
    OFFLINE_TIMEOUT_SECONDS: float = 300.0  # 5 minutes

    # Notification queue size, pushes beyond this are dropped
    QUEUE_CAPACITY: int = 128

    # Shown in tables when the vendor lookup has no answer
    UNKNOWN_MANUFACTURER: str = "unknown"


@dataclass(frozen=True)
class Intervals:
    """Time intervals for the background drivers (in seconds)."""
    # Observation source polling
    POLL_SECONDS: float = 15.0

    # Periodic table dump from the entry script
    TABLE_LOG_SECONDS: float = 300.0

    # How long a consumer waits on an empty stream before re-checking stop
    CONSUMER_POLL_SECONDS: float = 0.1

    # Join timeout for background threads on stop()
    SHUTDOWN_JOIN_SECONDS: float = 1.0


@dataclass(frozen=True)
class StorageConfig:
    """Storage and file-related configuration."""
    DATA_DIR_NAME: str = ".host-monitor"
    LOG_FILE: str = "host_monitor.log"

    # Log rotation
    LOG_MAX_BYTES: int = 5_000_000  # 5MB
    LOG_BACKUP_COUNT: int = 3


# Global instances - import these
TRACKER = TrackerConfig()
INTERVALS = Intervals()
STORAGE = StorageConfig()
