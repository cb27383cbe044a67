"""Configuration module for Host Monitor.

Provides centralized configuration, logging and exceptions.
"""
from config.constants import (
    INTERVALS,
    STORAGE,
    TRACKER,
    Intervals,
    StorageConfig,
    TrackerConfig,
)
from config.exceptions import (
    ConfigurationError,
    HostMonitorError,
    SourceError,
)
from config.logging_config import LogContext, get_logger, log_exception, setup_logging

__all__ = [
    # Constants
    "TRACKER",
    "INTERVALS",
    "STORAGE",
    "TrackerConfig",
    "Intervals",
    "StorageConfig",
    # Exceptions
    "HostMonitorError",
    "ConfigurationError",
    "SourceError",
    # Logging
    "setup_logging",
    "get_logger",
    "log_exception",
    "LogContext",
]
