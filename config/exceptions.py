"""Custom exception hierarchy for Host Monitor.

The tracker itself never raises while ingesting observations; these
exceptions cover invalid configuration and failing observation sources.
"""

from typing import Optional


class HostMonitorError(Exception):
    """Base exception for all Host Monitor errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class ConfigurationError(HostMonitorError):
    """Invalid tracker or driver settings.

    Raised when there are issues with:
    - Non-positive offline timeouts or poll intervals
    - Non-positive notification queue capacity

    Examples:
        >>> raise ConfigurationError("Invalid queue capacity", {"value": 0})
    """

    pass


class SourceError(HostMonitorError):
    """Observation source errors.

    Raised by producers that fail to read their backing data (for example
    the local interface table). Pollers log these and skip the batch so
    that tracker state is never partially updated.

    Attributes:
        source: Name of the failing source, if known.

    Examples:
        >>> raise SourceError("Interface table unavailable", source="psutil")
    """

    def __init__(self, message: str, source: Optional[str] = None, details: Optional[dict] = None):
        details = details or {}
        if source:
            details["source"] = source
        super().__init__(message, details)
        self.source = source
