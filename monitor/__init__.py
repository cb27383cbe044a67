"""Host presence monitoring components.

This package tracks which hosts are reachable on the local network and
reports when they come online, change IP address, or go offline.

Modules:
    addresses: Address value type and MAC normalization
    changes: Change events and member records
    change_queue: Bounded drop-on-full notification queue
    host_map: The thread-safe host presence tracker
    table: Snapshot formatting with optional vendor lookup
    poller: Background polling and notification-draining drivers
    interfaces: psutil-backed source for local interface addresses

Example:
    >>> from monitor import Address, HostMap
    >>> hosts = HostMap()
    >>> hosts.ingest([Address("AA:AA:AA:AA:AA:AA", "10.0.0.5")])
    True
"""
from .addresses import Address, normalize_mac
from .change_queue import ChangeQueue, ChangeStream
from .changes import Change, ChangeType, Member
from .host_map import HostMap
from .interfaces import local_interface_addresses
from .poller import ChangeConsumer, HostPoller
from .table import describe_host, format_table

__all__ = [
    # Data model
    "Address",
    "normalize_mac",
    "Change",
    "ChangeType",
    "Member",
    # Tracker
    "HostMap",
    "ChangeQueue",
    "ChangeStream",
    # Drivers
    "HostPoller",
    "ChangeConsumer",
    "local_interface_addresses",
    # Display
    "describe_host",
    "format_table",
]
