"""Host presence tracker.

Keeps the set of hosts currently seen on the local network, keyed by MAC
address, and emits a change whenever a host comes online, moves to another
IP address, or goes unseen for longer than the offline timeout.

The tracker is a passive, thread-safe object: it owns no thread. Producers
call ``ingest`` with batches of observations; consumers read changes from
``notifications()``.

Usage:
    hosts = HostMap()
    hosts.ingest([Address("AA:AA:AA:AA:AA:AA", "10.0.0.5")])

    for change in hosts.notifications():
        print(change)
"""
import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from config import TRACKER, ConfigurationError, get_logger

from .addresses import Address, normalize_mac
from .change_queue import ChangeQueue, ChangeStream
from .changes import Change, ChangeType, Member
from .table import VendorLookup, describe_host

logger = get_logger(__name__)

HostSnapshot = Tuple[Address, List[Member]]


class HostMap:
    """Tracks hosts by MAC address and reports their transitions.

    Each host holds an insertion-ordered list of members, one per IP
    address it has used. At most one member is active, and no two members
    share an IP address.

    Attributes:
        offline_timeout: Age after which an unseen member is reaped.

    Example:
        >>> hosts = HostMap(offline_timeout=timedelta(minutes=2))
        >>> hosts.ingest([Address("AA:AA:AA:AA:AA:AA", "10.0.0.5")])
        True
        >>> hosts.notifications().get_nowait().change_type
        <ChangeType.ONLINE: 'online'>
    """

    def __init__(
        self,
        offline_timeout: Union[timedelta, float, None] = None,
        queue_capacity: Optional[int] = None,
        observer: Optional[logging.Logger] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize the tracker.

        Args:
            offline_timeout: timedelta or seconds. Defaults to 5 minutes.
            queue_capacity: Notification queue size. Defaults to 128.
            observer: Logger for non-fatal diagnostics such as dropped changes.
            clock: Returns the current time; injectable for tests.

        Raises:
            ConfigurationError: If the timeout or capacity is not positive.
        """
        if offline_timeout is None:
            offline_timeout = timedelta(seconds=TRACKER.OFFLINE_TIMEOUT_SECONDS)
        elif not isinstance(offline_timeout, timedelta):
            offline_timeout = timedelta(seconds=offline_timeout)
        if offline_timeout <= timedelta(0):
            raise ConfigurationError(
                "Offline timeout must be positive",
                {"value": offline_timeout.total_seconds()},
            )

        self.offline_timeout = offline_timeout
        self._logger = observer or logger
        self._clock = clock or datetime.now
        self._changes = ChangeQueue(queue_capacity, observer=self._logger)

        # mac -> members
        self._hosts: Dict[str, List[Member]] = {}
        self._lock = threading.Lock()

        self._logger.debug(
            f"HostMap initialized: timeout={offline_timeout.total_seconds():.0f}s, "
            f"capacity={self._changes.capacity}"
        )

    @property
    def dropped_changes(self) -> int:
        """Number of changes lost to a full notification queue."""
        return self._changes.dropped

    # ========================================================================
    # State transitions (caller holds self._lock)
    # ========================================================================

    def _update(self, address: Address, emit_changes: bool) -> bool:
        if not isinstance(address, Address) or not address.is_valid:
            return False

        now = self._clock()
        mac = address.mac_address
        members = self._hosts.get(mac)

        if members is None:
            # New to us
            self._hosts[mac] = [Member(address=address, active=True, last_seen=now)]
            if emit_changes:
                self._changes.push(Change(
                    change_type=ChangeType.ONLINE,
                    address=address,
                    online=True,
                    last_seen=now,
                ))
            return True

        found = False
        previous_address: Optional[Address] = None
        for member in members:
            if member.address.ip_address == address.ip_address:
                member.last_seen = now
                member.active = True
                found = True
            else:
                if member.active:
                    previous_address = member.address
                member.active = False

        if found and previous_address is None:
            # Same address as before
            return False

        if not found:
            members.append(Member(address=address, active=True, last_seen=now))

        # Also emitted when switching back to an address used earlier
        if emit_changes:
            self._changes.push(Change(
                change_type=ChangeType.IP_CHANGE,
                address=address,
                online=True,
                last_seen=now,
                previous_address=previous_address,
            ))
        return True

    def _reap(self) -> bool:
        now = self._clock()
        changed = False

        for mac in list(self._hosts):
            members = self._hosts[mac]
            kept = []
            for member in members:
                if now - member.last_seen <= self.offline_timeout:
                    kept.append(member)
                    continue

                changed = True
                self._changes.push(Change(
                    change_type=ChangeType.OFFLINE,
                    address=member.address,
                    online=False,
                    last_seen=member.last_seen,
                ))

            if not kept:
                del self._hosts[mac]
            elif len(kept) != len(members):
                self._hosts[mac] = kept

        return changed

    # ========================================================================
    # Public API
    # ========================================================================

    def ingest(self, observations: Iterable[Address]) -> bool:
        """Apply a batch of observations, then reap expired members.

        Observations are processed in order. Entries that are not an
        Address, or that carry no usable MAC, are skipped.

        Returns:
            True if any observation changed state or anything was reaped.
        """
        with self._lock:
            changed = False
            for address in observations:
                changed = self._update(address, emit_changes=True) or changed

            changed = self._reap() or changed

        return changed

    update_addresses = ingest

    def reset(self) -> None:
        """Forget all tracked hosts."""
        with self._lock:
            self._hosts.clear()

    def reset_and_load(self, observations: Iterable[Address]) -> None:
        """Replace all state with the given observations without emitting changes.

        Use this to seed the tracker from a full snapshot; use ``ingest``
        when notifications are wanted.
        """
        with self._lock:
            self._hosts.clear()
            for address in observations:
                self._update(address, emit_changes=False)
            loaded = len(self._hosts)

        self._logger.debug(f"Loaded {loaded} hosts without notifications")

    def notifications(self) -> ChangeStream:
        """Read-only stream of changes, oldest first."""
        return self._changes.stream()

    def snapshot(self) -> List[HostSnapshot]:
        """Copy of the current hosts as (address, members) pairs.

        The address is the active member's, or the first member's when
        none is active.
        """
        with self._lock:
            result = []
            for members in self._hosts.values():
                current = next((m for m in members if m.active), members[0])
                result.append((current.address, [m.copy() for m in members]))
            return result

    def get_members(self, mac_address: str) -> List[Member]:
        """Copy of the members recorded for a MAC, empty if unknown."""
        mac = normalize_mac(mac_address)
        with self._lock:
            return [m.copy() for m in self._hosts.get(mac, [])]

    def host_count(self) -> int:
        with self._lock:
            return len(self._hosts)

    def log_table(self, vendor_lookup: Optional[VendorLookup] = None) -> None:
        """Log one line per tracked host, with its manufacturer if known."""
        for address, members in self.snapshot():
            row = describe_host(address, members, vendor_lookup)
            self._logger.info(
                f"current table: mac={row['mac']} manufacturer={row['manufacturer']} "
                f"members=[{', '.join(str(m) for m in members)}]"
            )
