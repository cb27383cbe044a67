"""Change events and per-host member records."""
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from .addresses import Address


class ChangeType(Enum):
    """Kinds of host state transitions."""
    UNKNOWN = "unknown"
    IP_CHANGE = "ip change"
    ONLINE = "online"
    OFFLINE = "offline"


@dataclass(frozen=True)
class Change:
    """A host state transition delivered through the notification stream.

    ``previous_address`` is only set for ``IP_CHANGE`` and holds the
    address that was active right before this one.
    """
    change_type: ChangeType
    address: Address
    online: bool
    last_seen: datetime
    previous_address: Optional[Address] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for logging and alerting consumers."""
        return {
            "type": self.change_type.value,
            "mac": self.address.mac_address,
            "ip": str(self.address.ip_address),
            "port": self.address.port,
            "online": self.online,
            "previous_ip": (
                str(self.previous_address.ip_address) if self.previous_address else None
            ),
            "last_seen": self.last_seen.isoformat(),
        }

    def __str__(self) -> str:
        return (
            f"change=({self.change_type.value}) online=({self.online}) "
            f"addr=({self.address}) previousAddr=({self.previous_address}) "
            f"lastSeen=({self.last_seen.isoformat()})"
        )


@dataclass
class Member:
    """One network address observed for a host."""
    address: Address
    active: bool
    last_seen: datetime

    def copy(self) -> 'Member':
        return replace(self)

    def __str__(self) -> str:
        return f"{self.address} lastSeen=({self.last_seen.isoformat(timespec='seconds')})"
