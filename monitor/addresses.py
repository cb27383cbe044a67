"""Address value type for host observations.

An ``Address`` is one (hardware address, network address, port) tuple as
reported by an observation source. Identity is the MAC plus the IP; the
port is carried along for display only.
"""
import ipaddress
import re
from dataclasses import dataclass, field
from typing import Optional, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

ZERO_MAC = "00:00:00:00:00:00"

_HEX_PAIR = re.compile(r'^[0-9A-F]{2}$')


def normalize_mac(value: Union[str, bytes, bytearray, None]) -> str:
    """Normalize a MAC address to XX:XX:XX:XX:XX:XX format.

    Accepts raw 6-byte values as well as strings separated by ':', '-'
    or Cisco-style '.' groups. Empty input normalizes to "".

    Raises:
        ValueError: If the value is not a 48-bit hardware address.
    """
    if value is None:
        return ""

    if isinstance(value, (bytes, bytearray)):
        if not value:
            return ""
        if len(value) != 6:
            raise ValueError(f"Invalid MAC address length: {len(value)} bytes (expected 6)")
        return ":".join(f"{b:02X}" for b in value)

    text = value.strip().upper()
    if not text:
        return ""

    parts = re.split(r'[:\-]', text)
    if len(parts) == 6:
        parts = [p.zfill(2) for p in parts]
    else:
        # aabb.ccdd.eeff or a bare 12-digit hex string
        groups = text.split('.')
        if len(groups) == 3:
            text = "".join(g.zfill(4) for g in groups)
        parts = [text[i:i + 2] for i in range(0, len(text), 2)] if len(text) == 12 else []

    if len(parts) != 6 or not all(_HEX_PAIR.match(p) for p in parts):
        raise ValueError(f"Invalid MAC address format: {value!r}")

    return ":".join(parts)


def parse_ip(value: Union[str, IPAddress]) -> IPAddress:
    """Parse an IP address, dropping any IPv6 zone suffix (fe80::1%en0)."""
    if isinstance(value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return value
    return ipaddress.ip_address(str(value).strip().split('%', 1)[0])


@dataclass(frozen=True)
class Address:
    """A single (MAC, IP, port) observation.

    Equality and hashing use the MAC and IP only.

    Example:
        >>> a = Address("aa-aa-aa-aa-aa-aa", "10.0.0.5", port=67)
        >>> a == Address("AA:AA:AA:AA:AA:AA", "10.0.0.5")
        True
    """
    mac_address: str
    ip_address: IPAddress
    port: Optional[int] = field(default=0, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "mac_address", normalize_mac(self.mac_address))
        object.__setattr__(self, "ip_address", parse_ip(self.ip_address))
        if self.port is None:
            object.__setattr__(self, "port", 0)
        if not 0 <= self.port <= 0xFFFF:
            raise ValueError(f"Invalid port: {self.port}")

    @property
    def is_valid(self) -> bool:
        """False for an empty or all-zero hardware address."""
        return bool(self.mac_address) and self.mac_address != ZERO_MAC

    @property
    def oui(self) -> Optional[str]:
        """Vendor prefix (first three octets), or None without a MAC."""
        if not self.mac_address:
            return None
        return self.mac_address[:8]

    def __str__(self) -> str:
        return f"mac=({self.mac_address}) ip=({self.ip_address}) port=({self.port})"
