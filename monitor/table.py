"""Display helpers for host snapshots."""
from typing import Callable, List, Optional, Sequence, Tuple

from config import TRACKER

from .addresses import Address
from .changes import Member

# Maps an OUI ("AA:BB:CC") to a manufacturer name
VendorLookup = Callable[[str], Optional[str]]


def lookup_manufacturer(address: Address, vendor_lookup: Optional[VendorLookup]) -> str:
    """Manufacturer name for an address, or "unknown".

    Lookup failures are treated as unknown since the name is display-only.
    """
    if vendor_lookup is None or address.oui is None:
        return TRACKER.UNKNOWN_MANUFACTURER
    try:
        name = vendor_lookup(address.oui)
    except Exception:  # pylint: disable=broad-except
        name = None
    return name or TRACKER.UNKNOWN_MANUFACTURER


def describe_host(address: Address, members: Sequence[Member],
                  vendor_lookup: Optional[VendorLookup] = None) -> dict:
    """Summarize one snapshot entry as a plain dict."""
    active = next((m for m in members if m.active), None)
    return {
        "mac": address.mac_address,
        "manufacturer": lookup_manufacturer(address, vendor_lookup),
        "ip": str(active.address.ip_address) if active else None,
        "addresses": [str(m.address.ip_address) for m in members],
        "last_seen": max(m.last_seen for m in members).isoformat() if members else None,
    }


def format_table(snapshot: Sequence[Tuple[Address, List[Member]]],
                 vendor_lookup: Optional[VendorLookup] = None) -> List[str]:
    """Render a snapshot as aligned text rows, one per host."""
    rows = []
    for address, members in snapshot:
        info = describe_host(address, members, vendor_lookup)
        history = ", ".join(a for a in info["addresses"] if a != info["ip"])
        row = f"{info['mac']}  {info['ip'] or '-':<39}  {info['manufacturer']}"
        if history:
            row += f"  (previously {history})"
        rows.append(row)
    return rows
