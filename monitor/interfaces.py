"""Observation source for this machine's own network interfaces.

Reads the interface table through psutil and reports one Address per
(interface MAC, IP) pair, which lets the tracker follow local DHCP
renumbering without any privileged capture.
"""
import socket
from typing import List, Optional

import psutil

from config import SourceError, get_logger

from .addresses import Address, ZERO_MAC, normalize_mac, parse_ip

logger = get_logger(__name__)

_IP_FAMILIES = (socket.AF_INET, socket.AF_INET6)


def _interface_mac(addrs) -> Optional[str]:
    for addr in addrs:
        if addr.family == psutil.AF_LINK:
            try:
                mac = normalize_mac(addr.address)
            except ValueError:
                return None
            if mac and mac != ZERO_MAC:
                return mac
    return None


def local_interface_addresses(include_loopback: bool = False) -> List[Address]:
    """Get (MAC, IP) observations for the local interfaces.

    Interfaces without a hardware address (loopback, tunnels) are skipped.

    Raises:
        SourceError: If the interface table cannot be read.
    """
    try:
        interfaces = psutil.net_if_addrs()
    except (psutil.Error, OSError) as e:
        raise SourceError(f"Failed to read interface table: {e}", source="psutil") from e

    observations = []
    for iface, addrs in interfaces.items():
        mac = _interface_mac(addrs)
        if mac is None:
            continue

        for addr in addrs:
            if addr.family not in _IP_FAMILIES:
                continue
            try:
                ip = parse_ip(addr.address)
            except ValueError:
                logger.debug(f"Skipping unparseable address on {iface}: {addr.address}")
                continue
            if ip.is_loopback and not include_loopback:
                continue
            observations.append(Address(mac, ip))

    return observations
