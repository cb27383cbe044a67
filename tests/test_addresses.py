"""Tests for monitor/addresses.py"""
from ipaddress import IPv4Address, IPv6Address

import pytest

from monitor.addresses import ZERO_MAC, Address, normalize_mac, parse_ip


class TestNormalizeMac:
    """Tests for MAC address normalisation."""

    def test_already_normalized(self):
        assert normalize_mac("AA:BB:CC:DD:EE:FF") == "AA:BB:CC:DD:EE:FF"

    def test_lowercase(self):
        assert normalize_mac("aa:bb:cc:dd:ee:ff") == "AA:BB:CC:DD:EE:FF"

    def test_dash_separator(self):
        assert normalize_mac("AA-BB-CC-DD-EE-FF") == "AA:BB:CC:DD:EE:FF"

    def test_no_leading_zeros(self):
        assert normalize_mac("A:B:C:D:E:F") == "0A:0B:0C:0D:0E:0F"

    def test_cisco_dotted(self):
        assert normalize_mac("aabb.ccdd.eeff") == "AA:BB:CC:DD:EE:FF"

    def test_bare_hex(self):
        assert normalize_mac("aabbccddeeff") == "AA:BB:CC:DD:EE:FF"

    def test_raw_bytes(self):
        assert normalize_mac(b"\x1a\x1a\x1a\x1a\x1a\x1a") == "1A:1A:1A:1A:1A:1A"

    def test_empty_values(self):
        assert normalize_mac(None) == ""
        assert normalize_mac("") == ""
        assert normalize_mac(b"") == ""

    @pytest.mark.parametrize("bad", ["AA:BB:CC", "GG:BB:CC:DD:EE:FF", "not-a-mac", b"\x01\x02"])
    def test_invalid_raises(self, bad):
        with pytest.raises(ValueError):
            normalize_mac(bad)


class TestParseIp:
    """Tests for IP parsing."""

    def test_ipv4(self):
        assert parse_ip("10.0.0.5") == IPv4Address("10.0.0.5")

    def test_ipv6_zone_stripped(self):
        assert parse_ip("fe80::1%en0") == IPv6Address("fe80::1")

    def test_passthrough(self):
        ip = IPv4Address("10.0.0.5")
        assert parse_ip(ip) is ip

    def test_invalid_raises(self):
        with pytest.raises(ValueError):
            parse_ip("10.0.0.256")


class TestAddress:
    """Tests for the Address value type."""

    def test_normalizes_fields(self):
        a = Address("aa-aa-aa-aa-aa-aa", "10.0.0.5", port=67)
        assert a.mac_address == "AA:AA:AA:AA:AA:AA"
        assert a.ip_address == IPv4Address("10.0.0.5")
        assert a.port == 67

    def test_equality_ignores_port(self):
        assert Address("AA:AA:AA:AA:AA:AA", "10.0.0.5", port=1) == \
            Address("AA:AA:AA:AA:AA:AA", "10.0.0.5", port=2)
        assert len({Address("AA:AA:AA:AA:AA:AA", "10.0.0.5", port=p) for p in range(3)}) == 1

    def test_inequality_on_ip(self):
        assert Address("AA:AA:AA:AA:AA:AA", "10.0.0.5") != Address("AA:AA:AA:AA:AA:AA", "10.0.0.6")

    def test_is_valid(self):
        assert Address("AA:AA:AA:AA:AA:AA", "10.0.0.5").is_valid
        assert not Address("", "10.0.0.5").is_valid
        assert not Address(ZERO_MAC, "10.0.0.5").is_valid

    def test_oui(self):
        assert Address("a4:83:e7:01:02:03", "10.0.0.5").oui == "A4:83:E7"
        assert Address("", "10.0.0.5").oui is None

    def test_invalid_port(self):
        with pytest.raises(ValueError):
            Address("AA:AA:AA:AA:AA:AA", "10.0.0.5", port=70000)

    def test_missing_port_is_zero(self):
        a = Address("AA:AA:AA:AA:AA:AA", "10.0.0.5", port=None)
        assert a.port == 0
        assert a == Address("AA:AA:AA:AA:AA:AA", "10.0.0.5")

    def test_frozen(self):
        a = Address("AA:AA:AA:AA:AA:AA", "10.0.0.5")
        with pytest.raises(AttributeError):
            a.port = 5

    def test_str(self):
        assert str(Address("AA:AA:AA:AA:AA:AA", "10.0.0.5", port=68)) == \
            "mac=(AA:AA:AA:AA:AA:AA) ip=(10.0.0.5) port=(68)"
