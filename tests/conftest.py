"""Pytest configuration and shared fixtures.

This module provides:
- A controllable clock for aging tests
- Address builders and a mocked psutil interface table
- Pytest markers for test categorization (unit, integration, slow)
"""
import socket
import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from typing import Generator
from unittest.mock import MagicMock, patch

import psutil
import pytest

from monitor.addresses import Address


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: mark test as a unit test (fast, isolated)")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# =============================================================================
# Clock
# =============================================================================


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 20, 12, 0, 0))


# =============================================================================
# Directory Fixtures
# =============================================================================


@pytest.fixture
def temp_data_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for log files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# =============================================================================
# Address Fixtures
# =============================================================================


@pytest.fixture
def addr():
    """Build an Address from strings: addr("AA:AA:AA:AA:AA:AA", "10.0.0.5")."""
    def _make(mac: str, ip: str, port: int = 0) -> Address:
        return Address(mac, ip, port=port)
    return _make


@pytest.fixture
def observer() -> MagicMock:
    """Stand-in logger for tracker diagnostics."""
    return MagicMock()


# =============================================================================
# Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_network_interface() -> Generator[MagicMock, None, None]:
    """Mock psutil interface table with one Ethernet interface and loopback."""
    with patch("psutil.net_if_addrs") as mock_addrs:
        mock_addrs.return_value = {
            "en0": [
                MagicMock(family=psutil.AF_LINK, address="a4:83:e7:01:02:03"),
                MagicMock(family=socket.AF_INET, address="192.168.1.50"),
                MagicMock(family=socket.AF_INET6, address="fe80::1%en0"),
            ],
            "lo0": [
                MagicMock(family=psutil.AF_LINK, address="00:00:00:00:00:00"),
                MagicMock(family=socket.AF_INET, address="127.0.0.1"),
            ],
        }
        yield mock_addrs
