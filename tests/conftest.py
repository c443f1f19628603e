"""Root conftest — shared fixtures for all tests."""
from __future__ import annotations

import os

import pytest

# Never let the suite pick up a real agent from a developer's .env
os.environ.setdefault("SNMP_MOCK", "true")

from snmp_helper.core.enums import DataType  # noqa: E402
from snmp_helper.snmp import session_registry  # noqa: E402
from snmp_helper.snmp.mock_engine import MockSnmpSession  # noqa: E402

GAUGE_ROOT = ".1.3.6.1.4.1.14988.1.1.3.100.1.2"
GAUGE_OID = ".1.3.6.1.4.1.14988.1.1.3.100.1.2.13"


@pytest.fixture(autouse=True)
def _reset_registry():
    """Each test starts without a shared session."""
    session_registry._registry = None
    yield
    if session_registry._registry is not None:
        session_registry._registry.close()
    session_registry._registry = None


@pytest.fixture
def gauge_data() -> dict:
    """Three rows of a MikroTik gauge table plus one unrelated OID."""
    return {
        f"{GAUGE_ROOT}.13": (DataType.Integer, 42),
        f"{GAUGE_ROOT}.14": (DataType.Integer, 37),
        f"{GAUGE_ROOT}.17": (DataType.Integer, 51),
        ".1.3.6.1.2.1.1.5.0": (DataType.OctetString, b"router-1"),
    }


@pytest.fixture
def mock_session(gauge_data) -> MockSnmpSession:
    """In-memory session answering from gauge_data, no latency."""
    return MockSnmpSession(data=gauge_data, latency=0)


@pytest.fixture
def options() -> dict:
    return {"host": "192.168.88.1", "community": "public", "version": 1}
