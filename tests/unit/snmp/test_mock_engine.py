"""Unit tests for MockSnmpSession and the mock MIB data."""
from __future__ import annotations

import pytest

from snmp_helper.core.enums import DataType
from snmp_helper.snmp.engine import SessionClosedError, SnmpError, SnmpTimeoutError
from snmp_helper.snmp.mock_data import IF_NAME, SYS_NAME, mock_tree
from snmp_helper.snmp.mock_engine import MockSnmpSession
from snmp_helper.snmp.oid import parse_oid

GAUGE_ROOT = "1.3.6.1.4.1.14988.1.1.3.100.1.2"
V1 = {"host": "192.168.88.1", "version": 0}
V2C = {"host": "192.168.88.1", "version": 1}


# ── Lookups ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_get_returns_integer_segments(mock_session):
    [binding] = await mock_session.get(V2C, f".{GAUGE_ROOT}.13")

    assert binding.oid == parse_oid(f"{GAUGE_ROOT}.13")
    assert binding.type == DataType.Integer
    assert binding.value == 42
    assert binding.value_str == "42"


@pytest.mark.asyncio
async def test_missing_oid_v2c_is_no_such_object(mock_session):
    [binding] = await mock_session.get(V2C, "1.3.6.1.2.1.1.99.0")

    assert binding.type == DataType.NoSuchObject
    assert binding.value is None


@pytest.mark.asyncio
async def test_missing_oid_v1_is_no_such_name(mock_session):
    with pytest.raises(SnmpError, match="noSuchName at .1.3.6.1.2.1.1.99.0"):
        await mock_session.get(V1, "1.3.6.1.2.1.1.99.0")


@pytest.mark.asyncio
async def test_get_all_keeps_request_order(mock_session):
    bindings = await mock_session.get_all(
        V2C, [f"{GAUGE_ROOT}.17", f"{GAUGE_ROOT}.13"],
    )
    assert [b.value for b in bindings] == [51, 42]


# ── GETNEXT / walk ───────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_get_next_skips_to_following_oid(mock_session):
    [binding] = await mock_session.get_next(V2C, GAUGE_ROOT)
    assert binding.oid == parse_oid(f"{GAUGE_ROOT}.13")


@pytest.mark.asyncio
async def test_get_next_past_end(mock_session):
    [binding] = await mock_session.get_next(V2C, f"{GAUGE_ROOT}.17")
    assert binding.type == DataType.EndOfMibView

    with pytest.raises(SnmpError, match="noSuchName"):
        await mock_session.get_next(V1, f"{GAUGE_ROOT}.17")


@pytest.mark.asyncio
async def test_get_subtree_stays_in_scope(mock_session):
    bindings = await mock_session.get_subtree(V2C, GAUGE_ROOT)

    assert [b.oid[-1] for b in bindings] == [13, 14, 17]


@pytest.mark.asyncio
async def test_get_subtree_of_leaf_is_empty(mock_session):
    assert await mock_session.get_subtree(V2C, f"{GAUGE_ROOT}.13") == []


# ── SET ──────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_set_infers_octet_string(mock_session):
    [binding] = await mock_session.set(V2C, SYS_NAME, value="core-1")

    assert binding.type == DataType.OctetString
    assert binding.value == b"core-1"


@pytest.mark.asyncio
async def test_set_is_per_host(gauge_data):
    session = MockSnmpSession(data=gauge_data, latency=0)

    await session.set(V2C, f"{GAUGE_ROOT}.13", DataType.Integer, 7)
    [same] = await session.get(V2C, f"{GAUGE_ROOT}.13")
    [other] = await session.get({"host": "10.0.0.2"}, f"{GAUGE_ROOT}.13")

    assert same.value == 7
    assert other.value == 42


# ── Failures ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_unreachable_host_times_out():
    session = MockSnmpSession(latency=0, unreachable_hosts=["10.9.9.9"])

    with pytest.raises(SnmpTimeoutError):
        await session.get({"host": "10.9.9.9"}, SYS_NAME)


@pytest.mark.asyncio
async def test_closed_session_rejects_calls(mock_session):
    mock_session.close()

    assert mock_session.closed is True
    with pytest.raises(SessionClosedError):
        await mock_session.get(V2C, SYS_NAME)


# ── Generated data ───────────────────────────────────────────────────


def test_mock_tree_is_deterministic():
    assert mock_tree("10.0.0.1") == mock_tree("10.0.0.1")


def test_mock_tree_names_host():
    tree = mock_tree("10.0.0.1")

    assert tree[parse_oid(SYS_NAME)] == (DataType.OctetString, b"mock-10.0.0.1")
    assert tree[parse_oid(f"{IF_NAME}.1")] == (DataType.OctetString, b"ether1")


@pytest.mark.asyncio
async def test_generated_tree_walk():
    session = MockSnmpSession(latency=0)

    bindings = await session.get_subtree({"host": "10.0.0.1"}, IF_NAME)

    assert [b.value for b in bindings] == [b"ether1", b"ether2", b"ether3", b"sfp-sfpplus1"]
