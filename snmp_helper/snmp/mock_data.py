"""
Mock SNMP data generators.

Builds a small, deterministic MIB view per agent host for
MockSnmpSession:
- SNMPv2-MIB system group (sysDescr ... sysLocation)
- IF-MIB ifName / ifOperStatus for a handful of interfaces
- a MikroTik-style gauge table (MIKROTIK-MIB mtxrGaugeTable)

Values are seeded from a hash of the host so the same host always
answers the same way.
"""
from __future__ import annotations

import hashlib
from typing import Any

from snmp_helper.core.enums import DataType
from snmp_helper.snmp.oid import parse_oid

# OID segments → (type, value)
MibTree = dict[tuple[int, ...], tuple[DataType, Any]]

# SNMPv2-MIB
SYS_DESCR = "1.3.6.1.2.1.1.1.0"
SYS_OBJECT_ID = "1.3.6.1.2.1.1.2.0"
SYS_UPTIME = "1.3.6.1.2.1.1.3.0"
SYS_CONTACT = "1.3.6.1.2.1.1.4.0"
SYS_NAME = "1.3.6.1.2.1.1.5.0"
SYS_LOCATION = "1.3.6.1.2.1.1.6.0"

# IF-MIB
IF_OPER_STATUS = "1.3.6.1.2.1.2.2.1.8"       # 1=up, 2=down
IF_NAME = "1.3.6.1.2.1.31.1.1.1.1"

# MIKROTIK-MIB mtxrGaugeTable
MTXR_GAUGE_NAME = "1.3.6.1.4.1.14988.1.1.3.100.1.2"
MTXR_GAUGE_VALUE = "1.3.6.1.4.1.14988.1.1.3.100.1.3"

_INTERFACES: list[tuple[int, str]] = [
    # (ifIndex, ifName)
    (1, "ether1"),
    (2, "ether2"),
    (3, "ether3"),
    (4, "sfp-sfpplus1"),
]

_GAUGES: list[tuple[int, str]] = [
    # (gaugeIndex, name)
    (13, "voltage"),
    (14, "temperature"),
    (17, "cpu-temperature"),
]


def _det_hash(host: str, salt: str = "") -> int:
    """Deterministic hash from host + salt."""
    return int(hashlib.md5(f"{host}:{salt}".encode()).hexdigest(), 16)


def mock_tree(host: str) -> MibTree:
    """Generate the mock MIB view for one agent host."""
    tree: MibTree = {
        parse_oid(SYS_DESCR): (
            DataType.OctetString, b"RouterOS CCR2004-16G-2S+ (mock)",
        ),
        parse_oid(SYS_OBJECT_ID): (
            DataType.ObjectIdentifier, ".1.3.6.1.4.1.14988.1",
        ),
        parse_oid(SYS_UPTIME): (
            DataType.TimeTicks, _det_hash(host, "uptime") % 100_000_000,
        ),
        parse_oid(SYS_CONTACT): (DataType.OctetString, b"noc@example.net"),
        parse_oid(SYS_NAME): (DataType.OctetString, f"mock-{host}".encode()),
        parse_oid(SYS_LOCATION): (DataType.OctetString, b"lab"),
    }

    for if_index, if_name in _INTERFACES:
        up = _det_hash(host, f"if{if_index}") % 4 != 0
        tree[parse_oid(f"{IF_OPER_STATUS}.{if_index}")] = (
            DataType.Integer, 1 if up else 2,
        )
        tree[parse_oid(f"{IF_NAME}.{if_index}")] = (
            DataType.OctetString, if_name.encode(),
        )

    for gauge_index, name in _GAUGES:
        tree[parse_oid(f"{MTXR_GAUGE_NAME}.{gauge_index}")] = (
            DataType.OctetString, name.encode(),
        )
        tree[parse_oid(f"{MTXR_GAUGE_VALUE}.{gauge_index}")] = (
            DataType.Gauge, 200 + _det_hash(host, name) % 400,
        )

    return tree
