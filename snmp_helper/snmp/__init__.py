"""
SNMP Module.

Convenience layer over pysnmp: every request's varbinds are folded into
one map keyed by canonical OID (``.1.3.6.1.2.1.1.1.0``).

Architecture:
    AsyncSnmpSession — pysnmp asyncio adapter (get/get_next/walk/set)
    MockSnmpSession  — in-memory drop-in used when SNMP_MOCK=true
    aggregator       — result maps over any session, TransportError on failure
    SessionRegistry  — lazily created process-wide session (shared mode)
    shared           — module-level operations on the shared session
    SnmpClient       — operations on a session of its own (owned mode)
"""
from .aggregator import TransportError
from .client import SnmpClient
from .engine import (
    AsyncSnmpSession,
    SessionClosedError,
    SnmpError,
    SnmpTimeoutError,
)
from .mock_engine import MockSnmpSession
from .session_registry import SessionRegistry, create_session

__all__ = [
    "AsyncSnmpSession",
    "MockSnmpSession",
    "SessionClosedError",
    "SessionRegistry",
    "SnmpClient",
    "SnmpError",
    "SnmpTimeoutError",
    "TransportError",
    "create_session",
]
