"""
Mock SNMP Session.

Drop-in replacement for AsyncSnmpSession that answers from an in-memory
MIB tree without sending any UDP packets. Used when SNMP_MOCK=true and
by the test-suite.

Implements the same get() / get_all() / get_next() / get_subtree() /
set() / close() interface, including the agent-side differences between
SNMPv1 (noSuchName error status) and SNMPv2c (exception values).
"""
from __future__ import annotations

import asyncio
import bisect
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from snmp_helper.core.enums import DataType, Versions
from snmp_helper.core.types import OIDLike, RawVarBind
from snmp_helper.schemas.options import SessionOptions
from snmp_helper.snmp.engine import (
    Options,
    SessionClosedError,
    SnmpError,
    SnmpTimeoutError,
)
from snmp_helper.snmp.mock_data import MibTree, mock_tree
from snmp_helper.snmp.oid import format_oid, parse_oid

logger = logging.getLogger(__name__)


def _value_str(type: DataType, value: Any) -> str:
    if value is None:
        return {
            DataType.NoSuchObject: "No Such Object currently exists at this OID",
            DataType.NoSuchInstance: "No Such Instance currently exists at this OID",
            DataType.EndOfMibView: "No more variables left in this MIB View",
        }.get(type, "")
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _binding(oid: tuple[int, ...], type: DataType, value: Any) -> RawVarBind:
    return RawVarBind(oid=oid, type=type, value=value, value_str=_value_str(type, value))


class MockSnmpSession:
    """
    Mock SNMP session — same interface as AsyncSnmpSession.

    With ``data`` every host shares that tree; without it each host gets
    its own deterministic tree from mock_data.py. SETs are kept per host
    for the lifetime of the session.
    """

    def __init__(
        self,
        data: Mapping[OIDLike, tuple[DataType, Any]] | None = None,
        latency: float = 0.005,
        unreachable_hosts: Iterable[str] = (),
    ) -> None:
        self._data: MibTree | None = (
            {parse_oid(oid): entry for oid, entry in data.items()}
            if data is not None else None
        )
        self._latency = latency
        self._unreachable = frozenset(unreachable_hosts)
        self._trees: dict[str, MibTree] = {}
        self._closed = False
        logger.info("MockSnmpSession initialized (no real SNMP traffic)")

    @property
    def closed(self) -> bool:
        return self._closed

    def _tree(self, host: str) -> MibTree:
        if host not in self._trees:
            self._trees[host] = dict(self._data) if self._data is not None else mock_tree(host)
        return self._trees[host]

    async def _enter(self, op: str, options: Options) -> SessionOptions:
        """Common prologue: closed check, simulated latency, reachability."""
        if self._closed:
            raise SessionClosedError("SNMP session is closed")
        opts = SessionOptions.coerce(options)
        await asyncio.sleep(self._latency)
        if opts.host in self._unreachable:
            raise SnmpTimeoutError(
                f"SNMP {op} timeout: {opts.host}: "
                "No SNMP response received before timeout"
            )
        return opts

    @staticmethod
    def _no_such_name(op: str, oid: tuple[int, ...]) -> SnmpError:
        return SnmpError(f"SNMP {op} error status: noSuchName at {format_oid(oid)}")

    def _lookup(self, op: str, opts: SessionOptions, oid: OIDLike) -> RawVarBind:
        segments = parse_oid(oid)
        entry = self._tree(opts.host).get(segments)
        if entry is None:
            if opts.version == Versions.SNMPv1:
                raise self._no_such_name(op, segments)
            return _binding(segments, DataType.NoSuchObject, None)
        return _binding(segments, *entry)

    async def get(self, options: Options, oid: OIDLike) -> list[RawVarBind]:
        """Mock SNMP GET for a single OID."""
        opts = await self._enter("GET", options)
        return [self._lookup("GET", opts, oid)]

    async def get_all(
        self, options: Options, oids: Sequence[OIDLike],
    ) -> list[RawVarBind]:
        """Mock SNMP GET for many OIDs (one simulated round trip)."""
        opts = await self._enter("GET", options)
        return [self._lookup("GET", opts, oid) for oid in oids]

    async def get_next(self, options: Options, oid: OIDLike) -> list[RawVarBind]:
        """Mock SNMP GETNEXT: the lexicographically next OID in the tree."""
        opts = await self._enter("GETNEXT", options)
        segments = parse_oid(oid)
        tree = self._tree(opts.host)
        keys = sorted(tree)
        pos = bisect.bisect_right(keys, segments)
        if pos >= len(keys):
            if opts.version == Versions.SNMPv1:
                raise self._no_such_name("GETNEXT", segments)
            return [_binding(segments, DataType.EndOfMibView, None)]
        return [_binding(keys[pos], *tree[keys[pos]])]

    async def get_subtree(
        self, options: Options, oid: OIDLike,
    ) -> list[RawVarBind]:
        """Mock SNMP WALK — every OID under the root, in tree order."""
        opts = await self._enter("WALK", options)
        root = parse_oid(oid)
        tree = self._tree(opts.host)
        return [
            _binding(key, *tree[key])
            for key in sorted(tree)
            if key[:len(root)] == root and key != root
        ]

    async def set(
        self,
        options: Options,
        oid: OIDLike,
        type: DataType | None = None,
        value: Any = None,
    ) -> list[RawVarBind]:
        """Mock SNMP SET — stores the value for later GETs on the same host."""
        opts = await self._enter("SET", options)
        segments = parse_oid(oid)
        if type is None:
            if value is None:
                type = DataType.Null
            elif isinstance(value, int):
                type = DataType.Integer
            else:
                type = DataType.OctetString
        else:
            type = DataType(type)
        if type == DataType.OctetString and isinstance(value, str):
            value = value.encode()

        self._tree(opts.host)[segments] = (type, value)
        logger.debug("Mock SET %s %s = %r", opts.host, format_oid(segments), value)
        return [_binding(segments, type, value)]

    def close(self) -> None:
        self._closed = True
