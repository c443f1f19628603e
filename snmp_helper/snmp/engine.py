"""
SNMP Engine — pysnmp asyncio session adapter.

AsyncSnmpSession implements the session contract the result aggregator
works against:
- get()         — GetRequest for one OID
- get_all()     — GetRequest for many OIDs, packed max_oids_per_request per packet
- get_next()    — GetNextRequest for one OID
- get_subtree() — walk one subtree (GETNEXT on v1, GETBULK on v2c)
- set()         — SetRequest for one OID
- close()       — release the pysnmp engine's transport

Every call returns RawVarBind records with integer OID segments; the
aggregator does the canonical formatting.

NOTE: pysnmp imports are deferred to AsyncSnmpSession so that mock mode
(SNMP_MOCK=true) never loads the pysnmp machinery.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Union

from snmp_helper.core.enums import DataType, Versions
from snmp_helper.core.types import OIDLike, RawVarBind
from snmp_helper.schemas.options import SessionOptions
from snmp_helper.snmp.oid import dotted, format_oid, is_prefix, parse_oid

logger = logging.getLogger(__name__)

Options = Optional[Union[SessionOptions, Mapping[str, Any]]]


class SnmpError(Exception):
    """Base SNMP error."""


class SnmpTimeoutError(SnmpError):
    """SNMP request timed out after all retries."""


class SessionClosedError(SnmpError):
    """Operation attempted on a session that was already closed."""


class SnmpSession(Protocol):
    """Session contract consumed by the result aggregator."""

    async def get(self, options: Options, oid: OIDLike) -> list[RawVarBind]: ...

    async def get_all(
        self, options: Options, oids: Sequence[OIDLike],
    ) -> list[RawVarBind]: ...

    async def get_next(self, options: Options, oid: OIDLike) -> list[RawVarBind]: ...

    async def get_subtree(
        self, options: Options, oid: OIDLike,
    ) -> list[RawVarBind]: ...

    async def set(
        self,
        options: Options,
        oid: OIDLike,
        type: DataType | None = None,
        value: Any = None,
    ) -> list[RawVarBind]: ...

    def close(self) -> None: ...


@dataclass
class SnmpEngineConfig:
    """Engine-level configuration."""

    walk_timeout: float = 120.0


# ── pysnmp value conversion ──────────────────────────────────────────

_NUMERIC_TYPES = frozenset({
    DataType.Integer,
    DataType.Counter,
    DataType.Gauge,
    DataType.TimeTicks,
    DataType.Counter64,
})
_OCTET_TYPES = frozenset({
    DataType.OctetString,
    DataType.Opaque,
    DataType.NsapAddress,
})
_EMPTY_TYPES = frozenset({
    DataType.Null,
    DataType.NoSuchObject,
    DataType.NoSuchInstance,
    DataType.EndOfMibView,
})


def type_tag(value: Any) -> DataType | int:
    """BER identifier octet of a pysnmp value (outermost tag)."""
    tag = value.tagSet[-1]
    octet = int(tag.tagClass) | int(tag.tagFormat) | int(tag.tagId)
    try:
        return DataType(octet)
    except ValueError:
        return octet


def oid_segments(name: Any) -> tuple[int, ...]:
    """Integer segments of an ObjectName or resolved ObjectIdentity."""
    if hasattr(name, "getOid"):
        name = name.getOid()
    return tuple(int(s) for s in name)


def to_python(value: Any, tag: DataType | int) -> Any:
    """Convert a pysnmp value into a plain Python value."""
    if tag in _EMPTY_TYPES:
        return None
    if tag in _NUMERIC_TYPES:
        return int(value)
    if tag == DataType.ObjectIdentifier:
        return format_oid(value)
    if tag == DataType.IPAddress:
        return ".".join(str(b) for b in value.asNumbers())
    if tag in _OCTET_TYPES:
        return bytes(value.asOctets())
    return value.prettyPrint()


def to_raw_varbind(var_bind: Any) -> RawVarBind:
    """Build a RawVarBind from a pysnmp ObjectType or (name, value) pair."""
    name, value = var_bind[0], var_bind[1]
    tag = type_tag(value)
    return RawVarBind(
        oid=oid_segments(name),
        type=tag,
        value=to_python(value, tag),
        value_str=value.prettyPrint(),
    )


def to_pysnmp_value(type: DataType | None, value: Any) -> Any:
    """
    Build the pysnmp value for a SetRequest.

    Without an explicit type, ints map to Integer32, str/bytes to
    OctetString and None to Null.

    Raises:
        SnmpError: on a type that cannot be sent in a SET.
    """
    from pysnmp.proto import rfc1902

    if type is None:
        if value is None:
            return rfc1902.Null("")
        if isinstance(value, int):
            return rfc1902.Integer32(value)
        return rfc1902.OctetString(value)

    builders = {
        DataType.Integer: rfc1902.Integer32,
        DataType.OctetString: rfc1902.OctetString,
        DataType.ObjectIdentifier: lambda v: rfc1902.ObjectIdentifier(dotted(v)),
        DataType.IPAddress: rfc1902.IpAddress,
        DataType.Counter: rfc1902.Counter32,
        DataType.Gauge: rfc1902.Gauge32,
        DataType.TimeTicks: rfc1902.TimeTicks,
        DataType.Opaque: rfc1902.Opaque,
        DataType.Counter64: rfc1902.Counter64,
    }
    if type == DataType.Null:
        return rfc1902.Null("")
    builder = builders.get(DataType(type))
    if builder is None:
        raise SnmpError(f"SNMP SET does not support type {DataType(type).name}")
    return builder(value)


# ── Session ──────────────────────────────────────────────────────────


class AsyncSnmpSession:
    """
    Thin async session around the pysnmp v3arch asyncio API.

    Owns one pysnmp SnmpEngine; targets come from the per-call options,
    so one session can talk to any number of agents.
    """

    def __init__(self, config: SnmpEngineConfig | None = None) -> None:
        from pysnmp.hlapi.v3arch.asyncio import SnmpEngine as PySnmpEngine

        self._config = config or SnmpEngineConfig()
        self._engine = PySnmpEngine()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError("SNMP session is closed")

    async def _make_transport(self, opts: SessionOptions) -> Any:
        """Create the UDP transport for the target (async in pysnmp 7)."""
        from pysnmp.hlapi.v3arch.asyncio import UdpTransportTarget

        try:
            return await UdpTransportTarget.create(
                (opts.host, opts.port),
                timeout=opts.timeout,
                retries=opts.retries,
            )
        except Exception as e:
            raise SnmpError(
                f"Cannot open transport to {opts.host}:{opts.port}: {e}"
            ) from e

    @staticmethod
    def _auth(opts: SessionOptions) -> Any:
        from pysnmp.hlapi.v3arch.asyncio import CommunityData

        return CommunityData(opts.community, mpModel=int(opts.version))

    @staticmethod
    def _check(
        op: str,
        opts: SessionOptions,
        error_indication: Any,
        error_status: Any,
        error_index: Any,
        var_binds: Sequence[Any],
    ) -> None:
        """Raise on a pysnmp error indication or PDU error status."""
        if error_indication:
            err_str = str(error_indication)
            lowered = err_str.lower()
            if "timeout" in lowered or "timed out" in lowered:
                raise SnmpTimeoutError(
                    f"SNMP {op} timeout: {opts.host}: {err_str}"
                )
            raise SnmpError(f"SNMP {op} error: {opts.host}: {err_str}")

        if error_status:
            index = int(error_index or 0)
            if 0 < index <= len(var_binds):
                at = format_oid(oid_segments(var_binds[index - 1][0]))
            else:
                at = "?"
            raise SnmpError(
                f"SNMP {op} error status: {error_status.prettyPrint()} at {at}"
            )

    async def _request(
        self,
        op: str,
        opts: SessionOptions,
        var_binds: list[Any],
    ) -> list[RawVarBind]:
        """Send one GET / GETNEXT / SET PDU and convert the response."""
        from pysnmp.hlapi.v3arch.asyncio import (
            ContextData,
            get_cmd,
            next_cmd,
            set_cmd,
        )

        self._ensure_open()
        command = {"GET": get_cmd, "GETNEXT": next_cmd, "SET": set_cmd}[op]
        transport = await self._make_transport(opts)

        error_indication, error_status, error_index, response = await command(
            self._engine,
            self._auth(opts),
            transport,
            ContextData(),
            *var_binds,
            lookupMib=False,
        )
        self._check(op, opts, error_indication, error_status, error_index, response)

        result = [to_raw_varbind(vb) for vb in response]
        logger.debug(
            "SNMP %s %s (v%s): %d varbinds",
            op, opts.host, opts.version.label, len(result),
        )
        return result

    @staticmethod
    def _object_type(oid: OIDLike, value: Any = None) -> Any:
        from pysnmp.hlapi.v3arch.asyncio import ObjectIdentity, ObjectType

        if value is None:
            return ObjectType(ObjectIdentity(dotted(oid)))
        return ObjectType(ObjectIdentity(dotted(oid)), value)

    async def get(self, options: Options, oid: OIDLike) -> list[RawVarBind]:
        """SNMP GET for a single OID."""
        opts = SessionOptions.coerce(options)
        return await self._request("GET", opts, [self._object_type(oid)])

    async def get_all(
        self, options: Options, oids: Sequence[OIDLike],
    ) -> list[RawVarBind]:
        """
        SNMP GET for many OIDs.

        OIDs are packed max_oids_per_request per GetRequest; the packets
        go out one after another so a device never sees a burst.
        """
        opts = SessionOptions.coerce(options)
        size = opts.max_oids_per_request
        results: list[RawVarBind] = []
        for start in range(0, len(oids), size):
            chunk = [self._object_type(oid) for oid in oids[start:start + size]]
            results.extend(await self._request("GET", opts, chunk))
        return results

    async def get_next(self, options: Options, oid: OIDLike) -> list[RawVarBind]:
        """SNMP GETNEXT for a single OID."""
        opts = SessionOptions.coerce(options)
        return await self._request("GETNEXT", opts, [self._object_type(oid)])

    async def set(
        self,
        options: Options,
        oid: OIDLike,
        type: DataType | None = None,
        value: Any = None,
    ) -> list[RawVarBind]:
        """SNMP SET for a single OID."""
        opts = SessionOptions.coerce(options)
        var_bind = self._object_type(oid, to_pysnmp_value(type, value))
        return await self._request("SET", opts, [var_bind])

    async def get_subtree(
        self, options: Options, oid: OIDLike,
    ) -> list[RawVarBind]:
        """
        Walk every OID under ``oid``.

        Returns:
            RawVarBinds in the order the agent returned them.

        Raises:
            SnmpTimeoutError: on a request timeout, or if the whole walk
                exceeds walk_timeout.
            SnmpError: on other errors.
        """
        opts = SessionOptions.coerce(options)
        try:
            return await asyncio.wait_for(
                self._walk_impl(opts, parse_oid(oid)),
                timeout=self._config.walk_timeout,
            )
        except asyncio.TimeoutError:
            raise SnmpTimeoutError(
                f"SNMP WALK exceeded {self._config.walk_timeout}s: "
                f"{opts.host} root={format_oid(parse_oid(oid))}"
            ) from None

    async def _walk_impl(
        self, opts: SessionOptions, root: tuple[int, ...],
    ) -> list[RawVarBind]:
        """Internal walk implementation."""
        from pysnmp.hlapi.v3arch.asyncio import (
            ContextData,
            bulk_walk_cmd,
            walk_cmd,
        )

        self._ensure_open()
        transport = await self._make_transport(opts)
        start = self._object_type(root)

        if opts.version == Versions.SNMPv1:
            walker = walk_cmd(
                self._engine, self._auth(opts), transport, ContextData(),
                start,
                lexicographicMode=False,
                lookupMib=False,
            )
        else:
            walker = bulk_walk_cmd(
                self._engine, self._auth(opts), transport, ContextData(),
                0,  # non-repeaters
                opts.max_repetitions,
                start,
                lexicographicMode=False,
                lookupMib=False,
            )

        results: list[RawVarBind] = []
        try:
            async for error_indication, error_status, error_index, var_binds in walker:
                self._check(
                    "WALK", opts,
                    error_indication, error_status, error_index, var_binds,
                )

                out_of_scope = False
                for var_bind in var_binds:
                    raw = to_raw_varbind(var_bind)
                    # Stop once we've walked past our subtree
                    if raw.oid == root or not is_prefix(root, raw.oid):
                        out_of_scope = True
                        break
                    if isinstance(raw.type, DataType) and raw.type.is_exception:
                        out_of_scope = True
                        break
                    results.append(raw)

                if out_of_scope:
                    break
        finally:
            await walker.aclose()

        logger.debug(
            "SNMP WALK %s %s: %d varbinds",
            opts.host, format_oid(root), len(results),
        )
        return results

    def close(self) -> None:
        """Close the engine's transport; the session can't be reused."""
        if self._closed:
            return
        self._closed = True
        dispatcher = getattr(self._engine, "transport_dispatcher", None)
        if dispatcher is not None:
            dispatcher.close_dispatcher()
        logger.debug("SNMP session closed")
