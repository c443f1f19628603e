"""
SNMP Result Aggregator.

Runs requests through a session and folds the returned varbinds into
one map keyed by canonical OID:

    get / get_all / get_next / set  → {oid: VarBind}
    get_subtree                     → {root_oid: [VarBind, ...]}

Any session error becomes a TransportError carrying the original
message; nothing is retried and no partial map is returned. Malformed
OIDs are rejected with ValueError before anything is sent.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Iterable, Mapping, Sequence
from typing import Any, TypeVar

from snmp_helper.core.enums import DataType
from snmp_helper.core.types import OID, OIDLike, RawVarBind, SnmpResult, VarBind
from snmp_helper.snmp.engine import Options, SnmpSession
from snmp_helper.snmp.oid import canonical_oid, format_oid, parse_oid

logger = logging.getLogger(__name__)

R = TypeVar("R")


class TransportError(Exception):
    """The underlying session reported an error for a dispatched request."""


def _host(options: Options) -> str:
    """Best-effort host for log lines; options stay opaque otherwise."""
    if options is None:
        return "?"
    if isinstance(options, Mapping):
        return str(options.get("host", "?"))
    return str(getattr(options, "host", "?"))


def _normalize(binding: RawVarBind) -> VarBind:
    """Rewrite one binding's OID segments into the canonical dotted string."""
    return VarBind(
        oid=format_oid(binding.oid),
        type=binding.type,
        value=binding.value,
        value_str=binding.value_str,
    )


def _to_map(bindings: Iterable[RawVarBind]) -> SnmpResult[VarBind]:
    result: SnmpResult[VarBind] = {}
    for binding in bindings:
        varbind = _normalize(binding)
        result[varbind.oid] = varbind
    return result


async def _dispatch(op: str, options: Options, call: Awaitable[R]) -> R:
    """Await one session call, re-raising any failure as TransportError."""
    try:
        return await call
    except Exception as e:
        logger.warning("SNMP %s failed for %s: %s", op, _host(options), e)
        raise TransportError(str(e)) from e


async def get(
    session: SnmpSession, options: Options, oid: OIDLike,
) -> SnmpResult[VarBind]:
    """Perform a simple GetRequest."""
    parse_oid(oid)
    bindings = await _dispatch("GET", options, session.get(options, oid))
    logger.debug("SNMP GET %s: %d varbinds", _host(options), len(bindings))
    return _to_map(bindings)


async def get_all(
    session: SnmpSession, options: Options, oids: Sequence[OIDLike],
) -> SnmpResult[VarBind]:
    """
    Fetch every OID in ``oids`` with one batched session call.

    The session decides how many OIDs go into each GetRequest packet.
    An empty list returns ``{}`` without touching the session.
    """
    if not oids:
        return {}

    for oid in oids:
        parse_oid(oid)
    bindings = await _dispatch("GET", options, session.get_all(options, list(oids)))
    logger.debug(
        "SNMP GET %s: %d OIDs requested, %d returned",
        _host(options), len(oids), len(bindings),
    )
    return _to_map(bindings)


async def get_next(
    session: SnmpSession, options: Options, oid: OIDLike,
) -> SnmpResult[VarBind]:
    """Perform a simple GetNextRequest."""
    parse_oid(oid)
    bindings = await _dispatch("GETNEXT", options, session.get_next(options, oid))
    logger.debug("SNMP GETNEXT %s: %d varbinds", _host(options), len(bindings))
    return _to_map(bindings)


async def get_subtree(
    session: SnmpSession, options: Options, oids: Sequence[OIDLike],
) -> SnmpResult[list[VarBind]]:
    """
    Walk every root in ``oids`` concurrently.

    Each walk's bindings keep the order the agent returned them and are
    stored under the root's canonical OID. If any walk fails the whole
    call raises TransportError; walks still in flight are left to
    finish and their results are dropped.
    """
    if not oids:
        return {}

    roots: list[OID] = [canonical_oid(oid) for oid in oids]

    async def _walk(root: OID) -> tuple[OID, list[VarBind]]:
        bindings = await _dispatch("WALK", options, session.get_subtree(options, root))
        return root, [_normalize(b) for b in bindings]

    responses = await asyncio.gather(*[_walk(root) for root in roots])

    result: SnmpResult[list[VarBind]] = {}
    for root, varbinds in responses:
        result[root] = varbinds

    logger.debug(
        "SNMP WALK %s: %d roots, %d varbinds",
        _host(options), len(result), sum(len(v) for v in result.values()),
    )
    return result


async def set(
    session: SnmpSession,
    options: Options,
    oid: OIDLike,
    type: DataType | None = None,
    value: Any = None,
) -> SnmpResult[VarBind]:
    """Perform a simple SetRequest."""
    parse_oid(oid)
    bindings = await _dispatch("SET", options, session.set(options, oid, type, value))
    logger.debug("SNMP SET %s: %d varbinds", _host(options), len(bindings))
    return _to_map(bindings)
