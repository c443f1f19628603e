"""
Shared-mode SNMP operations.

Module-level functions that all run on the process-wide session held
by the SessionRegistry. The session is created on first use; close()
releases it and the next call creates a new one.

Usage:
    from snmp_helper.snmp import shared

    result = await shared.get({"host": "192.168.88.1"}, ".1.3.6.1.2.1.1.5.0")
    walks = await shared.get_subtree({"host": "192.168.88.1"}, [".1.3.6.1.2.1.2.2.1.2"])
    shared.close()
"""
from __future__ import annotations

import warnings
from collections.abc import Sequence
from typing import Any

from snmp_helper.core.enums import DataType
from snmp_helper.core.types import OIDLike, SnmpResult, VarBind
from snmp_helper.snmp import aggregator
from snmp_helper.snmp.engine import Options
from snmp_helper.snmp.session_registry import close_shared_session, get_shared_session


def close() -> None:
    """Closes the shared SNMP session."""
    close_shared_session()


async def get(options: Options, oid: OIDLike) -> SnmpResult[VarBind]:
    """Perform a simple GetRequest."""
    return await aggregator.get(get_shared_session(), options, oid)


async def get_all(options: Options, oids: Sequence[OIDLike]) -> SnmpResult[VarBind]:
    """
    Fetch all the requested values.

    OIDs go out max_oids_per_request per GetRequest packet (see
    SNMP_MAX_OIDS_PER_REQUEST), one packet after another.
    """
    return await aggregator.get_all(get_shared_session(), options, oids)


async def get_next(options: Options, oid: OIDLike) -> SnmpResult[VarBind]:
    """Perform a simple GetNextRequest."""
    return await aggregator.get_next(get_shared_session(), options, oid)


async def get_subtree(
    options: Options, oids: Sequence[OIDLike],
) -> SnmpResult[list[VarBind]]:
    """
    Fetch all values in each of the given trees (a 'walk').

    The walks run concurrently; the result maps each root to its
    bindings.
    """
    return await aggregator.get_subtree(get_shared_session(), options, oids)


async def set(
    options: Options,
    oid: OIDLike,
    type: DataType | None = None,
    value: Any = None,
) -> SnmpResult[VarBind]:
    """Perform a simple SetRequest."""
    return await aggregator.set(get_shared_session(), options, oid, type, value)


async def fetch(options: Options, oids: Sequence[OIDLike]) -> SnmpResult[VarBind]:
    """Deprecated: use get_all()."""
    warnings.warn(
        "fetch() is deprecated. Please use get_all() instead.",
        DeprecationWarning,
        stacklevel=2,
    )
    return await get_all(options, oids)


async def walk(options: Options, oids: Sequence[OIDLike]) -> SnmpResult[list[VarBind]]:
    """Deprecated: use get_subtree()."""
    warnings.warn(
        "walk() is deprecated. Please use get_subtree() instead.",
        DeprecationWarning,
        stacklevel=2,
    )
    return await get_subtree(options, oids)
