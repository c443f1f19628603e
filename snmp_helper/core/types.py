"""
Core type definitions.

Dataclasses and type aliases shared by the session adapters and the
result aggregator.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar, Union

from snmp_helper.core.enums import DataType

# Canonical dotted form with a leading dot, e.g. ".1.3.6.1.2.1.1.1.0"
OID = str

# Anything parse_oid() accepts
OIDLike = Union[str, tuple[int, ...], list[int]]

T = TypeVar("T")

# {canonical_oid: VarBind} or {canonical_root_oid: [VarBind, ...]}
SnmpResult = dict[OID, T]


@dataclass(frozen=True)
class RawVarBind:
    """
    Variable binding as produced by a session.

    ``oid`` is still the integer segment sequence pysnmp works with;
    the aggregator turns it into the canonical dotted string.
    """

    oid: tuple[int, ...]
    type: DataType | int
    value: Any
    value_str: str = ""


@dataclass(frozen=True)
class VarBind:
    """
    Variable binding handed back to callers (value object).

    ``oid`` is always canonical. ``value`` is a plain Python value:
    int for numeric types, bytes for octet strings, str for OIDs and
    IP addresses, None for Null and the exception values.
    """

    oid: OID
    type: DataType | int
    value: Any
    value_str: str = ""

    def __repr__(self) -> str:
        return f"<VarBind {self.oid} = {self.value_str or self.value!r}>"
