"""
OID formatting helpers.

Every identifier that leaves this package is in canonical dotted form
with a leading dot (``.1.3.6.1.2.1.1.1.0``). Inputs may omit the dot or
be integer sequences, the way pysnmp represents them.
"""
from __future__ import annotations

from collections.abc import Iterable

from snmp_helper.core.types import OID, OIDLike


def parse_oid(value: OIDLike) -> tuple[int, ...]:
    """
    Parse an identifier into its integer segments.

    Accepts ``".1.3.6"``, ``"1.3.6"`` or ``(1, 3, 6)``.

    Raises:
        ValueError: empty identifier, non-numeric or negative segment.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("."):
            text = text[1:]
        if not text:
            raise ValueError(f"Empty OID: {value!r}")
        parts: Iterable[object] = text.split(".")
    else:
        parts = value

    segments: list[int] = []
    for part in parts:
        try:
            segment = int(part)  # type: ignore[call-overload]
        except (TypeError, ValueError):
            raise ValueError(f"Invalid OID segment {part!r} in {value!r}") from None
        if segment < 0:
            raise ValueError(f"Negative OID segment {segment} in {value!r}")
        segments.append(segment)

    if not segments:
        raise ValueError(f"Empty OID: {value!r}")
    return tuple(segments)


def format_oid(segments: Iterable[int]) -> OID:
    """Join integer segments into the canonical ``.a.b.c`` form."""
    return "." + ".".join(str(int(s)) for s in segments)


def canonical_oid(value: OIDLike) -> OID:
    """Canonical form of any accepted identifier (idempotent)."""
    return format_oid(parse_oid(value))


def is_prefix(root: OIDLike, oid: OIDLike) -> bool:
    """True if ``oid`` lies inside the subtree rooted at ``root``."""
    root_segments = parse_oid(root)
    oid_segments = parse_oid(oid)
    return (
        len(oid_segments) >= len(root_segments)
        and oid_segments[:len(root_segments)] == root_segments
    )


def dotted(value: OIDLike) -> str:
    """Dotted form without the leading dot, as pysnmp's ObjectIdentity expects."""
    return ".".join(str(s) for s in parse_oid(value))
