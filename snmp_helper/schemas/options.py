"""
Pydantic schema for the options passed with every SNMP request.

The aggregator forwards these untouched; only the session adapter reads
them. Missing fields fall back to the values in ``Settings``.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from snmp_helper.core.config import get_settings
from snmp_helper.core.enums import Versions


class SessionOptions(BaseModel):
    """Target and transport options for one SNMP request."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    host: str = Field(
        default_factory=lambda: get_settings().snmp_host,
        description="Agent IP address or hostname",
        examples=["192.168.88.1"],
    )
    port: int = Field(
        default_factory=lambda: get_settings().snmp_port,
        ge=1,
        le=65535,
        description="Agent UDP port",
    )
    community: str = Field(
        default_factory=lambda: get_settings().snmp_community,
        description="Community string (v1/v2c)",
    )
    version: Versions = Field(
        default_factory=lambda: get_settings().snmp_version,
        description="Protocol version: 0 = SNMPv1, 1 = SNMPv2c",
    )
    timeout: float = Field(
        default_factory=lambda: get_settings().snmp_timeout,
        gt=0,
        description="Per-request timeout in seconds",
    )
    retries: int = Field(
        default_factory=lambda: get_settings().snmp_retries,
        ge=0,
        description="Retries after a timeout",
    )
    max_repetitions: int = Field(
        default_factory=lambda: get_settings().snmp_max_repetitions,
        ge=1,
        description="GETBULK max-repetitions for v2c walks",
    )
    max_oids_per_request: int = Field(
        default_factory=lambda: get_settings().snmp_max_oids_per_request,
        ge=1,
        description="Max OIDs per GetRequest in get_all()",
    )

    @classmethod
    def coerce(
        cls, options: SessionOptions | Mapping[str, Any] | None,
    ) -> SessionOptions:
        """Accept a model, a plain mapping, or None."""
        if isinstance(options, cls):
            return options
        return cls.model_validate(dict(options or {}))
