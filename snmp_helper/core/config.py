"""
Application configuration using pydantic-settings.

All settings are loaded from environment variables or .env file.
They only provide defaults: anything a caller puts in the per-call
options wins over the values here.

.env example::

    SNMP_HOST=192.168.88.1
    SNMP_COMMUNITY=public
    SNMP_VERSION=1          # 0 = SNMPv1, 1 = SNMPv2c
    SNMP_MOCK=true
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from snmp_helper.core.enums import Versions


class Settings(BaseSettings):
    """SNMP helper settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Mode
    snmp_mock: bool = Field(
        default=False,
        description="Use the in-memory mock session instead of real SNMP traffic",
    )

    # Default target
    snmp_host: str = Field(default="localhost", description="Default agent host")
    snmp_port: int = Field(default=161, description="Default agent UDP port")
    snmp_community: str = Field(
        default="public",
        description="Default community string (v1/v2c)",
    )
    snmp_version: Versions = Field(
        default=Versions.SNMPv2c,
        description="Default protocol version (0 = v1, 1 = v2c)",
    )

    # Transport
    snmp_timeout: float = Field(
        default=5.0,
        description="Per-request timeout in seconds",
    )
    snmp_retries: int = Field(
        default=3,
        description="Retries after a request timeout",
    )

    # Batching / walking
    snmp_max_repetitions: int = Field(
        default=25,
        description="GETBULK max-repetitions used by v2c walks",
    )
    snmp_max_oids_per_request: int = Field(
        default=16,
        description="Max OIDs packed into one GetRequest by get_all()",
    )
    snmp_walk_timeout: float = Field(
        default=120.0,
        description="Upper bound in seconds for a single subtree walk",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance (Singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
