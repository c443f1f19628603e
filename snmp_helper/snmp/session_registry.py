"""
SNMP Session Registry.

Owns the process-wide shared session:
1. Created lazily on first use through the registry's factory
2. Reused by every shared-mode call afterwards
3. close() tears it down; the next use builds a fresh one

create_session() is also what SnmpClient uses for its own session.
"""
from __future__ import annotations

import logging
from collections.abc import Callable

from snmp_helper.core.config import settings
from snmp_helper.snmp.engine import AsyncSnmpSession, SnmpEngineConfig, SnmpSession

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], SnmpSession]


def create_session() -> SnmpSession:
    """Build a new session: mock or pysnmp depending on SNMP_MOCK."""
    if settings.snmp_mock:
        from snmp_helper.snmp.mock_engine import MockSnmpSession
        logger.info("SNMP session using MOCK engine (no real devices)")
        return MockSnmpSession()
    return AsyncSnmpSession(
        config=SnmpEngineConfig(walk_timeout=settings.snmp_walk_timeout),
    )


class SessionRegistry:
    """
    Holder for one lazily created session.

    No pooling, reconnect or health checking: the session is a plain
    handle and all resilience is the transport's job.
    """

    def __init__(self, factory: SessionFactory = create_session) -> None:
        self._factory = factory
        self._session: SnmpSession | None = None

    @property
    def is_open(self) -> bool:
        return self._session is not None

    def get(self) -> SnmpSession:
        """Return the shared session, creating it on first use."""
        if self._session is None:
            self._session = self._factory()
            logger.debug("Shared SNMP session created")
        return self._session

    def close(self) -> None:
        """Close the shared session (no-op if none is open)."""
        session, self._session = self._session, None
        if session is not None:
            session.close()
            logger.debug("Shared SNMP session closed")


# Singleton
_registry: SessionRegistry | None = None


def get_session_registry() -> SessionRegistry:
    """Get or create the process-wide SessionRegistry."""
    global _registry
    if _registry is None:
        _registry = SessionRegistry()
    return _registry


def get_shared_session() -> SnmpSession:
    """Shortcut for get_session_registry().get()."""
    return get_session_registry().get()


def close_shared_session() -> None:
    """Shortcut for get_session_registry().close()."""
    get_session_registry().close()
