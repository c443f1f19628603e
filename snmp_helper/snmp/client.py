"""
SNMP Client — owned-mode SNMP operations.

Each SnmpClient builds its own session when it is constructed and is the
only user of it; close() releases that session and nothing else.

Usage:
    async with SnmpClient() as client:
        result = await client.get_all(options, [SYS_NAME, SYS_DESCR])
"""
from __future__ import annotations

import logging
import warnings
from collections.abc import Sequence
from typing import Any

from snmp_helper.core.enums import DataType
from snmp_helper.core.types import OIDLike, SnmpResult, VarBind
from snmp_helper.snmp import aggregator
from snmp_helper.snmp.engine import Options, SessionClosedError, SnmpSession
from snmp_helper.snmp.session_registry import create_session

logger = logging.getLogger(__name__)


class SnmpClient:
    """
    SNMP client with a session of its own.

    Pass ``session`` to supply one explicitly (tests, a pre-configured
    mock); otherwise create_session() builds it.
    """

    def __init__(self, session: SnmpSession | None = None) -> None:
        self._session: SnmpSession | None = (
            session if session is not None else create_session()
        )

    async def __aenter__(self) -> SnmpClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._session is None

    @property
    def session(self) -> SnmpSession:
        if self._session is None:
            raise SessionClosedError("SnmpClient is closed")
        return self._session

    def close(self) -> None:
        """Closes this client's SNMP session."""
        session, self._session = self._session, None
        if session is not None:
            session.close()
            logger.debug("SnmpClient session closed")

    async def get(self, options: Options, oid: OIDLike) -> SnmpResult[VarBind]:
        """Perform a simple GetRequest."""
        return await aggregator.get(self.session, options, oid)

    async def get_all(
        self, options: Options, oids: Sequence[OIDLike],
    ) -> SnmpResult[VarBind]:
        """Fetch all the requested values in as few GetRequests as possible."""
        return await aggregator.get_all(self.session, options, oids)

    async def get_next(self, options: Options, oid: OIDLike) -> SnmpResult[VarBind]:
        """Perform a simple GetNextRequest."""
        return await aggregator.get_next(self.session, options, oid)

    async def get_subtree(
        self, options: Options, oids: Sequence[OIDLike],
    ) -> SnmpResult[list[VarBind]]:
        """Walk each root concurrently; see aggregator.get_subtree()."""
        return await aggregator.get_subtree(self.session, options, oids)

    async def set(
        self,
        options: Options,
        oid: OIDLike,
        type: DataType | None = None,
        value: Any = None,
    ) -> SnmpResult[VarBind]:
        """Perform a simple SetRequest."""
        return await aggregator.set(self.session, options, oid, type, value)

    async def fetch(
        self, options: Options, oids: Sequence[OIDLike],
    ) -> SnmpResult[VarBind]:
        """Deprecated: use get_all()."""
        warnings.warn(
            "fetch() is deprecated. Please use get_all() instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        return await self.get_all(options, oids)

    async def walk(
        self, options: Options, oids: Sequence[OIDLike],
    ) -> SnmpResult[list[VarBind]]:
        """Deprecated: use get_subtree()."""
        warnings.warn(
            "walk() is deprecated. Please use get_subtree() instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        return await self.get_subtree(options, oids)
