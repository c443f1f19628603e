"""Unit tests for SessionRegistry and create_session()."""
from __future__ import annotations

from unittest.mock import MagicMock, patch

from snmp_helper.snmp import session_registry
from snmp_helper.snmp.engine import AsyncSnmpSession, SnmpEngineConfig
from snmp_helper.snmp.mock_engine import MockSnmpSession
from snmp_helper.snmp.session_registry import (
    SessionRegistry,
    close_shared_session,
    create_session,
    get_session_registry,
    get_shared_session,
)


def _session() -> MagicMock:
    return MagicMock(spec=AsyncSnmpSession)


class TestSessionRegistry:
    def test_lazy_create(self):
        factory = MagicMock(return_value=_session())
        registry = SessionRegistry(factory=factory)

        assert registry.is_open is False
        factory.assert_not_called()

        session = registry.get()

        assert session is factory.return_value
        assert registry.is_open is True

    def test_reuse(self):
        factory = MagicMock(return_value=_session())
        registry = SessionRegistry(factory=factory)

        assert registry.get() is registry.get()
        factory.assert_called_once()

    def test_close_closes_and_drops(self):
        session = _session()
        registry = SessionRegistry(factory=MagicMock(return_value=session))
        registry.get()

        registry.close()

        session.close.assert_called_once()
        assert registry.is_open is False

    def test_recreate_after_close(self):
        first, second = _session(), _session()
        factory = MagicMock(side_effect=[first, second])
        registry = SessionRegistry(factory=factory)

        assert registry.get() is first
        registry.close()
        assert registry.get() is second
        first.close.assert_called_once()
        second.close.assert_not_called()

    def test_close_when_empty_is_noop(self):
        factory = MagicMock()
        registry = SessionRegistry(factory=factory)

        registry.close()
        registry.close()

        factory.assert_not_called()


class TestSingleton:
    def test_get_session_registry_is_singleton(self):
        assert get_session_registry() is get_session_registry()

    def test_shortcuts(self, monkeypatch):
        session = _session()
        registry = SessionRegistry(factory=MagicMock(return_value=session))
        monkeypatch.setattr(session_registry, "_registry", registry)

        assert get_shared_session() is session
        close_shared_session()

        session.close.assert_called_once()
        assert registry.is_open is False


class TestCreateSession:
    def test_mock_mode(self):
        fake_settings = MagicMock(snmp_mock=True)
        with patch.object(session_registry, "settings", fake_settings):
            session = create_session()

        assert isinstance(session, MockSnmpSession)

    def test_real_mode_uses_walk_timeout(self):
        fake_settings = MagicMock(snmp_mock=False, snmp_walk_timeout=30.0)
        with patch.object(session_registry, "settings", fake_settings), \
             patch.object(session_registry, "AsyncSnmpSession") as session_cls:
            session = create_session()

        session_cls.assert_called_once_with(
            config=SnmpEngineConfig(walk_timeout=30.0),
        )
        assert session is session_cls.return_value
