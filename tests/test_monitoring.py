"""Tests for Sentry setup."""

import pytest

from query_workbench.core import monitoring


@pytest.mark.unit
def test_sentry_disabled_without_dsn(monkeypatch):
    calls = []
    monkeypatch.setattr(monitoring.sentry_sdk, "init", lambda **kw: calls.append(kw))
    assert monitoring.setup_sentry() is False
    assert calls == []


@pytest.mark.unit
@pytest.mark.parametrize("var", ["QUERY_WORKBENCH_SENTRY_DSN", "SENTRY_DSN"])
def test_sentry_enabled_with_dsn(monkeypatch, var):
    calls = []
    monkeypatch.setenv(var, "https://key@sentry.example/1")
    monkeypatch.setattr(monitoring.sentry_sdk, "init", lambda **kw: calls.append(kw))
    assert monitoring.setup_sentry(environment="ci") is True
    assert calls[0]["dsn"] == "https://key@sentry.example/1"
    assert calls[0]["environment"] == "ci"


@pytest.mark.unit
def test_command_transaction_finished_at_exit(monkeypatch):
    finishers = []
    monkeypatch.setattr(monitoring.atexit, "register", finishers.append)
    monitoring.start_command_transaction("query")
    assert len(finishers) == 1
    finishers[0]()
