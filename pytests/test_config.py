from __future__ import annotations

from config import env_overrides


def test_only_set_variables_override(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    assert env_overrides() == {}


def test_env_values_are_typed(monkeypatch):
    monkeypatch.setenv("DATABASE_URI", "sqlite:///x.db")
    monkeypatch.setenv("ADMIN_BASE_URL", "/panel")
    monkeypatch.setenv("INIT_DB_ON_STARTUP", "yes")
    monkeypatch.setenv("STATEMENT_TIMEOUT_S", "2.5")
    monkeypatch.setenv("SLOW_REQUEST_MS", "100")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    out = env_overrides()

    assert out["DATABASE_URI"] == "sqlite:///x.db"
    assert out["ADMIN_BASE_URL"] == "/panel"
    assert out["INIT_DB_ON_STARTUP"] is True
    assert out["STATEMENT_TIMEOUT_S"] == 2.5
    assert out["SLOW_REQUEST_MS"] == 100
    assert out["LOG_LEVEL"] == "DEBUG"


def test_bad_numbers_are_ignored(monkeypatch):
    monkeypatch.setenv("STATEMENT_TIMEOUT_S", "soon")

    assert "STATEMENT_TIMEOUT_S" not in env_overrides()
