"""Environment overrides for the Flask config.

Defaults live in `settings.py`; only variables that are actually set in the
environment override them.
"""

import os
from typing import Any


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str) -> float | None:
    v = (os.getenv(name) or "").strip()
    if not v:
        return None
    try:
        return float(v)
    except ValueError:
        return None


def env_overrides() -> dict[str, Any]:
    """Collect config values from environment variables that are set."""

    out: dict[str, Any] = {}

    for key in ("SECRET_KEY", "DATABASE_URI", "DATABASE_ENGINE", "ADMIN_BASE_URL"):
        value = os.getenv(key)
        if value:
            out[key] = value

    if os.getenv("LOG_LEVEL"):
        out["LOG_LEVEL"] = os.getenv("LOG_LEVEL", "INFO").upper()

    if os.getenv("INIT_DB_ON_STARTUP") is not None:
        out["INIT_DB_ON_STARTUP"] = _env_bool("INIT_DB_ON_STARTUP", False)

    timeout = _env_float("STATEMENT_TIMEOUT_S")
    if timeout is not None:
        out["STATEMENT_TIMEOUT_S"] = timeout

    slow_ms = _env_float("SLOW_REQUEST_MS")
    if slow_ms is not None:
        out["SLOW_REQUEST_MS"] = int(slow_ms)

    return out
