"""Time helpers.

Keep all timestamps consistent and timezone-aware.
Python 3.13 deprecates naive UTC helpers like datetime.utcnow(); use this module instead.
"""

from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current time as a timezone-aware datetime in UTC (+00:00)."""

    return datetime.now(timezone.utc)


def utcnow_sa_default() -> datetime:
    """SQLAlchemy-friendly default callable for UTC timestamps."""

    return utcnow()


def parse_form_datetime(text: str) -> datetime:
    """Parse a timestamp submitted by an HTML form.

    Accepts `datetime-local` values ("2024-01-02T10:30"), plain dates
    ("2024-01-02"), full ISO strings and a trailing "Z".

    Raises:
        ValueError: if `text` is not an ISO-8601 date/time.
    """

    s = (text or "").strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    return datetime.fromisoformat(s)
