from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Any


def parse_season_date(value: Any) -> date | None:
    """
    Best-effort parser for API-Football season boundaries ("YYYY-MM-DD").

    Returns None for missing or malformed values instead of raising; callers
    treat such seasons as having no known boundary.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def parse_fixture_datetime(value: Any) -> datetime | None:
    """
    Parse an API-Football 'fixture.date' value into a tz-aware UTC datetime.

    Supports ISO strings ("2025-05-31T19:00:00+00:00" / "...Z") and unix
    timestamps. Returns None on bad input.
    """
    if isinstance(value, int):
        return datetime.fromtimestamp(value, tz=UTC)
    if not isinstance(value, str) or not value.strip():
        return None

    try:
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
