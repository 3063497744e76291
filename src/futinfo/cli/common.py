from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date

import typer

from futinfo.core.config import settings
from futinfo.providers.api_football.source import ApiFootballLeagueSource


@asynccontextmanager
async def league_source_scope() -> AsyncIterator[ApiFootballLeagueSource]:
    """
    API-Football source for CLI commands.
    Ensures the underlying HTTP client is closed, also on error.
    """
    source = ApiFootballLeagueSource.from_settings(settings)
    try:
        yield source
    finally:
        await source.aclose()


def parse_today(value: str | None) -> date:
    if value is None:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise typer.BadParameter(f"Expected YYYY-MM-DD, got {value!r}") from e
