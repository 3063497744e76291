from __future__ import annotations

import asyncio

import typer

from futinfo.cli.common import league_source_scope, parse_today
from futinfo.core.config import settings
from futinfo.periods.resolver import (
    is_period_selection_supported,
    list_available_periods,
    resolve_optimal_period,
)
from futinfo.periods.types import EntityPeriodCatalog

app = typer.Typer(help="Resolve league seasons from the API-Football catalog.")


async def _fetch_catalog(league_id: int) -> EntityPeriodCatalog:
    async with league_source_scope() as source:
        return await source.fetch_period_catalog(league_id)


@app.command("resolve")
def resolve_cmd(
    league_id: int = typer.Option(..., "--league-id", help="API-Football league id (e.g. 39)."),
    season: int | None = typer.Option(
        None, "--season", help="Explicit season year; always wins when given."
    ),
    today: str | None = typer.Option(
        None, "--today", help="Evaluate as of this date (YYYY-MM-DD). Defaults to today."
    ),
) -> None:
    """Print the season a league screen would open on."""

    as_of = parse_today(today)
    catalog = asyncio.run(_fetch_catalog(league_id))
    year = resolve_optimal_period(catalog, season, as_of)

    typer.echo(
        " ".join(
            [
                f"league={league_id}",
                f"season={year}",
                f"seasons_in_catalog={len(catalog.periods)}",
                f"selectable={is_period_selection_supported(league_id, settings.classification())}",
            ]
        )
    )


@app.command("list")
def list_cmd(
    league_id: int = typer.Option(..., "--league-id", help="API-Football league id (e.g. 39)."),
    today: str | None = typer.Option(
        None, "--today", help="Evaluate as of this date (YYYY-MM-DD). Defaults to today."
    ),
) -> None:
    """Print the selectable seasons for a league, newest first."""

    as_of = parse_today(today)
    classification = settings.classification()
    if not is_period_selection_supported(league_id, classification):
        typer.echo(f"League {league_id} does not support season selection.")
        return

    catalog = asyncio.run(_fetch_catalog(league_id))
    for year in list_available_periods(catalog, as_of):
        typer.echo(f"{year}/{(year + 1) % 100:02d}")
