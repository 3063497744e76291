from __future__ import annotations

import asyncio
from typing import Any

import typer

from futinfo.cli.common import league_source_scope
from futinfo.core.config import settings
from futinfo.viewstate.orchestrator import LeagueDetailViewModel
from futinfo.viewstate.slices import DataSlice, SliceKey, SliceStatus
from futinfo.viewstate.state import LeagueDetailState

app = typer.Typer(help="Load league detail screens.")


def _payload_size(payload: Any) -> int | None:
    for attr in ("rows", "fixtures", "players", "rounds", "teams"):
        value = getattr(payload, attr, None)
        if value is not None:
            return len(value)
    return None


def describe_slice(key: SliceKey, data: DataSlice) -> str:
    status = data.status
    if status is SliceStatus.FAILED:
        return f"{key.value}: failed ({data.error_message})"
    if status is SliceStatus.LOADED:
        size = _payload_size(data.payload)
        return f"{key.value}: loaded" + (f" ({size} items)" if size is not None else "")
    return f"{key.value}: {status.value}"


def describe_state(state: LeagueDetailState, tab_names: list[str]) -> list[str]:
    lines = [
        f"league={state.entity_id} season={state.selected_period}",
        f"tab={tab_names[state.selected_tab]} tabs={','.join(tab_names)}",
    ]
    if state.available_periods:
        lines.append("seasons=" + ",".join(str(y) for y in state.available_periods))
    lines.extend(describe_slice(key, state.slice(key)) for key in SliceKey)
    return lines


async def _load(league_id: int, season: int | None, tab: int) -> list[str]:
    async with league_source_scope() as source:
        view_model = LeagueDetailViewModel(source, classification=settings.classification())
        try:
            await view_model.activate(league_id, season)
            view_model.select_tab(tab)
            await view_model.ensure_supplemental_loaded()
            await view_model.wait_idle()
            return describe_state(view_model.state, [t.value for t in view_model.tabs])
        finally:
            await view_model.close()


@app.command("show")
def show_cmd(
    league_id: int = typer.Option(..., "--league-id", help="API-Football league id (e.g. 39)."),
    season: int | None = typer.Option(None, "--season", help="Season year (e.g. 2024)."),
    tab: int = typer.Option(0, "--tab", help="Tab index to select (clamped)."),
) -> None:
    """Load every slice of a league screen and print a one-line summary per slice."""

    for line in asyncio.run(_load(league_id, season, tab)):
        typer.echo(line)
