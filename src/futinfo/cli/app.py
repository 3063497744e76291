from __future__ import annotations

import typer

from futinfo.cli.league import app as league_app
from futinfo.cli.season import app as season_app
from futinfo.core.config import settings
from futinfo.core.logging import configure_logging

app = typer.Typer(no_args_is_help=True)
app.add_typer(season_app, name="season")
app.add_typer(league_app, name="league")


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level (defaults to FUTINFO_LOG_LEVEL or INFO)."
    ),
) -> None:
    configure_logging(log_level or settings.log_level)
