from __future__ import annotations

from typing import Protocol

from futinfo.league.models import (
    BracketPayload,
    FixturesPayload,
    PlayersPayload,
    StandingsPayload,
    TeamStatsPayload,
)
from futinfo.periods.types import EntityPeriodCatalog


class LeagueDataSource(Protocol):
    """
    The league-detail view model depends on this, not on any HTTP client.

    Every method raises a ProviderError (or any other exception) on failure;
    callers only surface the message.
    """

    async def fetch_period_catalog(self, entity_id: int) -> EntityPeriodCatalog: ...

    async def fetch_standings(self, entity_id: int, year: int) -> StandingsPayload: ...

    async def fetch_fixtures(self, entity_id: int, year: int) -> FixturesPayload: ...

    async def fetch_top_scorers(self, entity_id: int, year: int) -> PlayersPayload: ...

    async def fetch_top_assists(self, entity_id: int, year: int) -> PlayersPayload: ...

    async def fetch_bracket(self, entity_id: int, year: int) -> BracketPayload:
        """Only invoked for bracket-style competitions."""
        ...

    async def fetch_team_statistics(self, entity_id: int, year: int) -> TeamStatsPayload: ...
