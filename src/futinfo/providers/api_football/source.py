from __future__ import annotations

import logging
from dataclasses import dataclass

from futinfo.core.config import Settings, settings
from futinfo.league.models import (
    BracketPayload,
    BracketRound,
    FixturesPayload,
    PlayersPayload,
    StandingsPayload,
    TeamStatsPayload,
)
from futinfo.periods.types import EntityPeriodCatalog
from futinfo.providers.api_football.client import ApiFootballClient
from futinfo.providers.api_football.parsing import (
    dedupe_ties,
    parse_fixtures,
    parse_period_catalog,
    parse_player_leaders,
    parse_standings,
    round_priority,
    select_knockout_rounds,
    team_stats_from_standings,
)
from futinfo.providers.base.client import BaseHttpClient
from futinfo.providers.base.errors import ProviderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiFootballLeagueSource:
    """
    API-Football v3 implementation of the league-detail data collaborators.
    """

    client: ApiFootballClient

    @classmethod
    def from_settings(cls, cfg: Settings | None = None) -> ApiFootballLeagueSource:
        cfg = cfg or settings
        http = BaseHttpClient(
            base_url=cfg.api_football_base_url,
            timeout_s=cfg.http_timeout_s,
            connect_timeout_s=cfg.http_connect_timeout_s,
        )
        return cls(client=ApiFootballClient(http=http, api_key=cfg.require_api_football_key()))

    async def aclose(self) -> None:
        await self.client.aclose()

    async def fetch_period_catalog(self, entity_id: int) -> EntityPeriodCatalog:
        items = await self.client.get_response_items("/leagues", params={"id": entity_id})
        catalog = parse_period_catalog(entity_id, items)
        logger.debug("League %s lists %d seasons", entity_id, len(catalog.periods))
        return catalog

    async def fetch_standings(self, entity_id: int, year: int) -> StandingsPayload:
        items = await self.client.get_response_items(
            "/standings", params={"league": entity_id, "season": year}
        )
        return parse_standings(entity_id, year, items)

    async def fetch_fixtures(self, entity_id: int, year: int) -> FixturesPayload:
        items = await self.client.get_response_items(
            "/fixtures", params={"league": entity_id, "season": year}
        )
        return FixturesPayload(league_id=entity_id, season=year, fixtures=parse_fixtures(items))

    async def fetch_top_scorers(self, entity_id: int, year: int) -> PlayersPayload:
        items = await self.client.get_response_items(
            "/players/topscorers", params={"league": entity_id, "season": year}
        )
        return PlayersPayload(league_id=entity_id, season=year, players=parse_player_leaders(items))

    async def fetch_top_assists(self, entity_id: int, year: int) -> PlayersPayload:
        items = await self.client.get_response_items(
            "/players/topassists", params={"league": entity_id, "season": year}
        )
        return PlayersPayload(league_id=entity_id, season=year, players=parse_player_leaders(items))

    async def fetch_bracket(self, entity_id: int, year: int) -> BracketPayload:
        """
        Knockout rounds only: list the season's rounds, then fetch fixtures per
        knockout round. A round that fails to load is skipped.
        """
        round_names = await self.client.get_response_strings(
            "/fixtures/rounds", params={"league": entity_id, "season": year}
        )
        knockout = select_knockout_rounds(round_names)
        if not knockout:
            logger.info("League %s season %s has no knockout rounds", entity_id, year)
            return BracketPayload(league_id=entity_id, season=year)

        rounds: list[BracketRound] = []
        for name in knockout:
            try:
                items = await self.client.get_response_items(
                    "/fixtures", params={"league": entity_id, "season": year, "round": name}
                )
            except ProviderError as e:
                logger.warning(
                    "Skipping round %r of league %s season %s: %s", name, entity_id, year, e
                )
                continue

            fixtures = dedupe_ties(parse_fixtures(items))
            if fixtures:
                rounds.append(BracketRound(name=name, fixtures=fixtures))

        rounds.sort(key=lambda r: round_priority(r.name))
        return BracketPayload(league_id=entity_id, season=year, rounds=tuple(rounds))

    async def fetch_team_statistics(self, entity_id: int, year: int) -> TeamStatsPayload:
        standings = await self.fetch_standings(entity_id, year)
        return TeamStatsPayload(
            league_id=entity_id, season=year, teams=team_stats_from_standings(standings)
        )
