"""Map API-Football v3 response items onto futinfo payload types."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from futinfo.core.dates import parse_fixture_datetime, parse_season_date
from futinfo.core.text import normalize_round_name
from futinfo.league.models import (
    FixtureSummary,
    PlayerLeader,
    StandingRow,
    StandingsPayload,
    TeamRef,
    TeamStatLine,
)
from futinfo.periods.types import EntityPeriodCatalog, ReportingPeriod
from futinfo.providers.base.errors import ProviderMappingError

logger = logging.getLogger(__name__)

ApiItem = dict[str, Any]


def _dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return default
    return default


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


# -----------------------------
# /leagues
# -----------------------------


def parse_period_catalog(entity_id: int, items: list[ApiItem]) -> EntityPeriodCatalog:
    """
    Build the season catalog from a `/leagues?id=` response.

    Seasons without an integer year are skipped; malformed start/end dates are
    kept as None.
    """
    league_item = next(
        (i for i in items if _optional_int(_dict(i.get("league")).get("id")) == entity_id),
        items[0] if items else None,
    )
    if league_item is None:
        return EntityPeriodCatalog(entity_id=entity_id)

    periods: list[ReportingPeriod] = []
    for raw in league_item.get("seasons") or []:
        if not isinstance(raw, dict):
            continue
        year = _optional_int(raw.get("year"))
        if year is None:
            logger.debug("Skipping season without year for league %s: %r", entity_id, raw)
            continue
        periods.append(
            ReportingPeriod(
                year=year,
                is_current=raw.get("current") is True,
                end_date=parse_season_date(raw.get("end")),
                start_date=parse_season_date(raw.get("start")),
            )
        )

    return EntityPeriodCatalog.of(entity_id, periods)


# -----------------------------
# Teams / fixtures
# -----------------------------


def parse_team(raw: Any, *, context: dict[str, object] | None = None) -> TeamRef:
    team = _dict(raw)
    team_id = _optional_int(team.get("id"))
    if team_id is None:
        raise ProviderMappingError("Team without id", context={**(context or {}), "team": team})
    return TeamRef(id=team_id, name=_str(team.get("name")) or str(team_id), logo=_str(team.get("logo")))


def parse_fixture(item: ApiItem) -> FixtureSummary:
    fixture = _dict(item.get("fixture"))
    fixture_id = _optional_int(fixture.get("id"))
    if fixture_id is None:
        raise ProviderMappingError("Fixture without id", context={"fixture": fixture})

    teams = _dict(item.get("teams"))
    goals = _dict(item.get("goals"))
    context: dict[str, object] = {"fixture_id": fixture_id}

    return FixtureSummary(
        id=fixture_id,
        kickoff=parse_fixture_datetime(fixture.get("date") or fixture.get("timestamp")),
        status_short=_str(_dict(fixture.get("status")).get("short")) or "NS",
        round=_str(_dict(item.get("league")).get("round")),
        home=parse_team(teams.get("home"), context=context),
        away=parse_team(teams.get("away"), context=context),
        home_goals=_optional_int(goals.get("home")),
        away_goals=_optional_int(goals.get("away")),
        venue_name=_str(_dict(fixture.get("venue")).get("name")),
    )


def parse_fixtures(items: Iterable[ApiItem]) -> tuple[FixtureSummary, ...]:
    fixtures = [parse_fixture(i) for i in items]
    fixtures.sort(key=lambda f: (f.kickoff is None, f.kickoff, f.id))
    return tuple(fixtures)


# -----------------------------
# /standings
# -----------------------------


def _parse_standing_row(raw: ApiItem) -> StandingRow:
    totals = _dict(raw.get("all"))
    goals = _dict(totals.get("goals"))
    return StandingRow(
        rank=_int(raw.get("rank")),
        team=parse_team(raw.get("team"), context={"rank": raw.get("rank")}),
        points=_int(raw.get("points")),
        goals_diff=_int(raw.get("goalsDiff")),
        played=_int(totals.get("played")),
        win=_int(totals.get("win")),
        draw=_int(totals.get("draw")),
        lose=_int(totals.get("lose")),
        goals_for=_int(goals.get("for")),
        goals_against=_int(goals.get("against")),
        group=_str(raw.get("group")),
        form=_str(raw.get("form")),
        description=_str(raw.get("description")),
    )


def parse_standings(league_id: int, season: int, items: list[ApiItem]) -> StandingsPayload:
    """`/standings` nests tables as response[0].league.standings[[row, ...], ...]."""
    groups: list[tuple[StandingRow, ...]] = []
    for item in items:
        tables = _dict(item.get("league")).get("standings") or []
        for table in tables:
            if not isinstance(table, list):
                continue
            rows = [_parse_standing_row(r) for r in table if isinstance(r, dict)]
            if rows:
                groups.append(tuple(sorted(rows, key=lambda r: r.rank)))
    return StandingsPayload(league_id=league_id, season=season, groups=tuple(groups))


def team_stats_from_standings(standings: StandingsPayload) -> tuple[TeamStatLine, ...]:
    """One line per team, best first (points, then goal difference, then goals scored)."""
    lines: dict[int, TeamStatLine] = {}
    for row in standings.rows:
        # A team listed in several groups keeps its first (highest-level) table row.
        if row.team.id in lines:
            continue
        lines[row.team.id] = TeamStatLine(
            team=row.team,
            played=row.played,
            wins=row.win,
            draws=row.draw,
            losses=row.lose,
            goals_for=row.goals_for,
            goals_against=row.goals_against,
            points=row.points,
            form=row.form,
        )
    return tuple(
        sorted(
            lines.values(),
            key=lambda s: (-s.points, -s.goal_difference, -s.goals_for, s.team.name),
        )
    )


# -----------------------------
# /players/topscorers, /players/topassists
# -----------------------------


def parse_player_leader(item: ApiItem) -> PlayerLeader:
    player = _dict(item.get("player"))
    player_id = _optional_int(player.get("id"))
    if player_id is None:
        raise ProviderMappingError("Player without id", context={"player": player})

    stats = next((s for s in item.get("statistics") or [] if isinstance(s, dict)), {})
    goals = _dict(stats.get("goals"))
    team_raw = _dict(stats.get("team"))

    return PlayerLeader(
        player_id=player_id,
        name=_str(player.get("name")) or str(player_id),
        team=parse_team(team_raw) if team_raw.get("id") is not None else None,
        goals=_int(goals.get("total")),
        assists=_int(goals.get("assists")),
        # api-sports spells it "appearences".
        appearances=_optional_int(_dict(stats.get("games")).get("appearences")),
        photo=_str(player.get("photo")),
    )


def parse_player_leaders(items: Iterable[ApiItem]) -> tuple[PlayerLeader, ...]:
    return tuple(parse_player_leader(i) for i in items)


# -----------------------------
# Knockout rounds
# -----------------------------

_KNOCKOUT_KEYWORDS = (
    "final",
    "semi",
    "quarter",
    "round of 16",
    "round of 32",
    "1/8",
    "1/4",
    "1/2",
    "playoffs",
    "play offs",
    "knockout",
)

_EXCLUDED_KEYWORDS = (
    "group",
    "league",
    "regular",
    "1st round",
    "2nd round",
    "3rd round",
    "4th round",
    "5th round",
    "6th round",
    "matchday",
    "preliminary",
)

# Round of 32, 16, quarters, semis, final and third place.
MAX_BRACKET_ROUNDS = 6

_UNRANKED_ROUND = 99


def is_knockout_round(name: str) -> bool:
    n = normalize_round_name(name)
    if not any(k in n for k in _KNOCKOUT_KEYWORDS):
        return False
    return not any(k in n for k in _EXCLUDED_KEYWORDS)


def round_priority(name: str) -> int:
    """Display order: final first, then third place, semis, quarters, last 16, last 32, playoffs."""
    n = normalize_round_name(name)
    if "3rd place" in n or "third place" in n:
        return 2
    if "semi" in n or "1/2" in n:
        return 3
    if "quarter" in n or "1/4" in n:
        return 4
    if "round of 16" in n or "1/8" in n:
        return 5
    if "round of 32" in n or "1/16" in n:
        return 6
    if "final" in n:
        return 1
    if "playoffs" in n or "play offs" in n or "knockout" in n:
        return 7
    return _UNRANKED_ROUND


def select_knockout_rounds(round_names: Iterable[str]) -> list[str]:
    selected: list[str] = []
    for name in round_names:
        if name in selected or not is_knockout_round(name):
            continue
        selected.append(name)
        if len(selected) >= MAX_BRACKET_ROUNDS:
            break
    return selected


def dedupe_ties(fixtures: Iterable[FixtureSummary]) -> tuple[FixtureSummary, ...]:
    """
    Collapse two-legged ties into one fixture per pairing.

    The first leg seen is kept unless a later leg is finished and the kept one
    is not.
    """
    ties: dict[tuple[int, int], FixtureSummary] = {}
    for fixture in fixtures:
        key = (min(fixture.home.id, fixture.away.id), max(fixture.home.id, fixture.away.id))
        existing = ties.get(key)
        if existing is None or (fixture.is_finished and not existing.is_finished):
            ties[key] = fixture
    return tuple(ties.values())
