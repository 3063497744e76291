from __future__ import annotations

import httpx
import pytest

from futinfo.providers.api_football.client import ApiFootballClient
from futinfo.providers.api_football.source import ApiFootballLeagueSource
from futinfo.providers.base.client import BaseHttpClient


def _fixture(fixture_id: int, home_id: int, away_id: int, status: str, round_name: str) -> dict:
    return {
        "fixture": {
            "id": fixture_id,
            "date": "2025-04-08T19:00:00+00:00",
            "status": {"short": status},
            "venue": {"name": "Stadium"},
        },
        "league": {"id": 2, "season": 2024, "round": round_name},
        "teams": {
            "home": {"id": home_id, "name": f"Team {home_id}"},
            "away": {"id": away_id, "name": f"Team {away_id}"},
        },
        "goals": {"home": 2, "away": 1},
    }


def _source(handler) -> ApiFootballLeagueSource:
    http = BaseHttpClient(base_url="https://example.test", transport=httpx.MockTransport(handler))
    return ApiFootballLeagueSource(client=ApiFootballClient(http=http, api_key="k"))


@pytest.mark.asyncio
async def test_fetch_period_catalog_queries_league_by_id() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "errors": [],
                "response": [
                    {
                        "league": {"id": 39, "name": "Premier League"},
                        "seasons": [{"year": 2024, "end": "2025-05-25", "current": True}],
                    }
                ],
            },
        )

    source = _source(handler)
    catalog = await source.fetch_period_catalog(39)
    await source.aclose()

    assert seen[0].url.path == "/leagues"
    assert seen[0].url.params["id"] == "39"
    assert seen[0].headers["x-apisports-key"] == "k"
    assert [p.year for p in catalog.periods] == [2024]


@pytest.mark.asyncio
async def test_fetch_bracket_builds_ordered_knockout_rounds() -> None:
    fixtures_by_round = {
        "Round of 16": [
            _fixture(1, 10, 20, "FT", "Round of 16"),
            _fixture(2, 20, 10, "FT", "Round of 16"),
            _fixture(3, 30, 40, "FT", "Round of 16"),
        ],
        "Final": [_fixture(9, 10, 30, "NS", "Final")],
    }

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/fixtures/rounds":
            return httpx.Response(
                200,
                json={
                    "errors": [],
                    "response": ["League Stage - 1", "Round of 16", "Quarter-finals", "Final"],
                },
            )
        round_name = request.url.params["round"]
        if round_name == "Quarter-finals":
            return httpx.Response(503)
        return httpx.Response(
            200, json={"errors": [], "response": fixtures_by_round[round_name]}
        )

    source = _source(handler)
    bracket = await source.fetch_bracket(2, 2024)
    await source.aclose()

    assert [r.name for r in bracket.rounds] == ["Final", "Round of 16"]
    assert [f.id for f in bracket.rounds[1].fixtures] == [1, 3]


@pytest.mark.asyncio
async def test_fetch_team_statistics_derives_from_standings() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/standings"
        return httpx.Response(
            200,
            json={
                "errors": [],
                "response": [
                    {
                        "league": {
                            "standings": [
                                [
                                    {
                                        "rank": 1,
                                        "team": {"id": 40, "name": "Liverpool"},
                                        "points": 84,
                                        "goalsDiff": 45,
                                        "all": {
                                            "played": 38,
                                            "win": 25,
                                            "draw": 9,
                                            "lose": 4,
                                            "goals": {"for": 86, "against": 41},
                                        },
                                    }
                                ]
                            ]
                        }
                    }
                ],
            },
        )

    source = _source(handler)
    stats = await source.fetch_team_statistics(39, 2024)
    await source.aclose()

    (line,) = stats.teams
    assert line.team.name == "Liverpool"
    assert line.points == 84
    assert line.goal_difference == 45
