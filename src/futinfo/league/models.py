from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

FINISHED_STATUSES = frozenset({"FT", "AET", "PEN"})


@dataclass(frozen=True)
class TeamRef:
    id: int
    name: str
    logo: str | None = None


@dataclass(frozen=True)
class StandingRow:
    rank: int
    team: TeamRef
    points: int
    goals_diff: int
    played: int
    win: int
    draw: int
    lose: int
    goals_for: int
    goals_against: int
    group: str | None = None
    form: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class StandingsPayload:
    """League table; cup-style competitions return one group per table."""

    league_id: int
    season: int
    groups: tuple[tuple[StandingRow, ...], ...] = ()

    @property
    def rows(self) -> tuple[StandingRow, ...]:
        return tuple(row for group in self.groups for row in group)


@dataclass(frozen=True)
class FixtureSummary:
    id: int
    kickoff: datetime | None
    status_short: str
    round: str | None
    home: TeamRef
    away: TeamRef
    home_goals: int | None = None
    away_goals: int | None = None
    venue_name: str | None = None

    @property
    def is_finished(self) -> bool:
        return self.status_short in FINISHED_STATUSES


@dataclass(frozen=True)
class FixturesPayload:
    league_id: int
    season: int
    fixtures: tuple[FixtureSummary, ...] = ()


@dataclass(frozen=True)
class PlayerLeader:
    player_id: int
    name: str
    team: TeamRef | None
    goals: int
    assists: int
    appearances: int | None = None
    photo: str | None = None


@dataclass(frozen=True)
class PlayersPayload:
    league_id: int
    season: int
    players: tuple[PlayerLeader, ...] = ()


@dataclass(frozen=True)
class BracketRound:
    name: str
    fixtures: tuple[FixtureSummary, ...] = ()


@dataclass(frozen=True)
class BracketPayload:
    league_id: int
    season: int
    rounds: tuple[BracketRound, ...] = ()


@dataclass(frozen=True)
class TeamStatLine:
    team: TeamRef
    played: int
    wins: int
    draws: int
    losses: int
    goals_for: int
    goals_against: int
    points: int
    form: str | None = None

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    @property
    def goals_per_game(self) -> float:
        return self.goals_for / self.played if self.played else 0.0


@dataclass(frozen=True)
class TeamStatsPayload:
    league_id: int
    season: int
    teams: tuple[TeamStatLine, ...] = field(default_factory=tuple)
