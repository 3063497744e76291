from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Mapping

from futinfo.viewstate.slices import DataSlice, SliceKey


class LeagueTab(StrEnum):
    STANDINGS = "standings"
    FIXTURES = "fixtures"
    PLAYERS = "players"
    BRACKET = "bracket"
    TEAMS = "teams"


LEAGUE_TABS: tuple[LeagueTab, ...] = (
    LeagueTab.STANDINGS,
    LeagueTab.FIXTURES,
    LeagueTab.PLAYERS,
    LeagueTab.TEAMS,
)

BRACKET_LEAGUE_TABS: tuple[LeagueTab, ...] = (
    LeagueTab.STANDINGS,
    LeagueTab.FIXTURES,
    LeagueTab.PLAYERS,
    LeagueTab.BRACKET,
    LeagueTab.TEAMS,
)


def tabs_for(*, bracket_style: bool) -> tuple[LeagueTab, ...]:
    return BRACKET_LEAGUE_TABS if bracket_style else LEAGUE_TABS


def _initial_slices() -> Mapping[SliceKey, DataSlice]:
    return MappingProxyType({key: DataSlice.idle() for key in SliceKey})


@dataclass(frozen=True)
class LeagueDetailState:
    """Immutable snapshot of the league detail screen."""

    entity_id: int | None = None
    selected_period: int | None = None
    selected_tab: int = 0
    available_periods: tuple[int, ...] = ()
    show_period_selector: bool = False
    slices: Mapping[SliceKey, DataSlice] = field(default_factory=_initial_slices)

    def slice(self, key: SliceKey) -> DataSlice:
        return self.slices[key]

    @property
    def standings(self) -> DataSlice:
        return self.slices[SliceKey.STANDINGS]

    @property
    def fixtures(self) -> DataSlice:
        return self.slices[SliceKey.FIXTURES]

    @property
    def top_scorers(self) -> DataSlice:
        return self.slices[SliceKey.TOP_SCORERS]

    @property
    def top_assists(self) -> DataSlice:
        return self.slices[SliceKey.TOP_ASSISTS]

    @property
    def bracket(self) -> DataSlice:
        return self.slices[SliceKey.BRACKET]

    @property
    def team_statistics(self) -> DataSlice:
        return self.slices[SliceKey.TEAM_STATISTICS]

    @property
    def is_any_loading(self) -> bool:
        return any(s.is_loading for s in self.slices.values())

    def with_slice(self, key: SliceKey, value: DataSlice) -> LeagueDetailState:
        updated = dict(self.slices)
        updated[key] = value
        return replace(self, slices=MappingProxyType(updated))

    def with_slices(self, values: Mapping[SliceKey, DataSlice]) -> LeagueDetailState:
        updated = dict(self.slices)
        updated.update(values)
        return replace(self, slices=MappingProxyType(updated))

    def evolve(self, **changes: Any) -> LeagueDetailState:
        return replace(self, **changes)
