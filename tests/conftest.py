from __future__ import annotations

import asyncio
from typing import Any

from futinfo.periods.types import EntityPeriodCatalog

SLICE_FETCHES = (
    "standings",
    "fixtures",
    "top_scorers",
    "top_assists",
    "bracket",
    "team_statistics",
)


class FakeLeagueSource:
    """
    In-memory LeagueDataSource.

    Payloads are `(name, entity_id, year)` tuples. `hold(name, year)` makes the
    matching fetch wait until the returned event is set; `failures[name]` or
    `failures[(name, year)]` makes that fetch raise.
    """

    def __init__(
        self,
        catalog: EntityPeriodCatalog | None = None,
        catalog_error: Exception | None = None,
    ) -> None:
        self.catalog = catalog
        self.catalog_error = catalog_error
        self.catalog_gate: asyncio.Event | None = None
        self.calls: list[tuple[str, int, int | None]] = []
        self.failures: dict[str | tuple[str, int], Exception] = {}
        self._gates: dict[tuple[str, int], asyncio.Event] = {}

    def hold(self, name: str, year: int) -> asyncio.Event:
        event = asyncio.Event()
        self._gates[(name, year)] = event
        return event

    def release_all(self) -> None:
        for event in self._gates.values():
            event.set()

    def calls_for(self, name: str) -> list[tuple[str, int, int | None]]:
        return [c for c in self.calls if c[0] == name]

    async def fetch_period_catalog(self, entity_id: int) -> EntityPeriodCatalog:
        self.calls.append(("catalog", entity_id, None))
        if self.catalog_gate is not None:
            await self.catalog_gate.wait()
        if self.catalog_error is not None:
            raise self.catalog_error
        return self.catalog or EntityPeriodCatalog(entity_id=entity_id)

    async def _fetch(self, name: str, entity_id: int, year: int) -> Any:
        self.calls.append((name, entity_id, year))
        gate = self._gates.get((name, year))
        if gate is not None:
            await gate.wait()
        failure = self.failures.get((name, year)) or self.failures.get(name)
        if failure is not None:
            raise failure
        return (name, entity_id, year)

    async def fetch_standings(self, entity_id: int, year: int) -> Any:
        return await self._fetch("standings", entity_id, year)

    async def fetch_fixtures(self, entity_id: int, year: int) -> Any:
        return await self._fetch("fixtures", entity_id, year)

    async def fetch_top_scorers(self, entity_id: int, year: int) -> Any:
        return await self._fetch("top_scorers", entity_id, year)

    async def fetch_top_assists(self, entity_id: int, year: int) -> Any:
        return await self._fetch("top_assists", entity_id, year)

    async def fetch_bracket(self, entity_id: int, year: int) -> Any:
        return await self._fetch("bracket", entity_id, year)

    async def fetch_team_statistics(self, entity_id: int, year: int) -> Any:
        return await self._fetch("team_statistics", entity_id, year)
