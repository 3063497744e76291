from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import date
from typing import Any

from futinfo.periods.classification import CompetitionClassification
from futinfo.periods.resolver import (
    default_period,
    list_available_periods,
    resolve_optimal_period,
)
from futinfo.providers.base.source import LeagueDataSource
from futinfo.viewstate.slices import DataSlice, SliceKey
from futinfo.viewstate.state import LeagueDetailState, LeagueTab, tabs_for

logger = logging.getLogger(__name__)

Listener = Callable[[LeagueDetailState], None]
Loader = Callable[[int, int], Awaitable[Any]]


class LeagueDetailViewModel:
    """
    State owner for one league detail screen.

    Data operations only schedule work: slice loads run as independent asyncio
    tasks and each one writes back its own slice. A result is applied only if
    it is the latest load issued for its slice and the screen still shows the
    league and season it was issued for; anything else is dropped.

    Listeners registered with `subscribe` receive every new snapshot.
    """

    def __init__(
        self,
        source: LeagueDataSource,
        *,
        classification: CompetitionClassification | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._source = source
        self._classification = classification or CompetitionClassification()
        self._today = today

        self._state = LeagueDetailState()
        self._listeners: list[Listener] = []
        self._tasks: set[asyncio.Task[None]] = set()
        self._issued: dict[SliceKey, int] = {key: 0 for key in SliceKey}
        self._activation = 0
        # Set when the user picks a season while the catalog is still loading.
        self._period_pinned = False
        self._closed = False

    # -----------------------------
    # Observation
    # -----------------------------

    @property
    def state(self) -> LeagueDetailState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, state: LeagueDetailState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("League detail listener %r failed", listener)

    # -----------------------------
    # Classification helpers
    # -----------------------------

    @property
    def is_bracket_style(self) -> bool:
        entity_id = self._state.entity_id
        return entity_id is not None and self._classification.is_bracket_style(entity_id)

    @property
    def supports_period_selection(self) -> bool:
        entity_id = self._state.entity_id
        return entity_id is not None and self._classification.supports_period_selection(entity_id)

    @property
    def tabs(self) -> tuple[LeagueTab, ...]:
        return tabs_for(bracket_style=self.is_bracket_style)

    # -----------------------------
    # Operations
    # -----------------------------

    async def activate(self, entity_id: int, requested_year: int | None = None) -> None:
        """
        Open the screen for a league: resolve the season from the provider's
        catalog, then load every slice for it.

        A catalog failure falls back to `requested_year` or the calendar
        default and is not surfaced on the screen.
        """
        self._ensure_open()
        self._activation += 1
        activation = self._activation
        self._period_pinned = False

        today = self._today()
        same_entity = self._state.entity_id == entity_id
        provisional = requested_year if requested_year is not None else default_period(today)

        provisional_state = self._state.evolve(
            entity_id=entity_id,
            selected_period=provisional,
            selected_tab=self._state.selected_tab if same_entity else 0,
            available_periods=self._state.available_periods if same_entity else (),
            show_period_selector=False,
        )
        if not same_entity:
            # Nothing of the previous league may stay on screen while the
            # catalog loads; its in-flight loads are invalidated too.
            provisional_state = provisional_state.with_slices(
                self._pending_slices(entity_id, provisional)
            )
        self._publish(provisional_state)

        try:
            catalog = await self._source.fetch_period_catalog(entity_id)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if activation != self._activation or self._period_pinned:
                logger.debug("Dropping catalog failure of superseded activation for league %s", entity_id)
                return
            period = requested_year if requested_year is not None else default_period(today)
            logger.warning(
                "Season catalog for league %s unavailable (%s); falling back to season %s",
                entity_id,
                e,
                period,
            )
            available: tuple[int, ...] = ()
        else:
            if activation != self._activation:
                logger.debug("Dropping catalog of superseded activation for league %s", entity_id)
                return
            if self._classification.supports_period_selection(entity_id):
                available = list_available_periods(catalog, today)
            else:
                available = ()
            if self._period_pinned:
                # The user already chose a season; only the selector list is new.
                self._publish(self._state.evolve(available_periods=available))
                return
            period = resolve_optimal_period(catalog, requested_year, today)
            logger.debug(
                "League %s resolved to season %s (available: %s)", entity_id, period, available
            )

        self._publish(self._state.evolve(selected_period=period, available_periods=available))
        self._load_all(entity_id, period, keep_payload=same_entity)

    async def change_period(self, new_year: int) -> None:
        """Switch season: clear every slice and reload it for `new_year`."""
        self._ensure_open()
        entity_id = self._state.entity_id
        if entity_id is None or new_year == self._state.selected_period:
            return

        logger.info(
            "League %s: season %s -> %s", entity_id, self._state.selected_period, new_year
        )
        # A catalog still in flight must not override the user's choice.
        self._period_pinned = True
        self._publish(self._state.evolve(selected_period=new_year, show_period_selector=False))
        self._load_all(entity_id, new_year, keep_payload=False)

    def select_tab(self, index: int) -> None:
        clamped = min(max(index, 0), len(self.tabs) - 1)
        if clamped != self._state.selected_tab:
            self._publish(self._state.evolve(selected_tab=clamped))

    async def ensure_supplemental_loaded(self) -> None:
        """
        Load the bracket if this league has one and it is neither loaded nor
        loading. Safe to call on every bracket-tab focus.
        """
        self._ensure_open()
        entity_id = self._state.entity_id
        period = self._state.selected_period
        if entity_id is None or period is None or not self.is_bracket_style:
            return

        current = self._state.bracket
        if current.payload is not None or current.is_loading:
            return

        self._publish(self._state.with_slice(SliceKey.BRACKET, current.loading(period)))
        self._spawn(SliceKey.BRACKET, entity_id, period)

    async def refresh(self) -> None:
        """Re-run activation pinned to the season on screen."""
        entity_id = self._state.entity_id
        if entity_id is None:
            return
        await self.activate(entity_id, self._state.selected_period)

    def show_period_selector(self) -> bool:
        """Open the season selector if this league supports one; returns whether it opened."""
        if not self.supports_period_selection or not self._state.available_periods:
            logger.debug(
                "Season selector unavailable for league %s (%d seasons)",
                self._state.entity_id,
                len(self._state.available_periods),
            )
            return False
        if not self._state.show_period_selector:
            self._publish(self._state.evolve(show_period_selector=True))
        return True

    def hide_period_selector(self) -> None:
        if self._state.show_period_selector:
            self._publish(self._state.evolve(show_period_selector=False))

    async def wait_idle(self) -> None:
        """Wait until no slice load is in flight (including loads started meanwhile)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        """Cancel in-flight loads and detach listeners. The instance cannot be reused."""
        if self._closed:
            return
        self._closed = True
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._listeners.clear()

    # -----------------------------
    # Slice loading
    # -----------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("LeagueDetailViewModel is closed")

    def _loaders(self) -> dict[SliceKey, Loader]:
        return {
            SliceKey.STANDINGS: self._source.fetch_standings,
            SliceKey.FIXTURES: self._source.fetch_fixtures,
            SliceKey.TOP_SCORERS: self._source.fetch_top_scorers,
            SliceKey.TOP_ASSISTS: self._source.fetch_top_assists,
            SliceKey.BRACKET: self._source.fetch_bracket,
            SliceKey.TEAM_STATISTICS: self._source.fetch_team_statistics,
        }

    def _pending_slices(self, entity_id: int, period: int) -> dict[SliceKey, DataSlice]:
        """Cleared slices awaiting a load for a newly opened league."""
        bracket_style = self._classification.is_bracket_style(entity_id)
        updates: dict[SliceKey, DataSlice] = {}
        for key in SliceKey:
            self._issued[key] += 1
            if key is SliceKey.BRACKET and not bracket_style:
                updates[key] = DataSlice.idle()
            else:
                updates[key] = DataSlice.idle().loading(period, keep_payload=False)
        return updates

    def _load_all(self, entity_id: int, period: int, *, keep_payload: bool) -> None:
        bracket_style = self._classification.is_bracket_style(entity_id)

        updates: dict[SliceKey, DataSlice] = {}
        to_load: list[SliceKey] = []
        for key in SliceKey:
            if key is SliceKey.BRACKET and not bracket_style:
                # No bracket fetch for this league; invalidate any earlier one.
                self._issued[key] += 1
                updates[key] = DataSlice.idle()
                continue
            updates[key] = self._state.slice(key).loading(period, keep_payload=keep_payload)
            to_load.append(key)

        self._publish(self._state.with_slices(updates))
        for key in to_load:
            self._spawn(key, entity_id, period)

    def _spawn(self, key: SliceKey, entity_id: int, period: int) -> None:
        self._issued[key] += 1
        seq = self._issued[key]
        task = asyncio.create_task(
            self._run_load(key, entity_id, period, seq),
            name=f"futinfo-{key.value}-{entity_id}-{period}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _is_stale(self, key: SliceKey, entity_id: int, period: int, seq: int) -> bool:
        return (
            seq != self._issued[key]
            or entity_id != self._state.entity_id
            or period != self._state.selected_period
        )

    async def _run_load(self, key: SliceKey, entity_id: int, period: int, seq: int) -> None:
        loader = self._loaders()[key]
        try:
            payload = await loader(entity_id, period)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if self._is_stale(key, entity_id, period, seq):
                logger.debug(
                    "Discarding stale %s failure for league %s season %s", key, entity_id, period
                )
                return
            message = str(e) or type(e).__name__
            logger.warning(
                "Loading %s for league %s season %s failed: %s", key, entity_id, period, message
            )
            self._publish(self._state.with_slice(key, self._state.slice(key).failed(message)))
            return

        if self._is_stale(key, entity_id, period, seq):
            logger.debug("Discarding stale %s for league %s season %s", key, entity_id, period)
            return

        self._publish(self._state.with_slice(key, self._state.slice(key).loaded(payload)))
