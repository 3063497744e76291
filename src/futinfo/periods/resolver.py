from __future__ import annotations

import logging
from datetime import date

from futinfo.periods.classification import CompetitionClassification
from futinfo.periods.types import EntityPeriodCatalog, ReportingPeriod

logger = logging.getLogger(__name__)

# Seasons run July..June; from this month on the new season is the default.
SEASON_START_MONTH = 7

# Synthesized selector range when the provider lists no seasons.
_FALLBACK_PAST_SEASONS = 10


def default_period(today: date) -> int:
    """Season year implied by the calendar alone (July-June convention)."""

    return today.year if today.month >= SEASON_START_MONTH else today.year - 1


def _latest_ended(periods: tuple[ReportingPeriod, ...], today: date) -> ReportingPeriod | None:
    ended = [p for p in periods if p.end_date is not None and p.end_date < today]
    if not ended:
        return None
    # max() keeps the first of equal end dates, i.e. provider order.
    return max(ended, key=lambda p: p.end_date)  # type: ignore[arg-type,return-value]


def resolve_optimal_period(
    catalog: EntityPeriodCatalog | None,
    requested_year: int | None,
    today: date,
) -> int:
    """Pick the season a league view should open on.

    Rules, first match wins:
      1. an explicitly requested year, even if the catalog does not list it
      2. the season flagged current (greatest year if several are flagged)
      3. the season that ended most recently before `today`
      4. the greatest year in the catalog
      5. `default_period(today)`

    Never raises.
    """

    if requested_year is not None:
        return requested_year

    periods = catalog.periods if catalog is not None else ()

    current = [p for p in periods if p.is_current]
    if current:
        if len(current) > 1:
            logger.warning(
                "Catalog for entity %s flags %d seasons as current; using the latest",
                catalog.entity_id if catalog is not None else None,
                len(current),
            )
        return max(p.year for p in current)

    ended = _latest_ended(periods, today)
    if ended is not None:
        return ended.year

    if periods:
        return max(p.year for p in periods)

    return default_period(today)


def list_available_periods(catalog: EntityPeriodCatalog | None, today: date) -> tuple[int, ...]:
    """Selectable season years, newest first.

    The upcoming season (`default_period(today) + 1`) is always included so it
    can be picked before the provider publishes it.
    """

    fallback = default_period(today)

    if catalog is None or catalog.is_empty:
        return tuple(range(fallback + 1, fallback - _FALLBACK_PAST_SEASONS - 1, -1))

    years = catalog.years()
    years.add(fallback + 1)
    return tuple(sorted(years, reverse=True))


def is_period_selection_supported(
    entity_id: int,
    classification: CompetitionClassification | None = None,
) -> bool:
    return (classification or CompetitionClassification()).supports_period_selection(entity_id)


def is_bracket_style(
    entity_id: int,
    classification: CompetitionClassification | None = None,
) -> bool:
    return (classification or CompetitionClassification()).is_bracket_style(entity_id)
