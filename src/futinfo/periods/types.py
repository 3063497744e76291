from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ReportingPeriod:
    """
    One season of a competition.

    `year` is the starting year (2024 denotes 2024/25). `end_date` is None for
    ongoing or future seasons and for seasons whose end could not be parsed.
    """

    year: int
    is_current: bool = False
    end_date: date | None = None
    start_date: date | None = None


@dataclass(frozen=True)
class EntityPeriodCatalog:
    """
    All seasons the provider knows for one competition.

    Periods are kept in provider order; nothing here assumes they are sorted
    or contiguous.
    """

    entity_id: int
    periods: tuple[ReportingPeriod, ...] = ()

    @classmethod
    def of(cls, entity_id: int, periods: Iterable[ReportingPeriod]) -> EntityPeriodCatalog:
        return cls(entity_id=entity_id, periods=tuple(periods))

    @property
    def is_empty(self) -> bool:
        return not self.periods

    def years(self) -> set[int]:
        return {p.year for p in self.periods}
