from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class SliceKey(StrEnum):
    STANDINGS = "standings"
    FIXTURES = "fixtures"
    TOP_SCORERS = "top_scorers"
    TOP_ASSISTS = "top_assists"
    BRACKET = "bracket"
    TEAM_STATISTICS = "team_statistics"


class SliceStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class DataSlice:
    """
    Load state of one dataset on the league screen.

    `is_loading` and `error_message` are mutually exclusive. A failed slice may
    still carry the payload of an earlier load; the error takes precedence
    when rendering.
    """

    payload: Any = None
    is_loading: bool = False
    error_message: str | None = None
    period: int | None = None

    def __post_init__(self) -> None:
        if self.is_loading and self.error_message is not None:
            raise ValueError("A loading slice cannot carry an error message")

    @property
    def status(self) -> SliceStatus:
        if self.is_loading:
            return SliceStatus.LOADING
        if self.error_message is not None:
            return SliceStatus.FAILED
        if self.payload is not None:
            return SliceStatus.LOADED
        return SliceStatus.IDLE

    @classmethod
    def idle(cls) -> DataSlice:
        return cls()

    def loading(self, period: int, *, keep_payload: bool = True) -> DataSlice:
        return DataSlice(
            payload=self.payload if keep_payload else None,
            is_loading=True,
            error_message=None,
            period=period,
        )

    def loaded(self, payload: Any) -> DataSlice:
        return DataSlice(payload=payload, is_loading=False, error_message=None, period=self.period)

    def failed(self, message: str) -> DataSlice:
        return DataSlice(
            payload=self.payload, is_loading=False, error_message=message, period=self.period
        )
