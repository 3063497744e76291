from __future__ import annotations

from datetime import date

from futinfo.periods.classification import CompetitionClassification
from futinfo.periods.resolver import (
    default_period,
    is_bracket_style,
    is_period_selection_supported,
    list_available_periods,
    resolve_optimal_period,
)
from futinfo.periods.types import EntityPeriodCatalog, ReportingPeriod


def _catalog(*periods: ReportingPeriod) -> EntityPeriodCatalog:
    return EntityPeriodCatalog.of(39, periods)


def test_default_period_uses_july_june_seasons() -> None:
    assert default_period(date(2025, 3, 15)) == 2024
    assert default_period(date(2025, 6, 30)) == 2024
    assert default_period(date(2025, 7, 1)) == 2025
    assert default_period(date(2025, 8, 15)) == 2025


def test_requested_year_always_wins() -> None:
    catalog = _catalog(
        ReportingPeriod(year=2023, is_current=True),
        ReportingPeriod(year=2022, end_date=date(2023, 5, 28)),
    )
    today = date(2024, 1, 10)

    assert resolve_optimal_period(catalog, 2019, today) == 2019
    # Not in the catalog at all.
    assert resolve_optimal_period(catalog, 1990, today) == 1990
    assert resolve_optimal_period(_catalog(), 2030, today) == 2030
    assert resolve_optimal_period(None, 2021, today) == 2021


def test_current_flag_beats_end_dates() -> None:
    catalog = _catalog(
        ReportingPeriod(year=2024, end_date=date(2025, 5, 25)),
        ReportingPeriod(year=2021, is_current=True, end_date=date(2022, 5, 22)),
        ReportingPeriod(year=2023, end_date=date(2024, 5, 19)),
    )

    assert resolve_optimal_period(catalog, None, date(2025, 8, 1)) == 2021


def test_several_current_flags_pick_greatest_year() -> None:
    catalog = _catalog(
        ReportingPeriod(year=2023, is_current=True),
        ReportingPeriod(year=2024, is_current=True),
        ReportingPeriod(year=2022, is_current=True),
    )

    assert resolve_optimal_period(catalog, None, date(2025, 1, 1)) == 2024


def test_most_recently_ended_season_is_used_without_current_flag() -> None:
    catalog = _catalog(
        ReportingPeriod(year=2021, end_date=date(2022, 6, 1)),
        ReportingPeriod(year=2022, end_date=date(2023, 6, 1)),
        # Ends in the future relative to "today"; not a candidate.
        ReportingPeriod(year=2023, end_date=date(2024, 6, 1)),
    )

    assert resolve_optimal_period(catalog, None, date(2023, 8, 1)) == 2022


def test_end_date_equal_to_today_has_not_ended() -> None:
    catalog = _catalog(
        ReportingPeriod(year=2021, end_date=date(2022, 5, 22)),
        ReportingPeriod(year=2022, end_date=date(2023, 6, 1)),
    )

    assert resolve_optimal_period(catalog, None, date(2023, 6, 1)) == 2021


def test_periods_without_end_date_fall_back_to_greatest_year() -> None:
    catalog = _catalog(
        ReportingPeriod(year=2019),
        ReportingPeriod(year=2026),
        ReportingPeriod(year=2024),
    )

    assert resolve_optimal_period(catalog, None, date(2025, 3, 1)) == 2026


def test_empty_catalog_uses_calendar_default() -> None:
    assert resolve_optimal_period(_catalog(), None, date(2025, 3, 15)) == 2024
    assert resolve_optimal_period(_catalog(), None, date(2025, 8, 15)) == 2025
    assert resolve_optimal_period(None, None, date(2025, 8, 15)) == 2025


def test_available_periods_for_empty_catalog_span_next_to_ten_back() -> None:
    periods = list_available_periods(_catalog(), date(2025, 3, 15))

    assert periods[0] == 2025
    assert periods[-1] == 2014
    assert list(periods) == sorted(periods, reverse=True)
    assert len(set(periods)) == len(periods)


def test_available_periods_add_upcoming_season_and_dedupe() -> None:
    catalog = _catalog(
        ReportingPeriod(year=2020),
        ReportingPeriod(year=2023),
        ReportingPeriod(year=2023, is_current=True),
        ReportingPeriod(year=2018),
    )

    assert list_available_periods(catalog, date(2024, 9, 1)) == (2025, 2023, 2020, 2018)
    # Upcoming season already published by the provider.
    assert list_available_periods(_catalog(ReportingPeriod(year=2025)), date(2024, 9, 1)) == (
        2025,
    )


def test_available_periods_always_include_next_season() -> None:
    catalog = _catalog(ReportingPeriod(year=2010), ReportingPeriod(year=2011))
    for today in (date(2012, 1, 1), date(2019, 7, 1), date(2030, 12, 31)):
        assert default_period(today) + 1 in list_available_periods(catalog, today)


def test_static_classification_lookups() -> None:
    assert is_period_selection_supported(39) is True
    assert is_period_selection_supported(525) is False  # FA Cup
    assert is_bracket_style(2) is True
    assert is_bracket_style(39) is False

    custom = CompetitionClassification(
        bracket_style=frozenset({39}), period_selection_unsupported=frozenset({39})
    )
    assert is_bracket_style(39, custom) is True
    assert is_period_selection_supported(39, custom) is False
    assert is_period_selection_supported(525, custom) is True
