from __future__ import annotations

import pytest

from futinfo.core.config import Settings


def test_settings_read_classification_tables_from_env(monkeypatch) -> None:
    monkeypatch.setenv("FUTINFO_BRACKET_LEAGUE_IDS", "[39, 140]")
    monkeypatch.setenv("FUTINFO_CUP_LEAGUE_IDS", "[45]")

    cfg = Settings(_env_file=None)
    classification = cfg.classification()

    assert classification.is_bracket_style(140)
    assert not classification.is_bracket_style(2)
    assert not classification.supports_period_selection(45)
    assert classification.supports_period_selection(525)


def test_default_classification_matches_known_competitions(monkeypatch) -> None:
    monkeypatch.delenv("FUTINFO_BRACKET_LEAGUE_IDS", raising=False)
    monkeypatch.delenv("FUTINFO_CUP_LEAGUE_IDS", raising=False)

    classification = Settings(_env_file=None).classification()

    assert classification.is_bracket_style(2)
    assert classification.is_bracket_style(848)
    assert not classification.supports_period_selection(848)


def test_require_api_football_key(monkeypatch) -> None:
    monkeypatch.delenv("API_FOOTBALL_KEY", raising=False)
    with pytest.raises(RuntimeError, match="API_FOOTBALL_KEY"):
        Settings(_env_file=None).require_api_football_key()

    assert Settings(_env_file=None, api_football_key="secret").require_api_football_key() == "secret"
    assert "secret" not in repr(Settings(_env_file=None, api_football_key="secret"))
