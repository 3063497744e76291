from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from futinfo.periods.classification import (
    DEFAULT_BRACKET_LEAGUE_IDS,
    DEFAULT_CUP_LEAGUE_IDS,
    CompetitionClassification,
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # api-football (api-sports v3)
    api_football_key: str | None = Field(default=None, repr=False)
    api_football_base_url: str = "https://v3.football.api-sports.io"

    http_timeout_s: float = 30.0
    http_connect_timeout_s: float = 10.0

    log_level: str = Field(default="INFO", validation_alias="FUTINFO_LOG_LEVEL")

    # Competition classification tables (JSON lists in the environment)
    bracket_league_ids: list[int] = Field(
        default_factory=lambda: sorted(DEFAULT_BRACKET_LEAGUE_IDS),
        validation_alias="FUTINFO_BRACKET_LEAGUE_IDS",
    )
    cup_league_ids: list[int] = Field(
        default_factory=lambda: sorted(DEFAULT_CUP_LEAGUE_IDS),
        validation_alias="FUTINFO_CUP_LEAGUE_IDS",
    )

    # -----------------------------
    # Required-key helpers
    # -----------------------------

    def require_api_football_key(self) -> str:
        if not self.api_football_key:
            raise RuntimeError(
                "API_FOOTBALL_KEY is not set. Set it in the environment or .env file."
            )
        return self.api_football_key

    def classification(self) -> CompetitionClassification:
        return CompetitionClassification(
            bracket_style=frozenset(self.bracket_league_ids),
            period_selection_unsupported=frozenset(self.cup_league_ids),
        )


settings = Settings()
