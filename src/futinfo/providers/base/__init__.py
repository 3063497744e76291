from __future__ import annotations

from futinfo.providers.base.client import BaseHttpClient
from futinfo.providers.base.errors import (
    ProviderError,
    ProviderMappingError,
    ProviderRateLimited,
    ProviderRequestError,
    ProviderResponseError,
)
from futinfo.providers.base.source import LeagueDataSource

__all__ = [
    "BaseHttpClient",
    "LeagueDataSource",
    "ProviderError",
    "ProviderMappingError",
    "ProviderRateLimited",
    "ProviderRequestError",
    "ProviderResponseError",
]
