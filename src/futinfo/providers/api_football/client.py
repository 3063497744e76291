from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from futinfo.providers.base.client import BaseHttpClient
from futinfo.providers.base.errors import ProviderRateLimited, ProviderResponseError

logger = logging.getLogger(__name__)

ApiItem = dict[str, Any]

_MAX_RATE_LIMIT_ATTEMPTS = 5


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _header(headers: Mapping[str, str], name: str) -> str | None:
    # httpx headers are case-insensitive; plain dicts from tests may not be.
    value = headers.get(name)
    if value is None:
        value = headers.get(name.lower())
    return value


@dataclass
class ApiFootballRateLimiter:
    """Proactive throttling based on api-sports rate limit headers.

    The provider returns per-minute limit/remaining headers; we use them to pace
    requests so a screen load (several concurrent calls) stays under the plan.
    """

    minute_limit_low_watermark: int = 2
    min_interval_s: float = 0.0
    last_request_monotonic: float | None = None

    _sleep: Any = field(default=asyncio.sleep, repr=False)
    _monotonic: Any = field(default=time.monotonic, repr=False)

    async def before_request(self) -> None:
        if self.min_interval_s <= 0.0:
            return
        now = float(self._monotonic())
        if self.last_request_monotonic is None:
            return
        elapsed = now - self.last_request_monotonic
        remaining = self.min_interval_s - elapsed
        if remaining > 0:
            await self._sleep(remaining)

    async def cooldown(self, seconds: float) -> None:
        await self._sleep(seconds)

    async def after_response(self, headers: Mapping[str, str]) -> None:
        limit = _parse_int(_header(headers, "X-RateLimit-Limit"))
        remaining = _parse_int(_header(headers, "X-RateLimit-Remaining"))

        if limit and limit > 0:
            self.min_interval_s = max(self.min_interval_s, 60.0 / float(limit))

        # Near the end of the minute bucket; no reset header is sent, so wait
        # out the bucket when it is (almost) empty.
        if remaining is not None and remaining <= self.minute_limit_low_watermark:
            cooldown = 60.0 if remaining <= 1 else 10.0
            logger.info("api-football minute bucket low (remaining=%s); sleeping %.0fs", remaining, cooldown)
            await self._sleep(cooldown)

        self.last_request_monotonic = float(self._monotonic())


@dataclass
class ApiFootballClient:
    http: BaseHttpClient
    api_key: str
    rate_limiter: ApiFootballRateLimiter = field(default_factory=ApiFootballRateLimiter)

    def _headers(self) -> dict[str, str]:
        return {"x-apisports-key": self.api_key}

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        await self.rate_limiter.before_request()

        attempts = 0
        while True:
            attempts += 1
            try:
                data, headers = await self.http.get_json_with_headers(
                    path, params=params, headers=self._headers()
                )
                await self.rate_limiter.after_response(headers)
                break
            except ProviderRateLimited:
                if attempts >= _MAX_RATE_LIMIT_ATTEMPTS:
                    raise
                logger.warning(
                    "api-football rate limited on %s (attempt %d/%d)",
                    path,
                    attempts,
                    _MAX_RATE_LIMIT_ATTEMPTS,
                )
                await self.rate_limiter.cooldown(60.0)

        # api-sports reports application errors in the body with HTTP 200,
        # as either a list or a {field: message} object.
        errors = data.get("errors") or []
        if errors:
            raise ProviderResponseError(f"api-football returned errors: {errors}")

        return data

    async def get_response_items(
        self, path: str, params: Mapping[str, Any] | None = None
    ) -> list[ApiItem]:
        payload = await self.get(path, params=params)
        items = payload.get("response")
        if not isinstance(items, list):
            raise ProviderResponseError(f"Expected 'response' list, got: {type(items)}")
        return [i for i in items if isinstance(i, dict)]

    async def get_response_strings(
        self, path: str, params: Mapping[str, Any] | None = None
    ) -> list[str]:
        """For endpoints such as /fixtures/rounds whose response is a list of labels."""
        payload = await self.get(path, params=params)
        items = payload.get("response")
        if not isinstance(items, list):
            raise ProviderResponseError(f"Expected 'response' list, got: {type(items)}")
        return [i for i in items if isinstance(i, str)]

    async def aclose(self) -> None:
        await self.http.aclose()
