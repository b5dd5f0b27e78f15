import logging
from typing import Any, Optional

import httpx

from config import settings
from services.cache import TTLCache
from services.upstream import fetch_json

logger = logging.getLogger("pws.hub.weather")

OBSERVATIONS_PATH = "/v2/pws/observations/current"
FORECAST_PATH = "/v3/wx/forecast/daily/7day"


def observations_cache_key(station_id: str) -> str:
    return f"obs:{station_id}"


def forecast_cache_key(lat: str, lon: str) -> str:
    return f"fc:{lat},{lon}"


class WeatherProxyService:
    """Cached pass-through to the PWS observation and daily forecast feeds.

    Upstream payloads are returned as-is. Missing or malformed payloads are
    replaced by an empty body of the expected shape and cached briefly so the
    front-end keeps rendering while the provider recovers.
    """

    def __init__(self, cache: TTLCache | None = None) -> None:
        self._client: Optional[httpx.AsyncClient] = None
        self._cache = cache if cache is not None else TTLCache()

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {
                "User-Agent": settings.weather_user_agent,
                "Accept": "application/json",
            }
            self._client = httpx.AsyncClient(headers=headers, timeout=settings.weather_request_timeout)
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def clear_cache(self) -> None:
        self._cache.clear()

    def _base_params(self) -> dict[str, str]:
        return {
            "format": "json",
            "units": settings.weather_units,
            "apiKey": settings.weather_key or "",
        }

    async def get_observations(self, station_id: str) -> dict[str, Any]:
        key = observations_cache_key(station_id)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("observations cache hit for %s", station_id)
            return cached

        url = f"{settings.weather_base_url.rstrip('/')}{OBSERVATIONS_PATH}"
        params = {"stationId": station_id, **self._base_params()}
        logger.debug("Fetching observations for %s from %s", station_id, url)
        data = await fetch_json(await self._get_client(), url, params)

        if not isinstance(data, dict) or not isinstance(data.get("observations"), list):
            logger.info("No observations available for %s; serving empty list", station_id)
            safe: dict[str, Any] = {"observations": []}
            self._cache.set(key, safe, settings.observations_empty_cache_ttl)
            return safe

        self._cache.set(key, data, settings.observations_cache_ttl)
        return data

    async def get_forecast(self, lat: str, lon: str) -> dict[str, Any] | list[Any]:
        key = forecast_cache_key(lat, lon)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("forecast cache hit for %s,%s", lat, lon)
            return cached

        url = f"{settings.weather_base_url.rstrip('/')}{FORECAST_PATH}"
        params = {
            "geocode": f"{lat},{lon}",
            "language": settings.forecast_language,
            **self._base_params(),
        }
        logger.debug("Fetching forecast for %s,%s from %s", lat, lon, url)
        data = await fetch_json(await self._get_client(), url, params)

        if not isinstance(data, (dict, list)):
            logger.info("Empty forecast for %s,%s; serving empty object", lat, lon)
            self._cache.set(key, {}, settings.forecast_empty_cache_ttl)
            return {}

        self._cache.set(key, data, settings.forecast_cache_ttl)
        return data

weather_service = WeatherProxyService()
