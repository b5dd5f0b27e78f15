from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from config import settings
from services.upstream import UpstreamError
from services.weather import weather_service

router = APIRouter(tags=["weather"])
logger = logging.getLogger("pws.hub.api.weather")


@router.get("/observations")
async def get_observations(
	station_id: Optional[str] = Query(default=None, alias="stationId", description="PWS station identifier"),
):
	station = station_id or settings.weather_station_id
	try:
		return await weather_service.get_observations(station)
	except UpstreamError as exc:
		logger.error("/api/observations: %s", exc)
		return JSONResponse(
			status_code=502,
			content={"observations": [], "error": "Observations unavailable", "detail": str(exc)},
		)


@router.get("/forecast")
async def get_forecast(
	lat: Optional[str] = Query(default=None, description="Latitude, passed through verbatim"),
	lon: Optional[str] = Query(default=None, description="Longitude, passed through verbatim"),
):
	if lat is None:
		lat = settings.forecast_default_lat
	if lon is None:
		lon = settings.forecast_default_lon
	try:
		return await weather_service.get_forecast(lat, lon)
	except UpstreamError as exc:
		logger.error("/api/forecast: %s", exc)
		return JSONResponse(
			status_code=502,
			content={"error": "Forecast unavailable", "detail": str(exc)},
		)
