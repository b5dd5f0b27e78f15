from fastapi import APIRouter

from config import settings
from .weather_router import router as weather_router

router = APIRouter(prefix="/api", tags=["api"])
router.include_router(weather_router)


@router.get("/info")
async def info():
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "debug": settings.debug,
        "station_id": settings.weather_station_id,
        "forecast_location": {
            "lat": settings.forecast_default_lat,
            "lon": settings.forecast_default_lon,
        },
        "weather_key_configured": settings.weather_key is not None,
        "cache_ttl_seconds": {
            "observations": settings.observations_cache_ttl,
            "observations_empty": settings.observations_empty_cache_ttl,
            "forecast": settings.forecast_cache_ttl,
            "forecast_empty": settings.forecast_empty_cache_ttl,
        },
    }
