from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

HUB_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    # Load apps/hub/.env and accept env keys in any case
    _env_file = HUB_ROOT / ".env"
    model_config = SettingsConfigDict(env_file=str(_env_file), extra="ignore", case_sensitive=False)

    app_name: str = "PWS Weather Hub"
    app_version: str = "0.1.0"
    debug: bool = False
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    port: int = Field(default=3000, ge=1, le=65535)
    static_dir: str = Field(
        default=str(HUB_ROOT / "public"),
        description="Directory holding the front-end bundle; index.html is the fallback page.",
    )

    # Upstream provider (api.weather.com)
    weather_key: str | None = Field(default=None, description="API key for the weather provider. Never sent to the browser.")
    weather_station_id: str = Field(default="IALFAR32", description="Default PWS station for observations")
    weather_base_url: str = Field(default="https://api.weather.com", description="Base URL for weather provider")
    weather_user_agent: str = Field(
        default="PWSWeatherHub/0.1.0",
        description="User-Agent sent to the upstream weather provider.",
    )
    weather_request_timeout: float = Field(default=10.0, ge=1.0, description="Timeout in seconds for weather HTTP calls")
    weather_units: str = Field(default="m", description="Unit system requested upstream (m = metric)")
    forecast_language: str = Field(default="es-ES", description="Language of forecast narratives")
    forecast_default_lat: str = Field(default="36.997", description="Forecast latitude when the request omits one")
    forecast_default_lon: str = Field(default="-4.262", description="Forecast longitude when the request omits one")

    # Cache durations (seconds)
    observations_cache_ttl: float = Field(default=60, ge=0)
    observations_empty_cache_ttl: float = Field(
        default=30,
        ge=0,
        description="Cache duration when the station returned no usable observations.",
    )
    forecast_cache_ttl: float = Field(default=30 * 60, ge=0)
    forecast_empty_cache_ttl: float = Field(
        default=5 * 60,
        ge=0,
        description="Cache duration when the forecast came back empty.",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def normalize_cors(cls, v):
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("["):
                import json
                return json.loads(s)
            if s in ("", "*"):
                return ["*"]
            return [p.strip() for p in s.split(",")]
        return v

    @field_validator("weather_key", mode="before")
    @classmethod
    def blank_key_is_missing(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

settings = Settings()
