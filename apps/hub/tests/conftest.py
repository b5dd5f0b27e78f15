import sys
from pathlib import Path
from typing import Any, Callable, Dict

ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from config import settings  # noqa: E402
from main import create_app  # noqa: E402
from services.weather import weather_service  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def _reset_weather_cache() -> None:
    weather_service.clear_cache()
    yield
    weather_service.clear_cache()


@pytest.fixture
def settings_override() -> Callable[..., None]:
    original: Dict[str, Any] = {}

    def _apply(**overrides: Any) -> None:
        for key, value in overrides.items():
            if key not in original:
                original[key] = getattr(settings, key)
            setattr(settings, key, value)

    yield _apply

    for key, value in original.items():
        setattr(settings, key, value)


@pytest.fixture
def upstream_settings(settings_override: Callable[..., None]) -> None:
    settings_override(
        weather_key="test-key",
        weather_base_url="https://api.weather.com",
        weather_station_id="IALFAR32",
        forecast_default_lat="36.997",
        forecast_default_lon="-4.262",
    )
    yield


@pytest.fixture
def client(upstream_settings: None) -> TestClient:
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
