"""Market, sensor and weather feeds for the dashboard"""
import random
from typing import List

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.api.deps import get_rng
from app.middleware.monitoring import record_weather_failure
from app.middleware.rate_limit import rate_limit
from app.schemas.dashboard import MarketQuote, SensorReading, WeatherResponse
from app.utils import weather
from app.utils.logger import logger
from app.utils.mock_feeds import generate_market_data, generate_sensor_reading

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/market-data", response_model=List[MarketQuote])
@rate_limit("dashboard")
def market_data(request: Request, rng: random.Random = Depends(get_rng)):
    """Mock prices for the tracked crops"""
    return generate_market_data(rng)


@router.get("/sensors/{user_id}", response_model=SensorReading)
@rate_limit("dashboard")
def sensor_data(request: Request, user_id: int, rng: random.Random = Depends(get_rng)):
    """Mock field sensor snapshot"""
    return generate_sensor_reading(user_id, rng)


@router.get("/weather/{lat}/{lng}", response_model=WeatherResponse)
@rate_limit("dashboard")
def weather_forecast(request: Request, lat: float, lng: float):
    """
    Current weather and a daily forecast from Open-Meteo.

    Returns 500 ``{"error": "Weather data unavailable"}`` when the upstream
    call fails.
    """
    try:
        return weather.fetch_forecast(lat, lng)
    except weather.WeatherUnavailable as exc:
        record_weather_failure()
        logger.warning(
            "Weather lookup failed",
            extra={"path": f"/api/weather/{lat}/{lng}", "error": str(exc)},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Weather data unavailable"},
        )
