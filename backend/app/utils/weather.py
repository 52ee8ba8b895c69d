"""Open-Meteo forecast proxy"""
from typing import Any, Dict, List

import requests

from app.config import settings

# WMO weather interpretation codes
WEATHER_CODES: Dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Drizzle",
    55: "Dense drizzle",
    56: "Freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Rain",
    65: "Heavy rain",
    66: "Freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow fall",
    73: "Snow fall",
    75: "Heavy snow fall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with hail",
    99: "Thunderstorm with heavy hail",
}


class WeatherUnavailable(Exception):
    """Raised when the upstream forecast cannot be fetched or parsed"""


def describe(code: Any) -> str:
    return WEATHER_CODES.get(code, "N/A")


def fetch_forecast(lat: float, lng: float) -> Dict[str, Any]:
    """
    Fetch current weather and a daily forecast for a coordinate.

    Humidity is not part of the free Open-Meteo current/daily payload and is
    always returned as None.

    Raises:
        WeatherUnavailable: on network errors, non-2xx responses or an
            unexpected payload.
    """
    params = {
        "latitude": lat,
        "longitude": lng,
        "current_weather": "true",
        "daily": "temperature_2m_max,temperature_2m_min,precipitation_sum,weathercode",
        "forecast_days": settings.WEATHER_FORECAST_DAYS,
        "timezone": "auto",
    }
    try:
        resp = requests.get(settings.WEATHER_API_URL, params=params, timeout=settings.WEATHER_TIMEOUT)
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as exc:
        raise WeatherUnavailable(str(exc)) from exc

    try:
        current_weather = data.get("current_weather") or {}
        current = {
            "temp": current_weather.get("temperature"),
            "humidity": None,
            "wind_speed": current_weather.get("windspeed"),
            "description": describe(current_weather.get("weathercode")),
        }

        daily = data.get("daily") or {}
        forecast: List[Dict[str, Any]] = [
            {
                "date": day,
                "temp": daily["temperature_2m_max"][i],
                "humidity": None,
                "precipitation": daily["precipitation_sum"][i],
                "description": describe(daily["weathercode"][i]),
            }
            for i, day in enumerate(daily.get("time") or [])
        ]
    except (AttributeError, KeyError, IndexError, TypeError) as exc:
        raise WeatherUnavailable(f"Unexpected forecast payload: {exc}") from exc

    return {
        "location": {"lat": lat, "lng": lng},
        "current": current,
        "forecast": forecast,
    }
