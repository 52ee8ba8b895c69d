"""Market, sensor and weather schemas"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.schemas.base import CamelModel


class MarketQuote(CamelModel):
    name: str
    current_price: int
    change: int
    trend: List[int] = Field(..., description="Daily prices, oldest first")


class SensorReading(CamelModel):
    user_id: int
    timestamp: datetime
    ndvi: int
    soil_moisture: int
    temperature: int
    ph: float = Field(..., alias="pH")
    nitrogen: int
    phosphorus: int
    potassium: int


class Coordinates(CamelModel):
    lat: float
    lng: float


class CurrentWeather(CamelModel):
    temp: Optional[float] = None
    humidity: Optional[float] = None
    wind_speed: Optional[float] = None
    description: str


class ForecastDay(CamelModel):
    date: str
    temp: Optional[float] = None
    humidity: Optional[float] = None
    precipitation: Optional[float] = None
    description: str


class WeatherResponse(CamelModel):
    location: Coordinates
    current: CurrentWeather
    forecast: List[ForecastDay]
