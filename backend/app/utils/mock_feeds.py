"""Randomized market and sensor feeds for the dashboard"""
import random
from datetime import datetime, timezone
from typing import Any, Dict, List

MARKET_CROPS = ["Wheat", "Corn", "Soybeans", "Rice", "Cotton"]
TREND_DAYS = 30


def _price(rng: random.Random) -> int:
    return round(rng.random() * 500 + 100)


def generate_market_data(rng: random.Random) -> List[Dict[str, Any]]:
    """Current price, daily change and a 30-day price trend per crop"""
    return [
        {
            "name": crop,
            "current_price": _price(rng),
            "change": round((rng.random() - 0.5) * 50),
            "trend": [_price(rng) for _ in range(TREND_DAYS)],
        }
        for crop in MARKET_CROPS
    ]


def generate_sensor_reading(user_id: int, rng: random.Random) -> Dict[str, Any]:
    """One field sensor snapshot for a user"""
    return {
        "user_id": user_id,
        "timestamp": datetime.now(timezone.utc),
        "ndvi": round(rng.random() * 40 + 60),  # 60-100
        "soil_moisture": round(rng.random() * 30 + 20),  # 20-50
        "temperature": round(rng.random() * 30 + 10),
        "ph": round((rng.random() * 3 + 6) * 10) / 10,  # 6.0-9.0
        "nitrogen": round(rng.random() * 100 + 50),
        "phosphorus": round(rng.random() * 50 + 20),
        "potassium": round(rng.random() * 80 + 40),
    }
