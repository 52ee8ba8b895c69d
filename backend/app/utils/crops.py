"""Static crop table used by the recommendation endpoint"""
from typing import Any, Dict, List, Optional, Tuple

CROP_DATABASE: Dict[str, Dict[str, List[str]]] = {
    "spring": {
        "clay": ["Wheat", "Barley", "Oats"],
        "sandy": ["Corn", "Soybeans", "Sunflower"],
        "loamy": ["Tomatoes", "Peppers", "Lettuce"],
    },
    "summer": {
        "clay": ["Rice", "Cotton", "Sugarcane"],
        "sandy": ["Peanuts", "Sweet Potato", "Watermelon"],
        "loamy": ["Corn", "Beans", "Squash"],
    },
    "fall": {
        "clay": ["Winter Wheat", "Rye", "Rapeseed"],
        "sandy": ["Carrots", "Radishes", "Turnips"],
        "loamy": ["Cabbage", "Broccoli", "Cauliflower"],
    },
    "winter": {
        "clay": ["Cover Crops", "Alfalfa", "Clover"],
        "sandy": ["Winter Rye", "Crimson Clover", "Winter Peas"],
        "loamy": ["Spinach", "Kale", "Winter Lettuce"],
    },
}

SEASONS = tuple(CROP_DATABASE)
SOIL_TYPES = ("clay", "sandy", "loamy")

DEFAULT_CROPS: List[str] = ["Corn", "Wheat", "Soybeans"]

MAX_RECOMMENDATIONS = 3


def lookup_key(value: Any) -> Optional[str]:
    """Table key for a factor. Keys match exactly; anything that is not a string is absent."""
    if not isinstance(value, str):
        return None
    return value


def resolve_crops(season: Any, soil_type: Any) -> Tuple[List[str], bool]:
    """
    Look up crops for a season/soil pair.

    Returns the first ``MAX_RECOMMENDATIONS`` crops and whether the default
    list was used. Shorter lists are returned as they are.
    """
    crops = CROP_DATABASE.get(lookup_key(season), {}).get(lookup_key(soil_type))
    fallback = crops is None
    if fallback:
        crops = DEFAULT_CROPS
    return list(crops[:MAX_RECOMMENDATIONS]), fallback
