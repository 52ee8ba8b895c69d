"""Crop recommendation schemas"""
from typing import Any, List, Optional

from pydantic import Field

from app.schemas.base import CamelModel


class RecommendationRequest(CamelModel):
    """Recommendation factors. Every field is optional and echoed back as received."""

    location: Optional[Any] = Field(None, description="Free-form farm location")
    season: Optional[Any] = Field(None, description="spring, summer, fall or winter")
    soil_type: Optional[Any] = Field(None, description="clay, sandy or loamy")
    land_size: Optional[Any] = Field(None, description="Land size in acres")


class CropRecommendation(CamelModel):
    """One recommended crop with its mock estimates"""

    name: str
    confidence: int = Field(..., ge=70, le=100, description="Confidence percentage")
    expected_yield: int = Field(..., ge=20, le=70)
    estimated_profit: int = Field(..., ge=2000, le=7000)


class RecommendationFactors(CamelModel):
    location: Optional[Any] = None
    season: Optional[Any] = None
    soil_type: Optional[Any] = None
    land_size: Optional[Any] = None


class RecommendationResponse(CamelModel):
    recommendations: List[CropRecommendation]
    factors: RecommendationFactors
