"""Pydantic schemas for request/response validation"""
from app.schemas.dashboard import MarketQuote, SensorReading, WeatherResponse
from app.schemas.ledger import ChainVerifyResponse, LedgerEntryResponse
from app.schemas.recommendation import RecommendationRequest, RecommendationResponse
from app.schemas.user import AuthResponse, LoginRequest, SignupRequest, UserResponse

__all__ = [
    "RecommendationRequest",
    "RecommendationResponse",
    "LedgerEntryResponse",
    "ChainVerifyResponse",
    "LoginRequest",
    "SignupRequest",
    "UserResponse",
    "AuthResponse",
    "MarketQuote",
    "SensorReading",
    "WeatherResponse",
]
