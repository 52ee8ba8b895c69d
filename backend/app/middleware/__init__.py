"""Middleware modules for metrics and rate limiting"""
from app.middleware.monitoring import (
    MonitoringMiddleware,
    record_ledger_size,
    record_login_failure,
    record_recommendation,
    record_weather_failure
)
from app.middleware.rate_limit import get_identifier, get_rate_limit, limiter, rate_limit

__all__ = [
    "MonitoringMiddleware",
    "record_ledger_size",
    "record_login_failure",
    "record_recommendation",
    "record_weather_failure",
    "limiter",
    "get_identifier",
    "get_rate_limit",
    "rate_limit"
]
