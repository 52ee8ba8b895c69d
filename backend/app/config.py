"""Application configuration"""
from typing import List, Literal, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"

    # CORS
    CORS_ORIGINS: str = "http://localhost:5173"

    # Ledger
    LEDGER_BACKEND: Literal["memory", "database"] = "memory"
    LEDGER_HASH_MODE: Literal["pseudo", "sha256"] = "pseudo"
    LEDGER_READ_WINDOW: int = 10
    DATABASE_URL: str = "sqlite:///./agriadvisor.db"

    # Mock data
    RANDOM_SEED: Optional[int] = None  # Fix for reproducible demo numbers

    # Weather (Open-Meteo)
    WEATHER_API_URL: str = "https://api.open-meteo.com/v1/forecast"
    WEATHER_FORECAST_DAYS: int = 10
    WEATHER_TIMEOUT: int = 10  # seconds

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: List[str] = ["100/minute", "1000/hour"]
    RATE_LIMIT_STORAGE_URI: str = "memory://"  # Use redis:// for production
    TRUST_PROXY_HEADERS: bool = False  # Set True if behind reverse proxy

    # Monitoring
    METRICS_ENABLED: bool = True
    METRICS_PATH: str = "/metrics"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins string into list"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def uses_database(self) -> bool:
        return self.LEDGER_BACKEND == "database"


settings = Settings()
