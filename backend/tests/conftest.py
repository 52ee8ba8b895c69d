"""Pytest configuration and fixtures"""
import os
from typing import Generator

# Every test shares one client address; keep the limiter out of the way
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_estimator
from app.main import app


class FixedEstimator:
    """Deterministic stand-in for the random estimator"""

    def confidence(self) -> int:
        return 85

    def expected_yield(self) -> int:
        return 42

    def estimated_profit(self) -> int:
        return 4200


@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    """Test client; the lifespan builds fresh in-memory state for each test"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def fixed_client() -> Generator[TestClient, None, None]:
    """Test client whose recommendations carry fixed estimates"""
    app.dependency_overrides[get_estimator] = lambda: FixedEstimator()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def spring_clay() -> dict:
    """Sample recommendation factors"""
    return {
        "location": "California",
        "season": "spring",
        "soilType": "clay",
        "landSize": 50
    }
