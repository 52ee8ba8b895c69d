"""Tests for market, sensor and weather feeds"""
import pytest
import requests
from fastapi.testclient import TestClient


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


@pytest.fixture
def open_meteo_payload() -> dict:
    return {
        "current_weather": {"temperature": 21.4, "windspeed": 9.7, "weathercode": 2},
        "daily": {
            "time": ["2024-05-01", "2024-05-02"],
            "temperature_2m_max": [24.1, 19.8],
            "temperature_2m_min": [11.0, 9.2],
            "precipitation_sum": [0.0, 4.3],
            "weathercode": [1, 42],
        },
    }


def test_market_data(client: TestClient):
    """Test the five tracked crops and their price ranges"""
    response = client.get("/api/market-data")
    assert response.status_code == 200

    quotes = response.json()
    assert [q["name"] for q in quotes] == ["Wheat", "Corn", "Soybeans", "Rice", "Cotton"]
    for quote in quotes:
        assert 100 <= quote["currentPrice"] <= 600
        assert -25 <= quote["change"] <= 25
        assert len(quote["trend"]) == 30
        assert all(100 <= price <= 600 for price in quote["trend"])


def test_sensor_data(client: TestClient):
    """Test sensor snapshot keys and ranges"""
    response = client.get("/api/sensors/7")
    assert response.status_code == 200

    data = response.json()
    assert data["userId"] == 7
    assert 60 <= data["ndvi"] <= 100
    assert 20 <= data["soilMoisture"] <= 50
    assert 10 <= data["temperature"] <= 40
    assert 6.0 <= data["pH"] <= 9.0
    assert 50 <= data["nitrogen"] <= 150
    assert 20 <= data["phosphorus"] <= 70
    assert 40 <= data["potassium"] <= 120
    assert data["timestamp"].endswith(("Z", "+00:00"))


def test_sensor_data_rejects_non_numeric_user(client: TestClient):
    response = client.get("/api/sensors/abc")
    assert response.status_code == 422


def test_weather_forecast(client: TestClient, monkeypatch, open_meteo_payload: dict):
    """Test mapping of the Open-Meteo payload"""
    calls = []

    def fake_get(url, params=None, timeout=None):
        calls.append((url, params, timeout))
        return FakeResponse(open_meteo_payload)

    monkeypatch.setattr("app.utils.weather.requests.get", fake_get)

    response = client.get("/api/weather/36.75/-119.77")
    assert response.status_code == 200

    data = response.json()
    assert data["location"] == {"lat": 36.75, "lng": -119.77}
    assert data["current"] == {
        "temp": 21.4,
        "humidity": None,
        "windSpeed": 9.7,
        "description": "Partly cloudy",
    }
    assert data["forecast"][0] == {
        "date": "2024-05-01",
        "temp": 24.1,
        "humidity": None,
        "precipitation": 0.0,
        "description": "Mainly clear",
    }
    assert data["forecast"][1]["description"] == "N/A"

    url, params, timeout = calls[0]
    assert params["latitude"] == 36.75
    assert params["forecast_days"] == 10
    assert params["timezone"] == "auto"
    assert timeout is not None


def test_weather_upstream_failure(client: TestClient, monkeypatch):
    """Test that network errors map to the weather error body"""
    def fake_get(url, params=None, timeout=None):
        raise requests.ConnectionError("no route to host")

    monkeypatch.setattr("app.utils.weather.requests.get", fake_get)

    response = client.get("/api/weather/1/2")
    assert response.status_code == 500
    assert response.json() == {"error": "Weather data unavailable"}


def test_weather_upstream_http_error(client: TestClient, monkeypatch):
    monkeypatch.setattr(
        "app.utils.weather.requests.get",
        lambda url, params=None, timeout=None: FakeResponse({}, status_code=502),
    )

    response = client.get("/api/weather/1/2")
    assert response.status_code == 500


def test_weather_malformed_payload(client: TestClient, monkeypatch):
    payload = {"current_weather": {}, "daily": {"time": ["2024-05-01"]}}
    monkeypatch.setattr(
        "app.utils.weather.requests.get",
        lambda url, params=None, timeout=None: FakeResponse(payload),
    )

    response = client.get("/api/weather/1/2")
    assert response.status_code == 500
    assert response.json() == {"error": "Weather data unavailable"}
