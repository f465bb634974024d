"""Integration tests - can optionally hit real APIs (disabled by default)."""
import os
import pytest
from nps_image_provider import NPSImageProvider
from openweather_provider import OpenWeatherProvider
from park_weather_service import ParkWeatherService


@pytest.mark.skipif(
    not os.environ.get("OPENWEATHER_API_KEY"),
    reason="OPENWEATHER_API_KEY not set - skipping integration test"
)
def test_openweather_forecast_integration():
    """
    Integration test that hits the real OpenWeather API.

    Set OPENWEATHER_API_KEY environment variable to run this test.
    """
    provider = OpenWeatherProvider(api_key=os.environ.get("OPENWEATHER_API_KEY"))

    payload = provider.get_forecast(44.428, -110.5885, days=2)

    assert len(payload.samples) > 0
    assert payload.samples[0].timestamp > 0


@pytest.mark.skipif(
    not os.environ.get("OPENWEATHER_API_KEY"),
    reason="OPENWEATHER_API_KEY not set - skipping integration test"
)
def test_service_integration():
    """Integration test for ParkWeatherService with the real API."""
    service = ParkWeatherService(
        OpenWeatherProvider(api_key=os.environ.get("OPENWEATHER_API_KEY")),
        NPSImageProvider(api_key=os.environ.get("NPS_API_KEY")),
    )

    first = service.get_current(44.428, -110.5885)
    assert first.ok is True

    # Second call should use cache
    second = service.get_current(44.428, -110.5885)
    assert second.value is first.value

    summaries, degraded = service.get_daily_forecast(44.428, -110.5885, days=3)
    assert degraded is False
    for day in summaries:
        assert day.low_temp <= day.avg_temp <= day.high_temp
