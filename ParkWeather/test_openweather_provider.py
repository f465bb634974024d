"""Tests for OpenWeather provider."""
import pytest
import requests
from unittest.mock import Mock, patch
from openweather_provider import OpenWeatherProvider, mask_key
from weather_data import CurrentConditions, ForecastPayload
from weather_provider import ProviderError, RateLimitedError


@pytest.fixture
def sample_current_response():
    """Sample OpenWeather current weather response."""
    return {
        "coord": {"lon": -110.59, "lat": 44.43},
        "weather": [
            {
                "id": 803,
                "main": "Clouds",
                "description": "broken clouds",
                "icon": "04d"
            }
        ],
        "main": {
            "temp": 61.5,
            "feels_like": 60.1,
            "pressure": 1014,
            "humidity": 48
        },
        "wind": {"speed": 7.49, "deg": 93},
        "dt": 1718020800,
        "sys": {"country": "US"},
        "name": "Mammoth",
    }


@pytest.fixture
def sample_forecast_response():
    """Sample OpenWeather 5-day/3-hour forecast response (trimmed)."""
    return {
        "cod": "200",
        "cnt": 2,
        "list": [
            {
                "dt": 1718020800,
                "main": {"temp": 58.3, "humidity": 55},
                "weather": [{"main": "Clear", "description": "clear sky", "icon": "01d"}],
                "wind": {"speed": 4.1},
            },
            {
                "dt": 1718031600,
                "main": {"temp": 64.0, "humidity": 41},
                "weather": [{"main": "Clouds", "description": "few clouds", "icon": "02d"}],
                "wind": {"speed": 6.3},
            },
        ],
        "city": {"name": "Mammoth", "country": "US"},
    }


@pytest.fixture
def provider():
    """Create OpenWeather provider instance."""
    return OpenWeatherProvider(api_key=" test_key_123456 ", timeout=5)


def mock_response(status_code=200, json_data=None):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = json_data
    response.text = str(json_data)
    return response


def test_get_current_success(provider, sample_current_response):
    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.return_value = mock_response(json_data=sample_current_response)

        weather = provider.get_current(44.43, -110.59)

        assert isinstance(weather, CurrentConditions)
        assert weather.temperature == 62
        assert weather.condition == "Clouds"
        assert weather.description == "broken clouds"
        assert weather.humidity == 48
        assert weather.wind_speed == 7
        assert weather.icon == "04d"
        assert weather.city_name == "Mammoth"
        assert weather.country_code == "US"
        assert weather.is_mock_data is False

        params = mock_get.call_args.kwargs["params"]
        assert params["appid"] == "test_key_123456"
        assert params["units"] == "imperial"
        assert params["lat"] == 44.43
        assert mock_get.call_args.kwargs["timeout"] == 5


def test_get_forecast_success(provider, sample_forecast_response):
    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.return_value = mock_response(json_data=sample_forecast_response)

        payload = provider.get_forecast(44.43, -110.59, days=5)

        assert isinstance(payload, ForecastPayload)
        assert payload.city_name == "Mammoth"
        assert payload.country_code == "US"
        assert payload.is_fallback is False
        assert len(payload.samples) == 2
        first = payload.samples[0]
        assert first.timestamp == 1718020800
        assert first.temperature == 58.3
        assert first.condition == "Clear"
        assert first.icon == "01d"
        assert first.humidity == 55.0
        assert first.wind_speed == 4.1
        assert mock_get.call_args.kwargs["params"]["cnt"] == 40
        assert mock_get.call_args.args[0] == OpenWeatherProvider.FORECAST_URL


def test_rate_limit_response(provider):
    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.return_value = mock_response(429, {"cod": 429, "message": "too many"})

        with pytest.raises(RateLimitedError):
            provider.get_current(44.43, -110.59)


def test_http_error(provider):
    """Test handling of HTTP errors."""
    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.return_value = mock_response(401, {"cod": 401, "message": "Invalid API key"})

        with pytest.raises(ProviderError) as exc_info:
            provider.get_current(44.43, -110.59)

        assert not isinstance(exc_info.value, RateLimitedError)
        assert "401" in str(exc_info.value)
        assert "Invalid API key" in str(exc_info.value)


def test_non_json_error(provider):
    with patch('openweather_provider.requests.get') as mock_get:
        response = mock_response(502)
        response.json.side_effect = ValueError("No JSON")
        response.text = "Bad Gateway"
        mock_get.return_value = response

        with pytest.raises(ProviderError) as exc_info:
            provider.get_forecast(44.43, -110.59)

        assert "HTTP 502" in str(exc_info.value)


def test_network_error(provider):
    """Test handling of network errors."""
    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.side_effect = requests.exceptions.ConnectionError("Connection timeout")

        with pytest.raises(ProviderError) as exc_info:
            provider.get_current(44.43, -110.59)

        assert "Network error" in str(exc_info.value)


def test_missing_api_key_fails_without_request():
    provider = OpenWeatherProvider(api_key="   ")
    with patch('openweather_provider.requests.get') as mock_get:
        with pytest.raises(ProviderError) as exc_info:
            provider.get_current(1.0, 2.0)

        assert "not configured" in str(exc_info.value)
        mock_get.assert_not_called()


def test_missing_main(provider):
    """Test handling of missing main block."""
    response = {"weather": [{"main": "Clear", "description": "clear sky"}]}

    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.return_value = mock_response(json_data=response)

        with pytest.raises(ProviderError) as exc_info:
            provider.get_current(44.43, -110.59)

        assert "missing 'main' block" in str(exc_info.value)


def test_missing_weather(provider):
    """Test handling of missing 'weather' array."""
    response = {"main": {"temp": 20.0}, "weather": []}

    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.return_value = mock_response(json_data=response)

        with pytest.raises(ProviderError) as exc_info:
            provider.get_current(44.43, -110.59)

        assert "missing 'weather' array" in str(exc_info.value)


def test_malformed_forecast(provider):
    response = {"list": [{"dt": 1718020800, "main": {"temp": 50}, "weather": []}], "city": {}}

    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.return_value = mock_response(json_data=response)

        with pytest.raises(ProviderError) as exc_info:
            provider.get_forecast(44.43, -110.59)

        assert "Failed to parse response" in str(exc_info.value)


def test_mask_key():
    assert mask_key("abcd1234efgh") == "abcd...efgh"
    assert mask_key("short") == "****"


@pytest.mark.parametrize("item", [
    {"dt": 1718020800, "main": {"temp": 50}, "weather": [{"main": None}]},
    {"dt": 1718020800, "main": {"temp": float("nan")}, "weather": [{"main": "Clear"}]},
    {"dt": 10 ** 15, "main": {"temp": 50}, "weather": [{"main": "Clear"}]},
    {"dt": float("inf"), "main": {"temp": 50}, "weather": [{"main": "Clear"}]},
])
def test_forecast_with_bad_sample_is_rejected(provider, item):
    with patch('openweather_provider.requests.get') as mock_get:
        mock_get.return_value = mock_response(json_data={"list": [item], "city": {}})

        with pytest.raises(ProviderError) as exc_info:
            provider.get_forecast(44.43, -110.59)

        assert "Failed to parse response" in str(exc_info.value)
