"""OpenWeather current weather and 5-day/3-hour forecast provider."""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import requests

from forecast_aggregator import check_samples, round_half_up
from weather_data import CurrentConditions, ForecastPayload, RawSample
from weather_provider import ProviderError, RateLimitedError, WeatherProviderBase

SAMPLES_PER_DAY = 8  # one sample every 3 hours


def mask_key(key: str) -> str:
    """Show only the ends of a secret, for logging."""
    if len(key) > 8:
        return f"{key[:4]}...{key[-4:]}"
    return "****"


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider using the free OpenWeather 2.5 APIs.

    Current weather: https://openweathermap.org/current
    5-day / 3-hour forecast: https://openweathermap.org/forecast5

    Temperatures are requested in imperial units because the recommendation
    bands are expressed in Fahrenheit.
    """

    CURRENT_URL = "https://api.openweathermap.org/data/2.5/weather"
    FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"

    def __init__(
        self,
        api_key: Optional[str],
        units: str = "imperial",
        lang: str = "en",
        timeout: int = 10
    ):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key (None makes every call fail)
            units: Temperature units ("metric", "imperial", or "standard")
            lang: Language code for descriptions (e.g., "en", "de")
            timeout: HTTP request timeout in seconds
        """
        self.api_key = api_key.strip() if api_key else None
        self.units = units
        self.lang = lang
        self.timeout = timeout

    def get_current(self, lat: float, lon: float) -> CurrentConditions:
        """
        Fetch current weather from the OpenWeather Current Weather API.

        Raises:
            ProviderError: If the API request fails
            RateLimitedError: On HTTP 429
        """
        data = self._request(self.CURRENT_URL, {"lat": lat, "lon": lon})

        try:
            weather_array = data.get("weather", [])
            if not weather_array:
                logging.error("Response missing 'weather' array")
                raise ProviderError("Response missing 'weather' array")
            weather = weather_array[0]

            main_data = data.get("main", {})
            if not main_data:
                raise ProviderError("Response missing 'main' block")

            wind_data = data.get("wind", {})
            sys_data = data.get("sys", {})

            conditions = CurrentConditions(
                temperature=round_half_up(main_data["temp"]),
                condition=weather.get("main", "Unknown"),
                description=weather.get("description", ""),
                humidity=main_data.get("humidity", 0.0),
                wind_speed=round_half_up(wind_data.get("speed", 0.0) if wind_data else 0.0),
                icon=weather.get("icon", ""),
                city_name=data.get("name", ""),
                country_code=sys_data.get("country", "") if sys_data else "",
                timestamp=datetime.now(timezone.utc),
            )
        except (KeyError, ValueError, TypeError, OverflowError) as e:
            logging.error(f"Failed to parse current weather response: {e}", exc_info=True)
            raise ProviderError(f"Failed to parse response: {str(e)}")

        logging.info(f"Current weather for [{lat}, {lon}]: {conditions.temperature}°, {conditions.condition}")
        return conditions

    def get_forecast(self, lat: float, lon: float, days: int = 7) -> ForecastPayload:
        """
        Fetch the 3-hour interval forecast from the OpenWeather Forecast API.

        Raises:
            ProviderError: If the API request fails
            RateLimitedError: On HTTP 429
        """
        data = self._request(
            self.FORECAST_URL,
            {"lat": lat, "lon": lon, "cnt": days * SAMPLES_PER_DAY},
        )

        try:
            items = data["list"]
            city = data.get("city", {})
            samples = tuple(
                RawSample(
                    timestamp=int(item["dt"]),
                    temperature=float(item["main"]["temp"]),
                    condition=item["weather"][0]["main"],
                    icon=item["weather"][0].get("icon", ""),
                    humidity=float(item["main"].get("humidity", 0.0)),
                    wind_speed=float(item.get("wind", {}).get("speed", 0.0)),
                )
                for item in items
            )
            check_samples(samples)
            payload = ForecastPayload(
                city_name=city.get("name", ""),
                country_code=city.get("country", ""),
                samples=samples,
            )
        except (KeyError, IndexError, ValueError, TypeError, OverflowError) as e:
            logging.error(f"Failed to parse forecast response: {e}", exc_info=True)
            raise ProviderError(f"Failed to parse response: {str(e)}")

        logging.info(f"Forecast for [{lat}, {lon}]: {len(payload.samples)} samples ({payload.city_name})")
        return payload

    def _request(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """Issue a GET against the API and return the decoded JSON body."""
        if not self.api_key:
            logging.error("OpenWeather API key is not configured")
            raise ProviderError("OpenWeather API key is not configured")

        query = dict(params, appid=self.api_key, units=self.units, lang=self.lang)

        try:
            logging.info(f"Making OpenWeather API request: {url}")
            logging.debug(f"Request parameters: {params}, key={mask_key(self.api_key)}")

            response = requests.get(
                url,
                params=query,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )

            logging.info(f"API response status: {response.status_code}")

            if response.status_code == 429:
                logging.warning("OpenWeather API rate limit exceeded")
                raise RateLimitedError("OpenWeather API rate limit exceeded")

            if not response.ok:
                logging.error(f"API request failed with status {response.status_code}")
                self._handle_error_response(response)

            data = response.json()
            logging.debug(f"API response (truncated): {str(data)[:200]}...")
            if not isinstance(data, dict):
                raise ProviderError("Unexpected response body")
            return data

        except ValueError as e:
            logging.error(f"Failed to decode API response: {e}")
            raise ProviderError(f"Failed to parse response: {str(e)}")
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise ProviderError(f"Network error: {str(e)}")

    def _handle_error_response(self, response: requests.Response) -> None:
        """Parse and raise error from OpenWeather error response."""
        try:
            error_data = response.json()
        except ValueError:
            # Not JSON, use HTTP status
            logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {response.text[:500]}")
            raise ProviderError(f"HTTP {response.status_code}: {response.text[:200]}")

        cod = error_data.get("cod", response.status_code)
        message = error_data.get("message", "Unknown error")
        logging.error(f"OpenWeather API error response: {error_data}")
        raise ProviderError(f"OpenWeather API error {cod}: {message}")
