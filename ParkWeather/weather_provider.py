"""Provider abstraction - allows swapping different weather APIs."""
from abc import ABC, abstractmethod
from weather_data import CurrentConditions, ForecastPayload


class ProviderError(Exception):
    """Exception raised when an upstream provider fails."""
    pass


class RateLimitedError(ProviderError):
    """The upstream answered with a rate-limit signal (HTTP 429)."""
    pass


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_current(self, lat: float, lon: float) -> CurrentConditions:
        """
        Fetch current weather at a coordinate pair.

        Raises:
            ProviderError: If the provider fails to fetch data
            RateLimitedError: If the provider reports rate limiting
        """
        pass

    @abstractmethod
    def get_forecast(self, lat: float, lon: float, days: int = 7) -> ForecastPayload:
        """
        Fetch the interval forecast covering the next `days` days.

        Raises:
            ProviderError: If the provider fails to fetch data
            RateLimitedError: If the provider reports rate limiting
        """
        pass
