"""Park weather service: every upstream lookup goes through a ResilientFetcher."""
import dataclasses
import logging
import random
import time
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from backoff import BackoffTracker, RateLimitState
from forecast_aggregator import aggregate, check_samples
from mock_weather import generate_mock_conditions, placeholder_images
from nps_image_provider import NPSImageProvider
from park_codes import get_park_code
from recommendations import rank
from resilient_fetcher import FetchResult, ResilientFetcher
from ttl_cache import TTLCache
from weather_data import CurrentConditions, DailySummary, ForecastPayload, Park, RecommendationEntry
from weather_provider import WeatherProviderBase


def coordinate_key(lat: float, lon: float) -> str:
    return f"{lat},{lon}"


class ParkWeatherService:
    """
    Serves current weather, daily forecasts, park images and recommendations.

    Built once at start-up and shared for the life of the process. Each kind
    of lookup has its own cache and backoff tracker; all of them share a
    single rate-limit state. Nothing here raises on upstream trouble: callers
    get fallback data flagged as such.
    """

    def __init__(
        self,
        weather_provider: WeatherProviderBase,
        image_provider: NPSImageProvider,
        current_ttl_seconds: float = 600,  # 10 minutes
        forecast_ttl_seconds: float = 3600,  # 1 hour
        image_ttl_seconds: float = 86400,  # 24 hours
        rate_limit_cooldown_seconds: float = 60.0,
        max_failures: int = 3,
        failure_reset_seconds: Optional[float] = 300.0,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize park weather service.

        Args:
            weather_provider: Source of current weather and forecasts
            image_provider: Source of park photos
            current_ttl_seconds: Cache lifetime for current conditions
            forecast_ttl_seconds: Cache lifetime for raw forecasts
            image_ttl_seconds: Cache lifetime for image lists
            rate_limit_cooldown_seconds: How long to serve fallbacks after a 429
            max_failures: Consecutive failures before a key is served fallbacks
            failure_reset_seconds: Idle time after which a key's failures are forgotten
            clock: Epoch-seconds clock shared by caches and trackers
            rng: Random source for simulated weather
        """
        self.weather_provider = weather_provider
        self.image_provider = image_provider
        self.rng = rng or random.Random()
        self.rate_limit = RateLimitState(cooldown_seconds=rate_limit_cooldown_seconds, clock=clock)

        def build(name: str, ttl: float) -> ResilientFetcher:
            return ResilientFetcher(
                cache=TTLCache(ttl, name=f"{name} cache", clock=clock),
                tracker=BackoffTracker(max_failures, failure_reset_seconds, clock=clock),
                rate_limit=self.rate_limit,
                name=name,
            )

        self.current_fetcher = build("current weather", current_ttl_seconds)
        self.forecast_fetcher = build("forecast", forecast_ttl_seconds)
        self.image_fetcher = build("park images", image_ttl_seconds)

    def get_current(self, lat: float, lon: float) -> FetchResult[CurrentConditions]:
        """Current conditions at a coordinate pair; simulated data when unavailable."""
        return self.current_fetcher.fetch_lazy(
            coordinate_key(lat, lon),
            lambda: generate_mock_conditions(lat, lon, rng=self.rng),
            lambda: self.weather_provider.get_current(lat, lon),
        )

    def get_forecast(self, lat: float, lon: float, days: int = 7) -> FetchResult[ForecastPayload]:
        """
        Raw interval forecast; an empty payload flagged is_fallback when unavailable.

        Samples are checked before the payload is cached, so a payload the
        aggregator would reject counts as a failed fetch.
        """

        def perform_call() -> ForecastPayload:
            payload = self.weather_provider.get_forecast(lat, lon, days)
            check_samples(payload.samples)
            return payload

        fallback = ForecastPayload(city_name="", country_code="", samples=(), is_fallback=True)
        return self.forecast_fetcher.fetch(f"{coordinate_key(lat, lon)},{days}", fallback, perform_call)

    def get_daily_forecast(self, lat: float, lon: float, days: int = 7) -> Tuple[List[DailySummary], bool]:
        """
        Daily summaries for a coordinate pair.

        Returns:
            (summaries, degraded) where degraded is True when the forecast
            could not be fetched and summaries is therefore empty
        """
        result = self.get_forecast(lat, lon, days)
        payload = result.value
        summaries = aggregate(payload.samples, payload.city_name, payload.country_code)
        return summaries, result.is_fallback

    def get_park_images(self, park_name: str) -> FetchResult[List[str]]:
        """Image URLs for a park, or a single placeholder URL."""

        def perform_call() -> List[str]:
            park_code = get_park_code(park_name)
            logging.info(f"Fetching images for {park_name} (code: {park_code})")
            urls = self.image_provider.get_images(park_code)
            if not urls:
                logging.info(f"No images found for {park_name}, using placeholder")
                return placeholder_images(park_name)
            return urls

        return self.image_fetcher.fetch(park_name, placeholder_images(park_name), perform_call)

    def load_park_images(
        self,
        parks: Sequence[Park],
        batch_size: int = 2,
        batch_delay_seconds: float = 5.0,
        sleep: Callable[[float], None] = time.sleep
    ) -> List[Park]:
        """
        Decorate parks with their images, a few at a time.

        Parks are handled in order, batch_size at a time, pausing between
        batches to stay under upstream rate limits. Returns updated copies.
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")

        updated: List[Park] = []
        for start in range(0, len(parks), batch_size):
            if start > 0:
                logging.debug(f"Waiting {batch_delay_seconds}s before next image batch")
                sleep(batch_delay_seconds)
            for park in parks[start:start + batch_size]:
                urls = list(self.get_park_images(park.name).value)
                updated.append(dataclasses.replace(park, image=urls[0] if urls else park.image, images=urls))
            logging.info(f"Loaded images for {len(updated)}/{len(parks)} parks")
        return updated

    def recommend(
        self,
        parks: Sequence[Park],
        days: int = 7,
        lat: Optional[float] = None,
        lon: Optional[float] = None
    ) -> Tuple[List[RecommendationEntry], bool]:
        """
        Rank parks by their upcoming weather.

        With lat/lon, a single forecast for that location is used for every
        park; otherwise each park is rated on the forecast at its own
        coordinates.

        Returns:
            (ranking, degraded) where degraded is True if any forecast fell back
        """
        forecasts: Dict[str, List[DailySummary]] = {}
        degraded = False

        if lat is not None and lon is not None:
            shared, degraded = self.get_daily_forecast(lat, lon, days)
            for park in parks:
                forecasts[park.name] = shared
        else:
            for park in parks:
                summaries, fell_back = self.get_daily_forecast(park.latitude, park.longitude, days)
                forecasts[park.name] = summaries
                degraded = degraded or fell_back

        if degraded:
            logging.warning("Some forecasts were unavailable; ranking is partial")
        return rank(parks, forecasts), degraded
