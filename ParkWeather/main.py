"""Command-line front end: park weather, forecasts, images and trip recommendations."""
import argparse
import logging
import sys
from typing import List, Optional

from config import Settings, load_config
from nps_image_provider import NPSImageProvider
from openweather_provider import OpenWeatherProvider
from park_weather_service import ParkWeatherService
from parks import DEFAULT_PARKS, load_parks
from weather_data import Park


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("park-weather", description="Weather-based national park recommendations")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--verbose", action="store_true")

    commands = parser.add_subparsers(dest="command", required=True)

    current = commands.add_parser("current", help="Current conditions at a location")
    current.add_argument("--lat", type=float, required=True)
    current.add_argument("--lon", type=float, required=True)

    forecast = commands.add_parser("forecast", help="Daily forecast summaries at a location")
    forecast.add_argument("--lat", type=float, required=True)
    forecast.add_argument("--lon", type=float, required=True)
    forecast.add_argument("--days", type=int, default=7)

    recommend = commands.add_parser("recommend", help="Rank parks by upcoming weather")
    recommend.add_argument("--parks-file", default=None, help="JSON array of parks (default: built-in list)")
    recommend.add_argument("--days", type=int, default=7)
    recommend.add_argument("--lat", type=float, default=None, help="Use one forecast from this location")
    recommend.add_argument("--lon", type=float, default=None)

    images = commands.add_parser("images", help="Look up park photos")
    images.add_argument("--parks-file", default=None)
    images.add_argument("--batch-size", type=int, default=2)
    images.add_argument("--batch-delay", type=float, default=5.0, help="Seconds between batches")

    args = parser.parse_args(argv)
    if args.command == "recommend" and (args.lat is None) != (args.lon is None):
        parser.error("--lat and --lon must be given together")
    return args


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )
    for noisy in ("urllib3", "requests"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def build_service(settings: Settings) -> ParkWeatherService:
    service = ParkWeatherService(
        weather_provider=OpenWeatherProvider(settings.openweather_api_key, timeout=settings.timeout),
        image_provider=NPSImageProvider(settings.nps_api_key, timeout=settings.timeout),
        current_ttl_seconds=settings.current_ttl,
        forecast_ttl_seconds=settings.forecast_ttl,
        image_ttl_seconds=settings.image_ttl,
        rate_limit_cooldown_seconds=settings.rate_limit_cooldown,
        max_failures=settings.max_failures,
        failure_reset_seconds=settings.failure_reset,
    )
    logging.info("Park weather service ready")
    return service


def select_parks(parks_file: Optional[str]) -> List[Park]:
    if not parks_file:
        return list(DEFAULT_PARKS)
    try:
        return load_parks(parks_file)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Could not load parks: {exc}") from exc


def show_current(service: ParkWeatherService, args: argparse.Namespace) -> None:
    result = service.get_current(args.lat, args.lon)
    weather = result.value
    marker = " (simulated)" if weather.is_mock_data else ""
    print(f"{weather.city_name}, {weather.country_code}{marker}")
    print(f"{weather.temperature:+d}°F  {weather.description or weather.condition}")
    print(f"Hum {int(weather.humidity)}%  Wind {weather.wind_speed} mph")
    if result.is_fallback:
        print(f"Note: {result.reason}")


def show_forecast(service: ParkWeatherService, args: argparse.Namespace) -> None:
    summaries, degraded = service.get_daily_forecast(args.lat, args.lon, args.days)
    if degraded:
        print("Forecast unavailable (fallback): no daily data")
        return
    for day in summaries:
        print(
            f"{day.date.isoformat()}  {day.high_temp:>4}/{day.low_temp:<4} avg {day.avg_temp:>4}  "
            f"{day.dominant_condition:<12} hum {day.avg_humidity}%  wind {day.avg_wind_speed}"
        )


def show_recommendations(service: ParkWeatherService, args: argparse.Namespace) -> None:
    parks = select_parks(args.parks_file)
    ranking, degraded = service.recommend(parks, days=args.days, lat=args.lat, lon=args.lon)
    if degraded:
        print("Warning: some forecasts were unavailable (fallback); those parks are not ranked")
    if not ranking:
        print("No recommendations available")
        return
    for position, entry in enumerate(ranking, start=1):
        ratings = " ".join(rating.category.value[0].upper() for rating in entry.day_ratings)
        print(
            f"{position:>2}. {entry.location.name:<28} {entry.recommendation_level.value:<20} "
            f"{entry.average_score:.2f}  [{ratings}]"
        )


def show_images(service: ParkWeatherService, args: argparse.Namespace) -> None:
    parks = select_parks(args.parks_file)
    for park in service.load_park_images(parks, batch_size=args.batch_size, batch_delay_seconds=args.batch_delay):
        print(f"{park.name}: {len(park.images)} image(s)")
        for url in park.images:
            print(f"  {url}")


COMMANDS = {
    "current": show_current,
    "forecast": show_forecast,
    "recommend": show_recommendations,
    "images": show_images,
}


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    settings = load_config()
    service = build_service(settings)
    COMMANDS[args.command](service, args)


if __name__ == "__main__":
    main()
