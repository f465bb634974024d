"""Synthetic weather and placeholder images served when upstreams are unavailable."""
import random
from datetime import datetime, timezone
from typing import List, Optional
from urllib.parse import quote

from weather_data import CurrentConditions

UNKNOWN_LOCATION = "Unknown Location"

# (condition, description choices, icon choices)
_CONDITION_STYLES = {
    "Clear": (["clear sky"], ["01d"]),
    "Clouds": (["scattered clouds", "broken clouds"], ["02d", "03d"]),
    "Rain": (["light rain", "moderate rain"], ["10d", "09d"]),
    "Snow": (["light snow", "snow"], ["13d"]),
    "Thunderstorm": (["thunderstorm"], ["11d"]),
}

_DEFAULT_WEIGHTS = {"Clear": 0.4, "Clouds": 0.3, "Rain": 0.15, "Snow": 0.1, "Thunderstorm": 0.05}
_COLD_WEIGHTS = {"Clear": 0.3, "Clouds": 0.2, "Rain": 0.1, "Snow": 0.4, "Thunderstorm": 0.0}
_HOT_WEIGHTS = {"Clear": 0.5, "Clouds": 0.2, "Rain": 0.1, "Snow": 0.0, "Thunderstorm": 0.2}


def is_summer(lat: float, month: int) -> bool:
    """Jun-Aug in the northern hemisphere, Dec-Feb in the southern one (month is 1-12)."""
    if lat > 0:
        return 6 <= month <= 8
    return month == 12 or month <= 2


def base_temperature(lat: float, month: int) -> int:
    """Rough seasonal temperature in °F for a latitude band."""
    summer = is_summer(lat, month)
    if abs(lat) < 23.5:
        return 85
    if abs(lat) < 45:
        return 75 if summer else 45
    return 50 if summer else 20


def condition_weights(temperature: float) -> dict:
    if temperature < 32:
        return _COLD_WEIGHTS
    if temperature > 90:
        return _HOT_WEIGHTS
    return _DEFAULT_WEIGHTS


def generate_mock_conditions(
    lat: float,
    lon: float,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None
) -> CurrentConditions:
    """
    Build plausible current conditions for a coordinate pair.

    The temperature follows latitude and season with +/-10° of noise; the
    condition is drawn with weights that shift toward snow when cold and
    toward clear skies or storms when hot. Always flagged is_mock_data.
    """
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)

    temperature = base_temperature(lat, now.month) + rng.randrange(-10, 10)

    weights = condition_weights(temperature)
    roll = rng.random()
    condition = "Clear"
    cumulative = 0.0
    for name, weight in weights.items():
        cumulative += weight
        if roll <= cumulative:
            condition = name
            break

    descriptions, icons = _CONDITION_STYLES[condition]

    return CurrentConditions(
        temperature=temperature,
        condition=condition,
        description=rng.choice(descriptions),
        humidity=float(rng.randrange(40, 80)),
        wind_speed=rng.randrange(5, 20),
        icon=rng.choice(icons),
        city_name=UNKNOWN_LOCATION,
        country_code="US",
        timestamp=now,
        is_mock_data=True,
    )


def placeholder_image(name: str) -> str:
    query = quote(f"{name} National Park scenic landscape")
    return f"/placeholder.svg?height=800&width=1200&query={query}"


def placeholder_images(name: str) -> List[str]:
    return [placeholder_image(name)]
