"""Weather and park domain models - pure data structures independent of any API."""
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional, Tuple


class MalformedInputError(ValueError):
    """Raised when aggregation or scoring is handed input of the wrong shape."""
    pass


class ClimateArchetype(str, Enum):
    """Broad climate a park belongs to; drives its temperature comfort band."""
    DESERT = "desert"
    MOUNTAIN = "mountain"
    COASTAL = "coastal"
    FOREST = "forest"
    TROPICAL = "tropical"
    ARCTIC = "arctic"


class WeatherCategory(str, Enum):
    """Qualitative rating of a single forecast day, best first."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"

    @property
    def points(self) -> int:
        """Position on the 0-3 scale used for averaging (poor=0, excellent=3)."""
        return _CATEGORY_POINTS[self]


_CATEGORY_POINTS = {
    WeatherCategory.EXCELLENT: 3,
    WeatherCategory.GOOD: 2,
    WeatherCategory.FAIR: 1,
    WeatherCategory.POOR: 0,
}


class RecommendationLevel(str, Enum):
    """Overall verdict for a park across the forecast window."""
    HIGHLY_RECOMMENDED = "Highly Recommended"
    RECOMMENDED = "Recommended"
    CONSIDER = "Consider"
    NOT_RECOMMENDED = "Not Recommended"


@dataclass(frozen=True)
class RawSample:
    """One 3-hour forecast interval as delivered by the provider."""
    timestamp: int  # UNIX timestamp (UTC)
    temperature: float
    condition: str  # e.g., "Clouds", "Rain", "Clear"
    icon: str  # provider icon code, e.g., "04d"
    humidity: float  # percent
    wind_speed: float


@dataclass(frozen=True)
class ForecastPayload:
    """Provider forecast response: the location it describes plus its samples."""
    city_name: str
    country_code: str
    samples: Tuple[RawSample, ...] = ()
    is_fallback: bool = False


@dataclass(frozen=True)
class DailySummary:
    """Aggregate of all samples falling on one UTC calendar day."""
    date: date
    high_temp: int
    low_temp: int
    avg_temp: int
    dominant_condition: str
    dominant_icon: str
    avg_humidity: int
    avg_wind_speed: int
    location_name: str
    location_region: str


@dataclass(frozen=True)
class CurrentConditions:
    """Current weather at a coordinate pair."""
    temperature: int
    condition: str
    description: str
    humidity: float
    wind_speed: int
    icon: str
    city_name: str
    country_code: str
    timestamp: datetime
    is_mock_data: bool = False


@dataclass
class Park:
    """A point of interest that can be rated and decorated with images."""
    name: str
    latitude: float
    longitude: float
    state: str = ""
    type: str = "National Park"
    description: str = ""
    id: Optional[int] = None
    image: Optional[str] = None
    images: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class DayRating:
    date: date
    category: WeatherCategory
    summary: DailySummary


@dataclass(frozen=True)
class RecommendationEntry:
    location: Park
    day_ratings: Tuple[DayRating, ...]
    average_score: float
    recommendation_level: RecommendationLevel
