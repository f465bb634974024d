"""Rates forecast days per climate and ranks parks by how good their week looks."""
import logging
import math
from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple

from climate import classify
from forecast_aggregator import round_half_up
from weather_data import (
    ClimateArchetype,
    DailySummary,
    DayRating,
    MalformedInputError,
    Park,
    RecommendationEntry,
    RecommendationLevel,
    WeatherCategory,
)

# Temperature bands per archetype as (exclusive upper bound in °F, score delta),
# scanned in order; the final band has no upper bound so every temperature
# lands in exactly one band.
TEMPERATURE_BANDS: Dict[ClimateArchetype, List[Tuple[Optional[int], int]]] = {
    ClimateArchetype.DESERT: [(45, -1), (60, 2), (86, 3), (96, 1), (None, -2)],
    ClimateArchetype.MOUNTAIN: [(32, -2), (40, 0), (50, 2), (76, 3), (86, 2), (None, 0)],
    ClimateArchetype.COASTAL: [(50, 0), (60, 2), (81, 3), (91, 2), (None, 0)],
    ClimateArchetype.FOREST: [(32, -1), (45, 0), (55, 2), (81, 3), (91, 2), (None, 0)],
    ClimateArchetype.TROPICAL: [(70, 0), (86, 3), (96, 1), (None, 0)],
    ClimateArchetype.ARCTIC: [(32, -1), (40, 1), (50, 2), (71, 3), (None, 0)],
}

_RAIN_TOLERANT = frozenset({ClimateArchetype.TROPICAL, ClimateArchetype.FOREST})
_SNOW_TOLERANT = frozenset({ClimateArchetype.MOUNTAIN, ClimateArchetype.ARCTIC})
_FOG_TOLERANT = frozenset({ClimateArchetype.COASTAL, ClimateArchetype.FOREST})

# (keywords, delta, archetypes that get +1 back); first matching row wins.
CONDITION_RULES: List[Tuple[Tuple[str, ...], int, FrozenSet[ClimateArchetype]]] = [
    (("clear", "sun"), 2, frozenset()),
    (("cloud", "partly"), 1, frozenset()),
    (("rain", "shower"), -1, _RAIN_TOLERANT),
    (("storm", "thunder"), -2, frozenset()),
    (("snow",), -2, _SNOW_TOLERANT),
    (("fog", "mist"), -1, _FOG_TOLERANT),
]

# Minimum total score for each category, best first.
CATEGORY_THRESHOLDS = [
    (4, WeatherCategory.EXCELLENT),
    (2, WeatherCategory.GOOD),
    (0, WeatherCategory.FAIR),
]

LEVEL_THRESHOLDS = [
    (2.5, RecommendationLevel.HIGHLY_RECOMMENDED),
    (1.5, RecommendationLevel.RECOMMENDED),
    (0.8, RecommendationLevel.CONSIDER),
]


def temperature_score(avg_temp: float, archetype: ClimateArchetype) -> int:
    temp = round_half_up(avg_temp)
    for upper, delta in TEMPERATURE_BANDS[archetype]:
        if upper is None or temp < upper:
            return delta
    return 0


def condition_score(condition: str, archetype: ClimateArchetype) -> int:
    text = condition.lower()
    for keywords, delta, tolerant in CONDITION_RULES:
        if any(keyword in text for keyword in keywords):
            return delta + 1 if archetype in tolerant else delta
    return 0


def score_day(summary: DailySummary, archetype: ClimateArchetype) -> WeatherCategory:
    """
    Rate one forecast day for a park of the given climate.

    The score is the temperature band delta for the day's average temperature
    plus the delta for its dominant condition, then bucketed into a category.
    """
    if not isinstance(summary, DailySummary):
        raise MalformedInputError(f"Expected DailySummary, got {type(summary).__name__}")
    avg_temp = summary.avg_temp
    if isinstance(avg_temp, bool) or not isinstance(avg_temp, (int, float)) or not math.isfinite(avg_temp):
        raise MalformedInputError(f"Invalid avg_temp: {avg_temp!r}")
    if not isinstance(summary.dominant_condition, str):
        raise MalformedInputError(f"Invalid dominant_condition: {summary.dominant_condition!r}")

    try:
        archetype = ClimateArchetype(archetype)
    except ValueError:
        raise MalformedInputError(f"Unknown climate archetype: {archetype!r}")
    score = temperature_score(summary.avg_temp, archetype) + condition_score(summary.dominant_condition, archetype)

    for minimum, category in CATEGORY_THRESHOLDS:
        if score >= minimum:
            return category
    return WeatherCategory.POOR


def rate_day(summary: DailySummary, archetype: ClimateArchetype) -> DayRating:
    return DayRating(date=summary.date, category=score_day(summary, archetype), summary=summary)


def recommendation_level(average_score: float) -> RecommendationLevel:
    for minimum, level in LEVEL_THRESHOLDS:
        if average_score >= minimum:
            return level
    return RecommendationLevel.NOT_RECOMMENDED


def rank(
    locations: Sequence[Park],
    forecasts_by_location: Mapping[str, Sequence[DailySummary]]
) -> List[RecommendationEntry]:
    """
    Rank parks by the average rating of their forecast days.

    Args:
        locations: Parks in caller order (the tie-break order)
        forecasts_by_location: Daily summaries keyed by park name

    Returns:
        Entries sorted by descending average score; parks with equal scores
        keep their input order. Parks without any forecast days are left out,
        so an empty forecast mapping gives an empty ranking.
    """
    entries = []
    for park in locations:
        summaries = forecasts_by_location.get(park.name) or ()
        if not summaries:
            logging.debug(f"No forecast days for {park.name}, skipping")
            continue

        archetype = classify(park.name)
        ratings = tuple(rate_day(summary, archetype) for summary in sorted(summaries, key=lambda s: s.date))
        average_score = sum(rating.category.points for rating in ratings) / len(ratings)
        entries.append(RecommendationEntry(
            location=park,
            day_ratings=ratings,
            average_score=average_score,
            recommendation_level=recommendation_level(average_score),
        ))

    # sorted() is stable, and stays stable with reverse=True
    return sorted(entries, key=lambda entry: entry.average_score, reverse=True)
