"""Turns a 3-hour interval forecast into one summary per UTC calendar day."""
import math
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Dict, Iterable, List

from weather_data import DailySummary, MalformedInputError, RawSample


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def utc_day(timestamp: int) -> date:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).date()


@dataclass
class _DayAccumulator:
    """Mutable per-day bucket; finalized into a DailySummary once input is consumed."""
    day: date
    temps: List[float] = field(default_factory=list)
    humidity: List[float] = field(default_factory=list)
    wind_speeds: List[float] = field(default_factory=list)
    condition_counts: Dict[str, int] = field(default_factory=dict)
    condition_first_seen: Dict[str, int] = field(default_factory=dict)
    condition_icons: Dict[str, str] = field(default_factory=dict)

    def add(self, sample: RawSample) -> None:
        self.temps.append(sample.temperature)
        self.humidity.append(sample.humidity)
        self.wind_speeds.append(sample.wind_speed)

        condition = sample.condition
        if condition not in self.condition_counts:
            self.condition_counts[condition] = 0
            self.condition_first_seen[condition] = len(self.temps) - 1
            self.condition_icons[condition] = sample.icon
        self.condition_counts[condition] += 1

    def dominant_condition(self) -> str:
        # Highest count wins; on a tie the condition seen first wins.
        return min(
            self.condition_counts,
            key=lambda c: (-self.condition_counts[c], self.condition_first_seen[c]),
        )

    def finalize(self, location_name: str, location_region: str) -> DailySummary:
        condition = self.dominant_condition()
        return DailySummary(
            date=self.day,
            high_temp=round_half_up(max(self.temps)),
            low_temp=round_half_up(min(self.temps)),
            avg_temp=round_half_up(sum(self.temps) / len(self.temps)),
            dominant_condition=condition,
            dominant_icon=self.condition_icons[condition],
            avg_humidity=round_half_up(sum(self.humidity) / len(self.humidity)),
            avg_wind_speed=round_half_up(sum(self.wind_speeds) / len(self.wind_speeds)),
            location_name=location_name,
            location_region=location_region,
        )


def aggregate(
    samples: Iterable[RawSample],
    location_name: str,
    location_region: str
) -> List[DailySummary]:
    """
    Group interval samples by UTC calendar day and summarize each day.

    Temperatures, humidity and wind speed are rounded to whole units (half up).
    The dominant condition is the most frequent one in the day, ties going to
    whichever appeared first; its icon is the icon of that first occurrence.

    Args:
        samples: Forecast samples, in provider order
        location_name: City/park name copied onto every summary
        location_region: Region/country code copied onto every summary

    Returns:
        One DailySummary per distinct day, ordered by date ascending.
        Empty input gives an empty list.

    Raises:
        MalformedInputError: If an item is not a RawSample, has non-finite readings
            or a timestamp outside the representable date range
    """
    days: Dict[date, _DayAccumulator] = {}

    for index, sample in enumerate(samples):
        _check_sample(index, sample)
        day = utc_day(sample.timestamp)
        bucket = days.get(day)
        if bucket is None:
            bucket = days[day] = _DayAccumulator(day=day)
        bucket.add(sample)

    return [
        days[day].finalize(location_name, location_region)
        for day in sorted(days)
    ]


def check_samples(samples: Iterable[RawSample]) -> None:
    """
    Validate samples the way aggregate() does, without summarizing them.

    Raises:
        MalformedInputError: On the first sample aggregate() would reject
    """
    for index, sample in enumerate(samples):
        _check_sample(index, sample)


def _check_sample(index: int, sample: RawSample) -> None:
    if not isinstance(sample, RawSample):
        raise MalformedInputError(f"Sample {index} is {type(sample).__name__}, expected RawSample")
    for name in ("timestamp", "temperature", "humidity", "wind_speed"):
        value = getattr(sample, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise MalformedInputError(f"Sample {index} has invalid {name}: {value!r}")
    if not isinstance(sample.condition, str):
        raise MalformedInputError(f"Sample {index} has invalid condition: {sample.condition!r}")
    try:
        utc_day(sample.timestamp)
    except (OverflowError, OSError, ValueError):
        raise MalformedInputError(f"Sample {index} has out-of-range timestamp: {sample.timestamp!r}")
