"""Deterministic visit-suitability scoring for forecast days.

Each day earns 1-3 points for temperature, 0-3 for rain chance and 0-2 for the
sky condition, so scores run from 1 to 8. Ranking is a stable sort on the
score; the raw forecast order is never touched.
"""

from __future__ import annotations

from typing import List, Sequence

from trailhead.data_sources.records import ForecastDay
from trailhead.domain import ScoredDay

IDEAL_TEMP_RANGE_F = (65.0, 80.0)
ACCEPTABLE_TEMP_RANGE_F = (50.0, 85.0)
GOOD_CONDITIONS = ("sunny", "clear", "partly cloudy")
RECOMMENDED_DAY_COUNT = 3


def _temperature_points(day: ForecastDay) -> int:
    avg = (day.min_temp_f + day.max_temp_f) / 2
    if IDEAL_TEMP_RANGE_F[0] <= avg <= IDEAL_TEMP_RANGE_F[1]:
        return 3
    if ACCEPTABLE_TEMP_RANGE_F[0] <= avg <= ACCEPTABLE_TEMP_RANGE_F[1]:
        return 2
    return 1


def _rain_points(chance_of_rain: float | None) -> int:
    rain = chance_of_rain or 0.0
    if rain < 20:
        return 3
    if rain < 40:
        return 2
    if rain < 60:
        return 1
    return 0


def _condition_points(condition: str) -> int:
    text = (condition or "").lower()
    return 2 if any(c in text for c in GOOD_CONDITIONS) else 0


def score_day(day: ForecastDay) -> int:
    """Suitability score for a single day, 1 (worst) to 8 (best)."""
    return _temperature_points(day) + _rain_points(day.chance_of_rain) + _condition_points(day.condition)


def _fmt_number(value: float) -> str:
    """Drop a trailing ``.0`` so 70.0 reads as 70."""
    return f"{value:g}"


def describe_conditions(day: ForecastDay) -> str:
    """Short human summary carried on each ``ScoredDay``."""
    rain = day.chance_of_rain or 0.0
    return (
        f"{_fmt_number(day.min_temp_f)}°F to {_fmt_number(day.max_temp_f)}°F, "
        f"{day.condition}, {_fmt_number(rain)}% chance of rain"
    )


def score_days(days: Sequence[ForecastDay]) -> List[ScoredDay]:
    """Score every day and rank best-first; equal scores keep input order."""
    scored = [
        ScoredDay(date=day.date, score=score_day(day), conditions=describe_conditions(day))
        for day in days
    ]
    # sorted() is stable, so ties stay in forecast order.
    return sorted(scored, key=lambda s: s.score, reverse=True)


def recommended_days(days: Sequence[ForecastDay], count: int = RECOMMENDED_DAY_COUNT) -> List[ScoredDay]:
    """Top ``count`` days by suitability."""
    return score_days(days)[:count]
