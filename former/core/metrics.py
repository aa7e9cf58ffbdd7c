"""
Pure body-composition metrics.

Everything in here works on plain values or on reading/profile objects that
expose the Reading/UserProfile attribute names (ORM rows, pydantic models or
anything duck-typed alike). No I/O, no settings, no module-level state.
All masses are kilograms.
"""

from __future__ import annotations

import math
from datetime import date as DateType, datetime, timedelta
from typing import Iterable, Sequence

from pydantic import BaseModel

LB_TO_KG = 0.45359237

# weekday() numbering: Monday=0 ... Sunday=6
MONDAY = 0
SUNDAY = 6

# (weeks, lb lost per week)
TAPER_SCHEDULE: tuple[tuple[int, float], ...] = (
    (4, 2.0),
    (4, 1.8),
    (4, 1.5),
    (4, 1.2),
)

HYDRATION_BASELINE_SIZE = 4
HYDRATION_DROP_PCT = 2.0
NEUTRAL_MUSCLE_SCORE = 50


class PredictedPoint(BaseModel):
    week: int
    target_weight_kg: float


class WeeklyWeight(BaseModel):
    week: str
    weight_kg: float


# ----- Units -----

def lb_to_kg(lb: float) -> float:
    return lb * LB_TO_KG


def kg_to_lb(kg: float) -> float:
    return kg / LB_TO_KG


def cm_to_m(cm: float) -> float:
    return cm / 100


def m_to_cm(m: float) -> float:
    return m * 100


# ----- Single-reading derivations -----

def bmi(weight_kg: float, height_cm: float) -> float:
    """Body mass index; 0 when height is 0."""
    height_m = cm_to_m(height_cm)
    if height_m == 0:
        return 0.0
    return weight_kg / (height_m * height_m)


def fat_mass(weight_kg: float, body_fat_pct: float) -> float:
    return weight_kg * (body_fat_pct / 100)


def lean_mass(weight_kg: float, body_fat_pct: float) -> float:
    return weight_kg - fat_mass(weight_kg, body_fat_pct)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _num(value) -> float:
    return float(value) if value is not None else 0.0


def sort_readings(readings: Iterable, descending: bool = False) -> list:
    return sorted(readings, key=lambda r: r.taken_at, reverse=descending)


# ----- Series derivations -----

def weekly_change(readings: Sequence) -> float:
    """
    Weight delta between the latest reading and the newest reading taken at
    least 7 days before it.

    The "previous" reading is a point lookup, not an interpolation: with sparse
    logging it can be several weeks older than the latest one.
    Returns 0 with fewer than 2 readings or when nothing crosses the cutoff.
    """
    if len(readings) < 2:
        return 0.0

    ordered = sort_readings(readings, descending=True)
    latest = ordered[0]
    cutoff = latest.taken_at - timedelta(days=7)

    previous = next((r for r in ordered if r.taken_at <= cutoff), None)
    if previous is None:
        return 0.0
    return latest.weight_kg - previous.weight_kg


def progress_to_goal(user, current_weight_kg: float) -> float:
    """Fraction of the start → target distance covered, clamped to [0, 1]."""
    denominator = user.start_weight_kg - user.target_weight_kg
    if denominator == 0:
        return 0.0
    return clamp((user.start_weight_kg - current_weight_kg) / denominator)


def predicted_curve(user) -> list[PredictedPoint]:
    """
    Weekly target weights following TAPER_SCHEDULE, floored at the goal.
    Rates are pounds per week regardless of the user's unit system.
    """
    points: list[PredictedPoint] = []
    cumulative_lb = 0.0
    week = 1
    for weeks, loss_per_week in TAPER_SCHEDULE:
        for _ in range(weeks):
            cumulative_lb += loss_per_week
            points.append(
                PredictedPoint(
                    week=week,
                    target_weight_kg=max(
                        user.target_weight_kg,
                        user.start_weight_kg - lb_to_kg(cumulative_lb),
                    ),
                )
            )
            week += 1
    return points


def muscle_preservation_score(
    start_weight_kg: float,
    current_weight_kg: float,
    start_muscle_mass_kg: float,
    current_muscle_mass_kg: float,
) -> int:
    """
    0-100 score: how little of the weight lost so far was muscle.
    Neutral 50 until there is a net weight loss.
    """
    weight_delta = start_weight_kg - current_weight_kg
    muscle_delta = start_muscle_mass_kg - current_muscle_mass_kg
    if weight_delta <= 0:
        return NEUTRAL_MUSCLE_SCORE

    ratio = 1 - muscle_delta / max(weight_delta, 0.1)
    # half-up rounding
    score = math.floor(ratio * 100 + 0.5)
    return int(clamp(score, 0, 100))


def hydration_flag(readings: Sequence) -> bool:
    """
    True when the latest body water % sits more than 2 points below the mean
    of the four readings right before it. Needs at least 5 readings.
    """
    if len(readings) < HYDRATION_BASELINE_SIZE + 1:
        return False

    ordered = sort_readings(readings)
    latest = ordered[-1]
    if latest.body_water_pct is None:
        return False

    baseline = ordered[-(HYDRATION_BASELINE_SIZE + 1):-1]
    mean = sum(_num(r.body_water_pct) for r in baseline) / len(baseline)
    return latest.body_water_pct < mean - HYDRATION_DROP_PCT


def cumulative_fat_loss_pct(readings: Sequence) -> float:
    if not readings:
        return 0.0

    ordered = sort_readings(readings)
    first, latest = ordered[0], ordered[-1]
    start_fat = fat_mass(first.weight_kg, _num(first.body_fat_pct))
    current_fat = fat_mass(latest.weight_kg, _num(latest.body_fat_pct))
    if start_fat == 0:
        return 0.0
    return max(0.0, (start_fat - current_fat) / start_fat * 100)


# ----- Week bucketing -----

def week_start(moment: datetime | DateType, first_day: int = SUNDAY) -> DateType:
    """Calendar date of the first day of the week containing `moment`."""
    day = moment.date() if isinstance(moment, datetime) else moment
    return day - timedelta(days=(day.weekday() - first_day) % 7)


def derive_week_buckets(readings: Iterable, first_day: int = SUNDAY) -> dict[str, list]:
    buckets: dict[str, list] = {}
    for reading in readings:
        key = week_start(reading.taken_at, first_day).isoformat()
        buckets.setdefault(key, []).append(reading)
    return buckets


def weekly_weight_series(readings: Iterable, first_day: int = SUNDAY) -> list[WeeklyWeight]:
    buckets = derive_week_buckets(readings, first_day)
    return [
        WeeklyWeight(
            week=key,
            weight_kg=sum(r.weight_kg for r in buckets[key]) / len(buckets[key]),
        )
        for key in sorted(buckets)
    ]
