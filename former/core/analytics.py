"""
Analytics aggregation.

Builds the dashboard projection for one (user, readings) pair out of the pure
metrics in former.core.metrics. Nothing is cached here: callers recompute
whenever the reading set changes.
"""

from __future__ import annotations

import logging
from datetime import date as DateType
from typing import Optional, Sequence

from pydantic import BaseModel

from former.core.format import (
    HOLDING_STEADY,
    format_weekly_change,
    format_weight,
    weekly_change_label,
)
from former.core.metrics import (
    NEUTRAL_MUSCLE_SCORE,
    SUNDAY,
    PredictedPoint,
    WeeklyWeight,
    bmi,
    clamp,
    cumulative_fat_loss_pct,
    derive_week_buckets,
    hydration_flag,
    muscle_preservation_score,
    predicted_curve,
    progress_to_goal,
    sort_readings,
    weekly_change,
    weekly_weight_series,
)
from former.core.streaks import count_consecutive_log_days, count_recent_logs

logger = logging.getLogger(__name__)

GUIDANCE_DELTA_PCT = 2.0


class CompositionWeek(BaseModel):
    week: str
    label: str
    fat_pct: float
    lean_pct: float


class Analytics(BaseModel):
    weekly_change_kg: float = 0.0
    progress_percent: float = 0.0
    predicted_weights: list[PredictedPoint] = []
    weekly_actual_kg: list[WeeklyWeight] = []
    muscle_score: int = NEUTRAL_MUSCLE_SCORE
    hydration_low: bool = False
    composition: list[CompositionWeek] = []
    fat_loss_pct: float = 0.0
    recent_log_count: int = 0
    weekly_change_label: str = HOLDING_STEADY
    weekly_change_text: Optional[str] = None
    latest_weight_text: Optional[str] = None
    streak_days: int = 0
    bmi: float = 0.0
    guidance: Optional[str] = None


def default_analytics() -> Analytics:
    return Analytics()


def _mean(values: list[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def _week_label(week_key: str) -> str:
    d = DateType.fromisoformat(week_key)
    return f"{d:%b} {d.day}"


def build_composition(weekly_actual: list[WeeklyWeight], buckets: dict[str, list]) -> list[CompositionWeek]:
    composition: list[CompositionWeek] = []
    for point in weekly_actual:
        entries = buckets.get(point.week, [])
        fat = _mean([r.body_fat_pct for r in entries if r.body_fat_pct is not None])
        composition.append(
            CompositionWeek(
                week=point.week,
                label=_week_label(point.week),
                fat_pct=clamp(fat, 0.0, 100.0),
                lean_pct=clamp(100.0 - fat, 0.0, 100.0),
            )
        )
    return composition


def build_guidance(latest, previous) -> Optional[str]:
    """
    One coaching nudge from the change between the two newest readings.
    Checks run in priority order; the first hit wins.
    """
    if previous is None:
        return None

    def delta(field: str) -> Optional[float]:
        a, b = getattr(latest, field), getattr(previous, field)
        if a is None or b is None:
            return None
        return a - b

    muscle = delta("skeletal_muscle_pct")
    if muscle is not None and muscle <= -GUIDANCE_DELTA_PCT:
        return "Muscle dipping this week. A rest day may help recovery."

    water = delta("body_water_pct")
    if water is not None and water <= -GUIDANCE_DELTA_PCT:
        return "Hydration dipped. Add a glass before lunch."

    fat = delta("body_fat_pct")
    if fat is not None and fat >= GUIDANCE_DELTA_PCT:
        return "Body fat nudged up. Lean on whole foods tonight."
    if fat is not None and fat <= -GUIDANCE_DELTA_PCT:
        return "Body fat trending down. Keep protein steady and sleep consistent."
    return None


def compute_analytics(
    user,
    readings: Sequence,
    *,
    today: Optional[DateType] = None,
    first_day: int = SUNDAY,
    window_days: int = 7,
) -> Analytics:
    """
    Full analytics projection for `user` over `readings` (any order).

    No user or no readings yields default_analytics(). All other edge cases
    (single reading, zero denominators, sparse logs) resolve to the neutral
    values of the individual metrics.
    """
    if user is None or not readings:
        return default_analytics()

    ordered = sort_readings(readings)
    first, latest = ordered[0], ordered[-1]
    previous = ordered[-2] if len(ordered) > 1 else None

    weekly_delta = weekly_change(ordered)
    weekly_actual = weekly_weight_series(ordered, first_day)
    buckets = derive_week_buckets(ordered, first_day)

    muscle_score = NEUTRAL_MUSCLE_SCORE
    if first.muscle_mass_kg is not None and latest.muscle_mass_kg is not None:
        muscle_score = muscle_preservation_score(
            user.start_weight_kg,
            latest.weight_kg,
            first.muscle_mass_kg,
            latest.muscle_mass_kg,
        )

    analytics = Analytics(
        weekly_change_kg=weekly_delta,
        progress_percent=progress_to_goal(user, latest.weight_kg),
        predicted_weights=predicted_curve(user),
        weekly_actual_kg=weekly_actual,
        muscle_score=muscle_score,
        hydration_low=hydration_flag(ordered),
        composition=build_composition(weekly_actual, buckets),
        fat_loss_pct=cumulative_fat_loss_pct(ordered),
        recent_log_count=count_recent_logs(ordered, window_days, today),
        weekly_change_label=weekly_change_label(weekly_delta, user.unit_system),
        weekly_change_text=format_weekly_change(weekly_delta, user.unit_system),
        latest_weight_text=format_weight(latest.weight_kg, user.unit_system),
        streak_days=count_consecutive_log_days(ordered),
        bmi=bmi(latest.weight_kg, user.height_cm or 0.0),
        guidance=build_guidance(latest, previous),
    )

    logger.debug(
        "Analytics for user %s: %d readings, %d weeks, weekly change %.2f kg",
        getattr(user, "id", None),
        len(ordered),
        len(weekly_actual),
        weekly_delta,
    )
    return analytics
