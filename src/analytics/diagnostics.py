"""
src/analytics/diagnostics.py
────────────────────────────
Alerts, confidence scoring and time-to-loss projection.

All functions are pure reads over a GlacierState snapshot plus the
DataContext supplied by the orchestration layer; none of them mutate the
model, so they can be evaluated in any order.

Time-to-loss:
  remaining = HI − collapse_threshold
  remaining ≤ 0            → collapsed
  trend ≥ dead-band (−0.05) → stable (no projection)
  otherwise                → remaining / |trend| days
"""
from __future__ import annotations

import math

from config.alerts import (
    ACCELERATED_LOSS_TREND,
    ALERT_CATALOG,
    CRITICAL_HEALTH,
    DAYS_PER_YEAR,
    DEFAULT_COLLAPSE_THRESHOLD,
    FRESH_DATA_MAX_AGE_HOURS,
    HIGH_MELT_DAILY_CHANGE,
    LEVEL_LOW_VARIANCE,
    LEVEL_MEDIUM_VARIANCE,
    PROJECTION_DEAD_BAND,
    REASON_HIGH_VOLATILITY,
    REASON_MODERATE_VARIABILITY,
    STALE_RELIABILITY_DETAIL,
    WARNING_HEALTH,
)
from src.data.models import (
    Alert,
    Confidence,
    ConfidenceLevel,
    DataContext,
    GlacierState,
    ProjectionStatus,
    TimeToLoss,
)


def _alert(alert_id: str, detail: str | None = None) -> Alert:
    entry = ALERT_CATALOG[alert_id]
    return Alert(
        id=alert_id,
        level=entry["level"],
        label=entry["label"],
        detail=detail or entry["detail"],
    )


# ── Alerts ────────────────────────────────────────────────────────────────────

def evaluate_alerts(state: GlacierState, context: DataContext) -> list[Alert]:
    """
    Emit alerts in fixed display order.

    Only the two health-index alerts are mutually exclusive; every other
    check is independent and may fire alongside them.
    """
    alerts: list[Alert] = []

    if state.health_index < CRITICAL_HEALTH:
        alerts.append(_alert("critical-loss"))
    elif state.health_index < WARNING_HEALTH:
        alerts.append(_alert("integrity-warning"))

    if state.daily_change < HIGH_MELT_DAILY_CHANGE:
        alerts.append(_alert("high-melt"))

    if state.seven_day_trend < ACCELERATED_LOSS_TREND:
        alerts.append(_alert("accelerated-loss"))

    if context.is_fallback or context.is_stale:
        alerts.append(_alert("low-reliability", STALE_RELIABILITY_DETAIL if context.is_stale else None))

    return alerts


# ── Confidence ────────────────────────────────────────────────────────────────

def _variance_reason(variance: float) -> str:
    if variance >= REASON_HIGH_VOLATILITY:
        return "High volatility in 7-day trend"
    if variance >= REASON_MODERATE_VARIABILITY:
        return "Moderate trend variability"
    return "Low trend variability"


def evaluate_confidence(variance: float, context: DataContext) -> Confidence:
    """Score model confidence from data provenance and 7-day trend volatility."""
    reasons: list[str] = []

    if context.is_fallback or context.is_scenario:
        reasons.append("Using simulated or scenario data")
    if context.is_forecast:
        reasons.append("Using forecast data")
    if context.is_stale:
        reasons.append("Live data is stale")
    elif context.age_hours is not None and context.age_hours <= FRESH_DATA_MAX_AGE_HOURS:
        reasons.append("Live data is fresh")
    reasons.append(_variance_reason(variance))

    if context.is_fallback or context.is_scenario or context.is_stale or variance >= LEVEL_LOW_VARIANCE:
        level = ConfidenceLevel.LOW
    elif context.is_forecast or variance >= LEVEL_MEDIUM_VARIANCE:
        level = ConfidenceLevel.MEDIUM
    else:
        level = ConfidenceLevel.HIGH

    return Confidence(level=level, reasons=reasons, variance=variance)


# ── Projection ────────────────────────────────────────────────────────────────

def project_time_to_loss(
    health_index: float,
    trend: float,
    collapse_threshold: float = DEFAULT_COLLAPSE_THRESHOLD,
) -> TimeToLoss:
    remaining = health_index - collapse_threshold

    if remaining <= 0:
        return TimeToLoss(
            status=ProjectionStatus.COLLAPSED,
            message="Threshold already crossed.",
            days=0,
            years=0,
            days_left=0.0,
        )

    if trend >= PROJECTION_DEAD_BAND:
        return TimeToLoss(
            status=ProjectionStatus.STABLE,
            message="No collapse projected under current conditions.",
        )

    days_left = remaining / abs(trend)
    years = math.floor(days_left / DAYS_PER_YEAR)
    # Round half up, not to even
    days = math.floor(days_left % DAYS_PER_YEAR + 0.5)

    return TimeToLoss(
        status=ProjectionStatus.DECLINING,
        message=f"~{years} years, {days} days remaining.",
        days=days,
        years=years,
        days_left=days_left,
    )
