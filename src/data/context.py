"""
src/data/context.py
───────────────────
DataContext builders for the three observation paths.

  live      : observed (or fallback) current conditions; age + staleness
  forecast  : provider forecast, or a simulated series if the provider failed
  scenario  : synthetic climate scenario ("Scenario: Ice Age", ...)

Staleness is decided here, before a diagnostics read; the model itself only
sees the resulting is_stale flag.
"""
from __future__ import annotations

from datetime import UTC, datetime

from config.settings import settings
from src.data.models import DataContext


def _as_utc(ts: datetime) -> datetime:
    return ts.replace(tzinfo=UTC) if ts.tzinfo is None else ts


def age_hours(observed_at: datetime, now: datetime | None = None) -> float:
    """Hours since `observed_at`; never negative. Naive datetimes are UTC."""
    now = _as_utc(now or datetime.now(tz=UTC))
    delta = now - _as_utc(observed_at)
    return max(0.0, delta.total_seconds() / 3600.0)


def live_context(
    observed_at: datetime,
    now: datetime | None = None,
    source_label: str = "Observed",
    is_fallback: bool = False,
    stale_after_hours: float = settings.STALE_AFTER_HOURS,
) -> DataContext:
    """
    Context for the live path.

    Only real provider data can be stale; fallback data is already flagged
    unreliable through is_fallback.
    """
    age = age_hours(observed_at, now)
    return DataContext(
        source_label=source_label,
        age_hours=age,
        is_fallback=is_fallback,
        is_stale=(not is_fallback) and age > stale_after_hours,
    )


def forecast_context(source_label: str = "Forecast", is_fallback: bool = False) -> DataContext:
    return DataContext(source_label=source_label, is_forecast=True, is_fallback=is_fallback)


def scenario_context(scenario_label: str) -> DataContext:
    return DataContext(source_label=f"Scenario: {scenario_label}", is_scenario=True)
