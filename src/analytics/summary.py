"""
src/analytics/summary.py
────────────────────────
Plain-language explanation of the current glacier state.
"""
from __future__ import annotations

from collections.abc import Sequence

from src.data.models import Diagnostics, GlacierState, HistoryEntry


def _signed(value: float) -> str:
    """Two decimals with an explicit + for non-negative values (-0.0 prints as +0.00)."""
    return f"+{abs(value):.2f}" if value >= 0 else f"{value:.2f}"


def _drivers(accumulation: float, melt: float, sublimation: float) -> list[str]:
    drivers: list[str] = []
    if accumulation > 0:
        drivers.append(f"snowfall adds +{accumulation:.2f}")
    if melt > 0:
        drivers.append(f"melt removes -{melt:.2f}")
    if sublimation > 0:
        drivers.append(f"wind sublimation removes -{sublimation:.2f}")
    return drivers or ["conditions are mostly neutral"]


def build_summary(
    components: tuple[float, float, float],
    state: GlacierState,
    window: Sequence[HistoryEntry],
    diagnostics: Diagnostics | None = None,
) -> str:
    """
    Compose the summary paragraph.

    Args:
        components: (accumulation, melt, sublimation) magnitudes for the day
            being explained
        state: Current model state; supplies the daily change and trend
        window: Trailing trend window used to count gaining/losing days
        diagnostics: Optional alerts/projection/confidence to append

    Returns:
        Sentences joined by single spaces.
    """
    drivers = ", ".join(_drivers(*components))
    trend = state.seven_day_trend

    if trend >= 0:
        gaining = sum(1 for e in window if e.daily_change >= 0)
        trend_line = (
            f"The 7-day trend averages {_signed(trend)} because "
            f"{gaining} of the last {len(window)} days gained mass."
        )
    else:
        losing = sum(1 for e in window if e.daily_change < 0)
        trend_line = (
            f"The 7-day trend averages {_signed(trend)} because "
            f"{losing} of the last {len(window)} days lost mass."
        )

    lines = [
        f"{state.state.value} today based on temperature, snowfall, and wind conditions.",
        f"Daily mass change is {_signed(state.daily_change)} driven by {drivers}.",
        trend_line,
    ]

    if diagnostics is not None:
        if diagnostics.alerts:
            lines.append(f"Active alerts: {', '.join(a.label for a in diagnostics.alerts)}.")
        if diagnostics.projection is not None:
            lines.append(f"Time-to-loss: {diagnostics.projection.message}")
        if diagnostics.confidence is not None:
            lines.append(f"Model confidence is {diagnostics.confidence.level.value}.")

    return " ".join(lines)
