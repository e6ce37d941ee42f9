"""
src/analytics/trend.py
──────────────────────
Trailing-window statistics over a glacier's daily mass-change history.

  seven_day_trend   mean of daily_change over the last ≤ 7 entries
  trend_variance    population σ of the same window (0 below 2 entries)
  history_frame     DataFrame export with a rolling 7-row trend column
"""
from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pandas as pd

from config.glaciers import TREND_WINDOW_DAYS
from src.data.models import HistoryEntry

FRAME_COLUMNS = ["date", "daily_change", "health_index", "source_label", "rolling_trend"]


def trend_window(entries: Sequence[HistoryEntry], window: int = TREND_WINDOW_DAYS) -> list[HistoryEntry]:
    """Last `window` entries in chronological order."""
    return list(entries)[-window:]


def seven_day_trend(entries: Sequence[HistoryEntry], window: int = TREND_WINDOW_DAYS) -> float:
    recent = trend_window(entries, window)
    if not recent:
        return 0.0
    return float(np.mean([e.daily_change for e in recent]))


def trend_variance(entries: Sequence[HistoryEntry], window: int = TREND_WINDOW_DAYS) -> float:
    """Population standard deviation (ddof=0) of daily_change in the window."""
    recent = trend_window(entries, window)
    if len(recent) < 2:
        return 0.0
    return float(np.std([e.daily_change for e in recent]))


def history_frame(entries: Sequence[HistoryEntry], window: int = TREND_WINDOW_DAYS) -> pd.DataFrame:
    """
    Convert history entries to a DataFrame for charting consumers.

    The rolling_trend of the final row equals seven_day_trend(entries).
    """
    if not entries:
        return pd.DataFrame(columns=FRAME_COLUMNS)

    df = pd.DataFrame([e.model_dump() for e in entries])
    df["rolling_trend"] = df["daily_change"].rolling(window=window, min_periods=1).mean()
    return df[FRAME_COLUMNS]
