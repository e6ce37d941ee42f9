"""
src/analytics/mass_balance.py
─────────────────────────────
Stateful glacier mass-balance model.

Health Index (HI) ∈ [0, 200], starting at 100. Each daily observation adds
its net mass change (accumulation − melt − sublimation) and the result is
clamped. The last 30 updates are kept as history; trend, variance, alerts
and the time-to-loss projection are all projections over that history.

Snapshots capture HI + history + last source (not the data context) so the
orchestration layer can run forecast/scenario days and roll them back.
"""
from __future__ import annotations

import logging
from collections import deque
from collections.abc import Mapping
from typing import Any

import numpy as np
import pandas as pd

from config.alerts import DEFAULT_COLLAPSE_THRESHOLD
from config.glaciers import DEFAULT_SOURCE, HEALTH_BOUNDS, HISTORY_LIMIT, INITIAL_HEALTH
from src.analytics.diagnostics import evaluate_alerts, evaluate_confidence, project_time_to_loss
from src.analytics.summary import build_summary
from src.analytics.trend import history_frame, seven_day_trend, trend_variance, trend_window
from src.data.models import (
    Alert,
    Confidence,
    DailyObservation,
    DataContext,
    Diagnostics,
    GlacierState,
    GlacierStatus,
    HistoryEntry,
    ModelParameters,
    Snapshot,
    TimeToLoss,
)

logger = logging.getLogger(__name__)


class MassBalanceModel:
    """
    Daily mass-balance simulation for a single glacier.

    Not thread-safe: one model per glacier, fed by a single caller.
    """

    def __init__(self, params: ModelParameters | None = None, **overrides: float):
        base = params.model_dump() if params is not None else {}
        self.params = ModelParameters.model_validate({**base, **overrides})
        self.health_index: float = INITIAL_HEALTH
        self.history: deque[HistoryEntry] = deque(maxlen=HISTORY_LIMIT)
        self.last_source: str = DEFAULT_SOURCE
        self.data_context = DataContext()

    # ── Mass balance ──────────────────────────────────────────────────────────

    def mass_components(self, observation: DailyObservation) -> tuple[float, float, float]:
        """(accumulation, melt, sublimation) for one observation."""
        p = self.params
        t = observation.temperature
        # Both terms apply for 0 < T ≤ 1
        accumulation = observation.precipitation * p.accumulation_rate if t <= 1.0 else 0.0
        melt = t * p.melt_rate if t > 0 else 0.0
        sublimation = observation.wind_speed * p.sublimation_rate
        return accumulation, melt, sublimation

    def calculate_daily_mass_change(self, observation: DailyObservation) -> float:
        accumulation, melt, sublimation = self.mass_components(observation)
        return accumulation - melt - sublimation

    def apply_daily_observation(self, observation: DailyObservation, source_label: str = DEFAULT_SOURCE) -> None:
        daily_change = self.calculate_daily_mass_change(observation)
        health_index = float(np.clip(self.health_index + daily_change, *HEALTH_BOUNDS))
        entry = HistoryEntry(
            date=observation.date,
            daily_change=daily_change,
            health_index=health_index,
            source_label=source_label,
        )

        # Commit only once the entry is built so HI, source and history agree
        self.health_index = health_index
        self.last_source = source_label
        # deque(maxlen) evicts exactly one oldest entry per append once full
        self.history.append(entry)
        logger.debug(
            "Applied %s observation for %s: change=%.3f HI=%.2f",
            source_label, observation.date.isoformat(), daily_change, self.health_index,
        )

    def reset_with_observation(
        self,
        observation: DailyObservation | None = None,
        source_label: str = DEFAULT_SOURCE,
    ) -> None:
        """Start a new baseline, optionally seeded with one observation."""
        self.health_index = INITIAL_HEALTH
        self.history.clear()
        self.last_source = source_label
        logger.info("Model reset to initial state (source=%s)", source_label)
        if observation is not None:
            self.apply_daily_observation(observation, source_label)

    # ── Queries ───────────────────────────────────────────────────────────────

    def get_seven_day_trend(self) -> float:
        return seven_day_trend(self.history)

    def get_trend_variance(self) -> float:
        return trend_variance(self.history)

    def get_state(self) -> GlacierState:
        trend = self.get_seven_day_trend()

        # Two independent comparisons against the same trend
        state = GlacierStatus.STABLE
        if trend > self.params.advancing_threshold:
            state = GlacierStatus.ADVANCING
        if trend < self.params.receding_threshold:
            state = GlacierStatus.RECEDING

        return GlacierState(
            health_index=self.health_index,
            daily_change=self.history[-1].daily_change if self.history else 0.0,
            seven_day_trend=trend,
            state=state,
            last_source=self.last_source,
        )

    def get_history(self) -> list[HistoryEntry]:
        return list(self.history)

    def history_frame(self) -> pd.DataFrame:
        return history_frame(self.history)

    # ── Data context ──────────────────────────────────────────────────────────

    def set_data_context(self, context: DataContext) -> None:
        self.data_context = context

    def update_data_context(self, **changes: Any) -> DataContext:
        self.data_context = self.data_context.merge(**changes)
        return self.data_context

    # ── Diagnostics ───────────────────────────────────────────────────────────

    def get_alerts(self) -> list[Alert]:
        return evaluate_alerts(self.get_state(), self.data_context)

    def get_confidence(self) -> Confidence:
        return evaluate_confidence(self.get_trend_variance(), self.data_context)

    def get_time_to_loss(self, collapse_threshold: float = DEFAULT_COLLAPSE_THRESHOLD) -> TimeToLoss:
        return project_time_to_loss(self.health_index, self.get_seven_day_trend(), collapse_threshold)

    def get_diagnostics(self, collapse_threshold: float = DEFAULT_COLLAPSE_THRESHOLD) -> Diagnostics:
        return Diagnostics(
            alerts=self.get_alerts(),
            confidence=self.get_confidence(),
            projection=self.get_time_to_loss(collapse_threshold),
        )

    def get_summary(self, observation: DailyObservation, diagnostics: Diagnostics | None = None) -> str:
        return build_summary(
            self.mass_components(observation),
            self.get_state(),
            trend_window(self.history),
            diagnostics,
        )

    # ── Snapshot / restore ────────────────────────────────────────────────────

    def get_snapshot(self) -> Snapshot:
        return Snapshot(
            health_index=self.health_index,
            history=tuple(self.history),
            last_source=self.last_source,
        )

    def set_snapshot(self, snapshot: Snapshot | Mapping[str, Any] | None) -> None:
        """Restore HI, history and last source. The data context is left as is."""
        if snapshot is None:
            return
        if not isinstance(snapshot, Snapshot):
            snapshot = Snapshot.model_validate(dict(snapshot))

        self.health_index = snapshot.health_index
        self.history = deque(snapshot.history, maxlen=HISTORY_LIMIT)
        self.last_source = snapshot.last_source
        logger.debug("Restored snapshot: HI=%.2f, %d entries", self.health_index, len(self.history))
