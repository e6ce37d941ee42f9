"""
config/alerts.py
────────────────
Alert levels, alert catalog, and diagnostic thresholds.

Two independent trend policies live here and in config/glaciers.py:
  - state classification uses ±0.1 (ModelParameters thresholds)
  - the time-to-loss projection uses a -0.05 dead-band
They may disagree near zero trend.
"""

from enum import Enum


class AlertLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


# ── Alert thresholds ──────────────────────────────────────────────────────────
CRITICAL_HEALTH = 50.0          # health_index below → Critical Loss Phase
WARNING_HEALTH = 70.0           # health_index below → Integrity Warning
HIGH_MELT_DAILY_CHANGE = -2.5   # daily_change below → High Melt Event
ACCELERATED_LOSS_TREND = -1.2   # seven_day_trend below → Accelerated Loss

# ── Confidence thresholds ─────────────────────────────────────────────────────
# Reasons list bands
REASON_HIGH_VOLATILITY = 1.2
REASON_MODERATE_VARIABILITY = 0.6
# Level bands (deliberately not the same as the reason bands)
LEVEL_LOW_VARIANCE = 1.5
LEVEL_MEDIUM_VARIANCE = 0.6
FRESH_DATA_MAX_AGE_HOURS = 2.0

# ── Projection ────────────────────────────────────────────────────────────────
PROJECTION_DEAD_BAND = -0.05    # trends at or above this project no collapse
DEFAULT_COLLAPSE_THRESHOLD = 40.0
DAYS_PER_YEAR = 365

# ── Catalog ───────────────────────────────────────────────────────────────────
ALERT_CATALOG: dict[str, dict[str, str]] = {
    "critical-loss": {
        "level": AlertLevel.CRITICAL,
        "label": "Critical Loss Phase",
        "detail": "Health index below 50 indicates severe structural loss.",
    },
    "integrity-warning": {
        "level": AlertLevel.WARNING,
        "label": "Integrity Warning",
        "detail": "Health index below 70 signals weakening glacier integrity.",
    },
    "high-melt": {
        "level": AlertLevel.WARNING,
        "label": "High Melt Event",
        "detail": "Daily mass loss exceeds 2.5 units.",
    },
    "accelerated-loss": {
        "level": AlertLevel.CRITICAL,
        "label": "Accelerated Loss Detected",
        "detail": "7-day trend indicates rapid retreat.",
    },
    "low-reliability": {
        "level": AlertLevel.INFO,
        "label": "Low Data Reliability",
        "detail": "Fallback or simulated data in use.",
    },
}

STALE_RELIABILITY_DETAIL = "Live data is stale; results may be delayed."
