"""
src/data/models.py
──────────────────
Pydantic v2 data models for observations, model state, and diagnostics.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

from config.alerts import AlertLevel
from config.glaciers import DEFAULT_PARAMETERS, DEFAULT_SOURCE, INITIAL_HEALTH


class GlacierStatus(str, Enum):
    ADVANCING = "Advancing"
    STABLE = "Stable"
    RECEDING = "Receding"


class ConfidenceLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ProjectionStatus(str, Enum):
    COLLAPSED = "collapsed"
    STABLE = "stable"
    DECLINING = "declining"


class DailyObservation(BaseModel):
    """One day of weather. Wind and precipitation are not range-checked."""

    model_config = ConfigDict(frozen=True)

    temperature: float          # °C
    wind_speed: float           # km/h
    precipitation: float        # mm
    date: datetime


class HistoryEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: datetime
    daily_change: float
    health_index: float          # already clamped by the model
    source_label: str


class ModelParameters(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    accumulation_rate: float = DEFAULT_PARAMETERS["accumulation_rate"]
    melt_rate: float = DEFAULT_PARAMETERS["melt_rate"]
    sublimation_rate: float = DEFAULT_PARAMETERS["sublimation_rate"]
    advancing_threshold: float = DEFAULT_PARAMETERS["advancing_threshold"]
    receding_threshold: float = DEFAULT_PARAMETERS["receding_threshold"]


class DataContext(BaseModel):
    """Provenance and reliability of the observation stream currently feeding a model."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_label: str = DEFAULT_SOURCE
    age_hours: float | None = None
    is_fallback: bool = False
    is_forecast: bool = False
    is_scenario: bool = False
    is_stale: bool = False

    def merge(self, **changes) -> "DataContext":
        """Overlay only the supplied fields; unknown names fail validation."""
        return DataContext.model_validate({**self.model_dump(), **changes})


class Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    health_index: float = INITIAL_HEALTH
    history: tuple[HistoryEntry, ...] = ()
    last_source: str = DEFAULT_SOURCE

    @field_validator("health_index", mode="before")
    @classmethod
    def _default_health(cls, v):
        return INITIAL_HEALTH if v is None else v

    @field_validator("history", mode="before")
    @classmethod
    def _default_history(cls, v):
        return () if v is None else v

    @field_validator("last_source", mode="before")
    @classmethod
    def _default_source(cls, v):
        return v or DEFAULT_SOURCE


class GlacierState(BaseModel):
    model_config = ConfigDict(frozen=True)

    health_index: float
    daily_change: float
    seven_day_trend: float
    state: GlacierStatus
    last_source: str


class Alert(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    level: AlertLevel
    label: str
    detail: str


class Confidence(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: ConfidenceLevel
    reasons: list[str]
    variance: float


class TimeToLoss(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: ProjectionStatus
    message: str
    days: int | None = None
    years: int | None = None
    days_left: float | None = None   # unrounded projection


class Diagnostics(BaseModel):
    model_config = ConfigDict(frozen=True)

    alerts: list[Alert] | None = None
    confidence: Confidence | None = None
    projection: TimeToLoss | None = None
