"""
tests/conftest.py
─────────────────
Shared pytest fixtures for the glacier monitor test suite.
"""
import os
import pytest
from datetime import datetime, timedelta, timezone

os.environ.setdefault("STALE_AFTER_HOURS", "2.0")
os.environ.setdefault("COLLAPSE_THRESHOLD", "40.0")
os.environ.setdefault("LOG_LEVEL", "DEBUG")


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_observation(now):
    """Factory: DailyObservation for day `offset` after `now`."""
    from src.data.models import DailyObservation

    def _make(temperature=0.0, wind_speed=0.0, precipitation=0.0, offset=0):
        return DailyObservation(
            temperature=temperature,
            wind_speed=wind_speed,
            precipitation=precipitation,
            date=now + timedelta(days=offset),
        )

    return _make


@pytest.fixture
def model():
    from src.analytics.mass_balance import MassBalanceModel
    return MassBalanceModel()


@pytest.fixture
def cold_snowy_observation(make_observation):
    """Below freezing with snowfall: accumulation 1.0, no melt, sublimation 0.2."""
    return make_observation(temperature=-5.0, wind_speed=20.0, precipitation=10.0)


@pytest.fixture
def warm_observation(make_observation):
    """Warm and dry: melt 1.0, sublimation 0.1 → change −1.1."""
    return make_observation(temperature=20.0, wind_speed=10.0, precipitation=0.0)


@pytest.fixture
def seed_history(make_observation):
    """
    Drive a model through a list of target daily changes (default params).

    Sub-freezing days only: snowfall gives +precip × 0.1, wind gives −wind × 0.01.
    """
    def _seed(model, changes, source_label="Observed"):
        for i, change in enumerate(changes):
            if change >= 0:
                obs = make_observation(temperature=-1.0, precipitation=change * 10.0, offset=i)
            else:
                obs = make_observation(temperature=-1.0, wind_speed=-change * 100.0, offset=i)
            model.apply_daily_observation(obs, source_label)
        return model

    return _seed
