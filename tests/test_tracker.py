"""
tests/test_tracker.py
─────────────────────
Tests for the per-glacier registry and speculative runs.
"""
import pytest

from config.glaciers import GLACIER_IDS, GlacierSite
from src.data.context import forecast_context, live_context, scenario_context
from src.data.models import DataContext, ProjectionStatus
from src.data.tracker import GlacierNotFoundError, GlacierTracker, run_speculative


@pytest.fixture
def tracker() -> GlacierTracker:
    return GlacierTracker()


class TestGlacierTracker:
    def test_registers_configured_glaciers(self, tracker):
        assert tracker.glacier_ids == GLACIER_IDS
        assert tracker.site("ALETSCH").name == "Great Aletsch Glacier"

    def test_unknown_glacier_raises(self, tracker):
        with pytest.raises(GlacierNotFoundError):
            tracker.model("KILIMANJARO")
        with pytest.raises(KeyError):
            tracker.site("KILIMANJARO")

    def test_site_parameter_overrides(self, tracker):
        assert tracker.model("PERITO-MORENO").params.accumulation_rate == 0.12
        assert tracker.model("ALETSCH").params.accumulation_rate == 0.1

    def test_explicit_sites(self):
        t = GlacierTracker([GlacierSite(id="TEST", name="Test", latitude=0.0, longitude=0.0)])
        assert t.glacier_ids == ["TEST"]

    def test_site_location_available_to_weather_caller(self, tracker):
        for glacier_id in tracker.glacier_ids:
            site = tracker.site(glacier_id)
            assert -90.0 <= site.latitude <= 90.0
            assert -180.0 <= site.longitude <= 180.0
            assert site.timezone
        assert tracker.site("ATHABASCA").timezone == "America/Edmonton"

    def test_location_does_not_affect_model(self, cold_snowy_observation):
        t = GlacierTracker([
            GlacierSite(id="NORTH", name="North", latitude=70.0, longitude=20.0, timezone="Europe/Oslo"),
            GlacierSite(id="SOUTH", name="South", latitude=-70.0, longitude=-60.0),
        ])
        north = t.ingest("NORTH", cold_snowy_observation, DataContext())
        south = t.ingest("SOUTH", cold_snowy_observation, DataContext())
        assert north == south

    def test_models_are_isolated(self, tracker, warm_observation, now):
        tracker.ingest("ALETSCH", warm_observation, live_context(now, now))
        assert tracker.model("ALETSCH").health_index == pytest.approx(98.9)
        assert tracker.model("ATHABASCA").health_index == 100.0
        assert tracker.model("ATHABASCA").get_history() == []

    def test_ingest_sets_context_and_source(self, tracker, cold_snowy_observation):
        ctx = DataContext(source_label="Fallback", is_fallback=True)
        state = tracker.ingest("ATHABASCA", cold_snowy_observation, ctx)
        assert state.last_source == "Fallback"
        assert tracker.model("ATHABASCA").data_context == ctx
        assert tracker.diagnostics("ATHABASCA").alerts[-1].id == "low-reliability"

    def test_new_baseline_resets_history(self, tracker, make_observation, now):
        ctx = live_context(now, now)
        for i in range(5):
            tracker.ingest("ALETSCH", make_observation(temperature=10.0, offset=i), ctx)
        state = tracker.ingest("ALETSCH", make_observation(temperature=-2.0, precipitation=2.0, offset=5), ctx,
                               new_baseline=True)
        assert len(tracker.model("ALETSCH").get_history()) == 1
        assert state.health_index == pytest.approx(100.2)


class TestSpeculativeRun:
    def test_baseline_restored_after_run(self, model, seed_history, warm_observation, now):
        seed_history(model, [0.2, 0.1, -0.1])
        observed_ctx = live_context(now, now)
        model.set_data_context(observed_ctx)
        before_state = model.get_state()
        before_history = model.get_history()

        run = run_speculative(model, [warm_observation] * 5, forecast_context())

        assert run.source_label == "Forecast"
        assert len(run.history) == 8
        assert run.history[-1].source_label == "Forecast"
        assert run.state.health_index < before_state.health_index
        assert model.get_state() == before_state
        assert model.get_history() == before_history
        assert model.data_context == observed_ctx

    def test_run_diagnostics_use_speculative_context(self, model, make_observation):
        series = [make_observation(temperature=25.0, wind_speed=150.0, offset=i) for i in range(7)]
        run = run_speculative(model, series, scenario_context("More Warming"))

        assert run.diagnostics.confidence.level == "Low"
        assert "Using simulated or scenario data" in run.diagnostics.confidence.reasons
        assert run.diagnostics.projection.status == ProjectionStatus.DECLINING
        assert "accelerated-loss" in [a.id for a in run.diagnostics.alerts]
        assert model.get_confidence().level == "High"

    def test_restores_on_error(self, model, seed_history, make_observation):
        seed_history(model, [0.5])
        before = model.get_snapshot()

        def failing_series():
            yield make_observation(temperature=30.0, offset=1)
            raise RuntimeError("provider dropped")

        with pytest.raises(RuntimeError):
            run_speculative(model, failing_series(), forecast_context())

        assert model.get_snapshot() == before
        assert model.data_context == DataContext()

    def test_tracker_speculate(self, tracker, make_observation):
        series = [make_observation(temperature=-8.0, precipitation=20.0, offset=i) for i in range(3)]
        run = tracker.speculate("ALETSCH", series, scenario_context("Ice Age"))
        assert run.state.state == "Advancing"
        assert tracker.model("ALETSCH").get_history() == []
