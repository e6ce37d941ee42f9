"""
config/glaciers.py
──────────────────
Mass-balance defaults and the registry of tracked glaciers.

Mass-balance heuristic (per daily observation):
  accumulation = precipitation × accumulation_rate   if T ≤ 1 °C
  melt         = temperature   × melt_rate           if T > 0 °C
  sublimation  = wind_speed    × sublimation_rate    always
  daily_change = accumulation − melt − sublimation
"""
from dataclasses import dataclass, field

# ── Model invariants ──────────────────────────────────────────────────────────
HISTORY_LIMIT = 30              # entries kept, oldest evicted first
TREND_WINDOW_DAYS = 7
HEALTH_BOUNDS = (0.0, 200.0)
INITIAL_HEALTH = 100.0
DEFAULT_SOURCE = "Observed"

DEFAULT_PARAMETERS: dict[str, float] = {
    "accumulation_rate": 0.1,
    "melt_rate": 0.05,
    "sublimation_rate": 0.01,
    "advancing_threshold": 0.1,
    "receding_threshold": -0.1,
}


@dataclass(frozen=True)
class GlacierSite:
    """
    A tracked glacier.

    latitude, longitude and timezone are location metadata for the weather
    source that produces this site's DailyObservations; the mass-balance
    model never reads them. Callers get them back via GlacierTracker.site().
    """

    id: str
    name: str
    latitude: float
    longitude: float
    timezone: str = "auto"
    # Partial ModelParameters override applied at construction
    parameters: dict[str, float] = field(default_factory=dict)


# ── Glacier registry ──────────────────────────────────────────────────────────
GLACIER_CONFIG: dict[str, GlacierSite] = {
    "ALETSCH": GlacierSite(
        id="ALETSCH",
        name="Great Aletsch Glacier",
        latitude=46.50,
        longitude=8.03,
        timezone="Europe/Zurich",
    ),
    "ATHABASCA": GlacierSite(
        id="ATHABASCA",
        name="Athabasca Glacier",
        latitude=52.19,
        longitude=-117.25,
        timezone="America/Edmonton",
    ),
    "PERITO-MORENO": GlacierSite(
        id="PERITO-MORENO",
        name="Perito Moreno Glacier",
        latitude=-50.50,
        longitude=-73.05,
        timezone="America/Argentina/Rio_Gallegos",
        # Maritime glacier: heavier snowfall, faster surface melt
        parameters={"accumulation_rate": 0.12, "melt_rate": 0.06},
    ),
}

GLACIER_IDS = list(GLACIER_CONFIG.keys())
