"""
config/settings.py
──────────────────
Runtime configuration loaded from environment variables.
"""
import logging
import os
from dataclasses import dataclass


@dataclass
class Settings:
    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Live data older than this is flagged stale before diagnostics read it
    STALE_AFTER_HOURS: float = float(os.getenv("STALE_AFTER_HOURS", "2.0"))

    # Health index below which a glacier is considered collapsed
    COLLAPSE_THRESHOLD: float = float(os.getenv("COLLAPSE_THRESHOLD", "40.0"))


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Apply LOG_LEVEL (or an explicit override) to the root logger."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
