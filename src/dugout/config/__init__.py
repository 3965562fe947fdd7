"""Configuration helpers for seasons and the application."""

from .settings import (
    DEFAULT_DB_PATH,
    DEFAULT_SEASON_ID,
    LEAGUE_CHOICES,
    AppSettings,
    load_settings,
)

__all__ = [
    "DEFAULT_DB_PATH",
    "DEFAULT_SEASON_ID",
    "LEAGUE_CHOICES",
    "AppSettings",
    "load_settings",
]
