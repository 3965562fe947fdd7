"""Application settings resolved from ``DUGOUT_*`` environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path


logger = logging.getLogger(__name__)

_DB_PATH_ENV = "DUGOUT_DB_PATH"
_SEASON_ENV = "DUGOUT_DEFAULT_SEASON"
_TEAM_ENV = "DUGOUT_TEAM_NAME"
_SEASON_LABEL_ENV = "DUGOUT_SEASON_LABEL"
_LEAGUE_ENV = "DUGOUT_LEAGUE"
_GAMES_LIMIT_ENV = "DUGOUT_GAMES_LIMIT"

DEFAULT_SEASON_ID = "tigers-2026"
DEFAULT_DB_PATH = Path(__file__).resolve().parent.parent / "dugout.sqlite"

# Youth league divisions the season form offers.
LEAGUE_CHOICES: tuple[str, ...] = ("Pinto", "Mustang", "Bronco", "Pony", "Colt")


@dataclass(frozen=True)
class AppSettings:
    db_path: str
    default_season_id: str
    team_name: str
    season_label: str
    league: str
    games_limit: int


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def load_settings() -> AppSettings:
    """Read settings fresh from the environment."""

    league = _env_str(_LEAGUE_ENV, "Mustang")
    if league not in LEAGUE_CHOICES:
        logger.warning("Unknown league %s; expected one of %s", league, ", ".join(LEAGUE_CHOICES))
    return AppSettings(
        db_path=_env_str(_DB_PATH_ENV, str(DEFAULT_DB_PATH)),
        default_season_id=_env_str(_SEASON_ENV, DEFAULT_SEASON_ID),
        team_name=_env_str(_TEAM_ENV, "Tigers"),
        season_label=_env_str(_SEASON_LABEL_ENV, "Spring 2026"),
        league=league,
        games_limit=_env_int(_GAMES_LIMIT_ENV, 50, min_value=1),
    )
