"""Input adapters that normalize raw roster data."""

from .normalize import (
    normalize_meta,
    normalize_player,
    normalize_players,
    normalize_stats,
    stats_to_document,
    validate_stat_line,
)
from .roster_csv import DEFAULT_ROSTER_MAPPING, DraftPlayer, load_draft_csv

__all__ = [
    "DEFAULT_ROSTER_MAPPING",
    "DraftPlayer",
    "load_draft_csv",
    "normalize_meta",
    "normalize_player",
    "normalize_players",
    "normalize_stats",
    "stats_to_document",
    "validate_stat_line",
]
