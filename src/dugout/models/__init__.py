"""Roster and season data models."""

from .player import (
    SHIRT_SIZES,
    BattingStats,
    Player,
    SeasonMeta,
    ShirtSize,
    StatLine,
    TeamRecord,
)

__all__ = [
    "SHIRT_SIZES",
    "BattingStats",
    "Player",
    "SeasonMeta",
    "ShirtSize",
    "StatLine",
    "TeamRecord",
]
