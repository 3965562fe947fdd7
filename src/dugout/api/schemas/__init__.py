"""Pydantic models for API I/O."""

from .admin import (
    AdminResult,
    GameEntryRequest,
    PlayerEditsRequest,
    RosterRebuildRequest,
    SeasonSwitchRequest,
)
from .roster import (
    GameLineResponse,
    GameResponse,
    PlayerResponse,
    RosterResponse,
    StatLineResponse,
)
from .trophies import TrophyListResponse, TrophyPlayer, TrophyResponse

__all__ = [
    "AdminResult",
    "GameEntryRequest",
    "GameLineResponse",
    "GameResponse",
    "PlayerEditsRequest",
    "PlayerResponse",
    "RosterRebuildRequest",
    "RosterResponse",
    "SeasonSwitchRequest",
    "StatLineResponse",
    "TrophyListResponse",
    "TrophyPlayer",
    "TrophyResponse",
]
