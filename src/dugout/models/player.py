"""Canonical roster models shared across the store, stats engine and API."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


ShirtSize = Literal["YXS", "YS", "YM", "YL", "YXL", "AS", "AM", "AL", "AXL"]

SHIRT_SIZES: frozenset[str] = frozenset(
    {"YXS", "YS", "YM", "YL", "YXL", "AS", "AM", "AL", "AXL"}
)


class BattingStats(BaseModel):
    """Season counting stats. All counters only ever grow."""

    games: int = Field(default=0, ge=0)
    plate_appearances: int = Field(default=0, ge=0)
    at_bats: int = Field(default=0, ge=0)
    hits: int = Field(default=0, ge=0)
    doubles: int = Field(default=0, ge=0)
    triples: int = Field(default=0, ge=0)
    home_runs: int = Field(default=0, ge=0)
    runs: int = Field(default=0, ge=0)
    rbi: int = Field(default=0, ge=0)
    walks: int = Field(default=0, ge=0)
    strikeouts: int = Field(default=0, ge=0)
    hit_by_pitch: int = Field(default=0, ge=0)
    put_outs: int = Field(default=0, ge=0)
    assists: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)


class Player(BaseModel):
    """One roster entry for a season."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    number: int = Field(default=0, ge=0)
    primary_pos: Optional[str] = None
    shirt_size: Optional[ShirtSize] = None
    stats: BattingStats = Field(default_factory=BattingStats)

    model_config = ConfigDict(frozen=True)


class StatLine(BaseModel):
    avg: float
    obp: float
    slg: float
    ops: float

    model_config = ConfigDict(frozen=True)


class TeamRecord(BaseModel):
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    ties: Optional[int] = Field(default=None, ge=0)

    model_config = ConfigDict(frozen=True)


class SeasonMeta(BaseModel):
    team_name: str = "Tigers"
    season_label: str = "Spring 2026"
    league: str = "Mustang"
    record: TeamRecord = Field(default_factory=TeamRecord)

    model_config = ConfigDict(frozen=True)
