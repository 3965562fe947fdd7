from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel

from dugout.models import BattingStats, SeasonMeta


class StatLineResponse(BaseModel):
    avg: float
    obp: float
    slg: float
    ops: float
    avg_display: str
    obp_display: str
    slg_display: str
    ops_display: str


class PlayerResponse(BaseModel):
    id: str
    name: str
    number: int
    primary_pos: Optional[str] = None
    shirt_size: Optional[str] = None
    stats: BattingStats
    line: StatLineResponse
    leader_keys: List[str]


class RosterResponse(BaseModel):
    season_id: str
    meta: SeasonMeta
    stats_started: bool
    players: List[PlayerResponse]
    leaders: Dict[str, List[str]]


class GameLineResponse(BaseModel):
    player_id: str
    name: str
    number: int
    delta: Dict[str, int]


class GameResponse(BaseModel):
    game_id: str
    date: str
    opponent: str
    result: str
    score_us: int
    score_them: int
    lines: List[GameLineResponse]
