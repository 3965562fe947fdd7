from __future__ import annotations

from typing import Dict, List, Literal

from pydantic import BaseModel, Field

from dugout.admin import LineState, PlayerEdit
from dugout.ingest import DraftPlayer


class SeasonSwitchRequest(BaseModel):
    season_id: str
    team_name: str = ""
    season_label: str = ""
    league: str = ""


class RosterRebuildRequest(BaseModel):
    players: List[DraftPlayer] = Field(default_factory=list)


class PlayerEditsRequest(BaseModel):
    edits: Dict[str, PlayerEdit] = Field(default_factory=dict)


class GameEntryRequest(BaseModel):
    date: str
    opponent: str
    result: Literal["W", "L", "T"] = "W"
    score_us: str = "0"
    score_them: str = "0"
    lines: Dict[str, LineState] = Field(default_factory=dict)


class AdminResult(BaseModel):
    season_id: str
    message: str
    count: int = 0
