from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class TrophyPlayer(BaseModel):
    id: str
    name: str
    number: int


class TrophyResponse(BaseModel):
    key: str
    title: str
    subtitle: str
    winner: TrophyPlayer
    runner_up: Optional[TrophyPlayer] = None
    value_label: str
    value_sub: Optional[str] = None


class TrophyListResponse(BaseModel):
    season_id: str
    player_count: int
    catalog_size: int
    awards: List[TrophyResponse]
