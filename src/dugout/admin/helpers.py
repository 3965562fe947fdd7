"""Parsing helpers shared by the admin console forms."""

from __future__ import annotations

import math
import re
from datetime import date
from typing import Literal, Mapping

from pydantic import BaseModel, Field

from dugout.ingest.roster_csv import DraftPlayer
from dugout.persistence import DELTA_FIELDS


GameResult = Literal["W", "L", "T"]


class LineDelta(BaseModel):
    """One player's batting line from a single game."""

    at_bats: int = Field(default=0, ge=0)
    hits: int = Field(default=0, ge=0)
    doubles: int = Field(default=0, ge=0)
    triples: int = Field(default=0, ge=0)
    home_runs: int = Field(default=0, ge=0)
    runs: int = Field(default=0, ge=0)
    rbi: int = Field(default=0, ge=0)
    walks: int = Field(default=0, ge=0)
    hit_by_pitch: int = Field(default=0, ge=0)


class LineState(BaseModel):
    hidden: bool = False
    delta: LineDelta = Field(default_factory=LineDelta)


class PlayerEdit(BaseModel):
    name: str
    number: str = ""
    shirt_size: str = ""
    dirty: bool = True


def any_non_zero(delta: LineDelta | Mapping[str, int]) -> bool:
    values = delta if isinstance(delta, Mapping) else delta.model_dump()
    return any(values.get(name, 0) != 0 for name in DELTA_FIELDS)


def num(text: str) -> float:
    raw = text.strip()
    if not raw:
        return 0
    try:
        value = float(raw)
    except ValueError:
        return 0
    return value if math.isfinite(value) else 0


def parse_optional_int(text: str) -> int:
    """Blank or junk input is 0; otherwise floor and clamp at 0."""

    value = num(text)
    return max(0, math.floor(value))


def slugify(text: str) -> str:
    slug = text.lower().strip()
    slug = re.sub(r"['\"]", "", slug)
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def player_id_from_draft(draft: DraftPlayer, idx: int) -> str:
    name_slug = slugify(draft.name) or f"player-{idx + 1}"
    number = parse_optional_int(draft.number)
    if number > 0:
        return f"{number:02d}-{name_slug}"
    return f"p{idx + 1:02d}-{name_slug}"


def game_id_for(game_date: str, opponent: str, now_ms: int) -> str:
    return f"{game_date.replace('-', '')}-{slugify(opponent)}-{now_ms}"


def today_iso() -> str:
    return date.today().isoformat()
