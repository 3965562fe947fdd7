"""Coerce loosely typed stored documents into roster models.

These functions are total. Missing or malformed numeric fields become ``0``,
strings are trimmed, and a record without a usable name is dropped by
returning ``None``. Nothing downstream of this module has to defend against
bad shapes.
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, Mapping, Optional

from dugout.models import SHIRT_SIZES, BattingStats, Player, SeasonMeta, TeamRecord


logger = logging.getLogger(__name__)

# Stored documents use camelCase field names.
STAT_FIELD_ALIASES: dict[str, str] = {
    "games": "games",
    "plate_appearances": "plateAppearances",
    "at_bats": "atBats",
    "hits": "hits",
    "doubles": "doubles",
    "triples": "triples",
    "home_runs": "homeRuns",
    "runs": "runs",
    "rbi": "rbi",
    "walks": "walks",
    "strikeouts": "strikeouts",
    "hit_by_pitch": "hitByPitch",
    "put_outs": "putOuts",
    "assists": "assists",
}

_DEFAULT_META = SeasonMeta()


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _lookup(data: Mapping[str, Any], field: str, alias: str | None = None) -> Any:
    if alias is not None and alias in data:
        return data[alias]
    return data.get(field)


def as_int(value: Any) -> int:
    """Floor finite numbers; everything else (bools included) is 0."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return math.floor(value)


def as_count(value: Any) -> int:
    return max(0, as_int(value))


def as_non_empty_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def normalize_stats(raw: Any) -> BattingStats:
    data = _as_mapping(raw)
    return BattingStats(
        **{field: as_count(_lookup(data, field, alias)) for field, alias in STAT_FIELD_ALIASES.items()}
    )


def stats_to_document(stats: BattingStats) -> dict[str, int]:
    return {alias: getattr(stats, field) for field, alias in STAT_FIELD_ALIASES.items()}


def normalize_shirt_size(value: Any) -> Optional[str]:
    text = as_non_empty_str(value)
    return text if text in SHIRT_SIZES else None


def normalize_player(raw: Any, fallback_id: str) -> Optional[Player]:
    if not isinstance(raw, Mapping):
        return None

    raw_id = raw.get("id")
    player_id = raw_id if isinstance(raw_id, str) and raw_id else fallback_id
    name = raw.get("name").strip() if isinstance(raw.get("name"), str) else ""
    if not name or not player_id:
        return None

    return Player(
        id=player_id,
        name=name,
        number=as_count(raw.get("number")),
        primary_pos=as_non_empty_str(_lookup(raw, "primary_pos", "primaryPos")),
        shirt_size=normalize_shirt_size(_lookup(raw, "shirt_size", "shirtSize")),
        stats=normalize_stats(raw.get("stats")),
    )


def normalize_players(docs: Mapping[str, Any]) -> List[Player]:
    """Normalize ``{doc_id: document}``, dropping records that cannot be used."""

    players: List[Player] = []
    for doc_id, data in docs.items():
        player = normalize_player(data, doc_id)
        if player is None:
            logger.warning("Dropping malformed player record %s", doc_id)
            continue
        problems = validate_stat_line(player.stats)
        if problems:
            logger.warning("Player %s has inconsistent stats: %s", player.id, "; ".join(problems))
        players.append(player)
    return players


def normalize_record(raw: Any) -> TeamRecord:
    data = _as_mapping(raw)
    ties_raw = data.get("ties")
    ties: Optional[int] = None
    if isinstance(ties_raw, (int, float)) and not isinstance(ties_raw, bool) and math.isfinite(ties_raw):
        ties = max(0, math.floor(ties_raw))
    return TeamRecord(wins=as_count(data.get("wins")), losses=as_count(data.get("losses")), ties=ties)


def normalize_meta(raw: Any) -> SeasonMeta:
    data = _as_mapping(raw)
    return SeasonMeta(
        team_name=as_non_empty_str(_lookup(data, "team_name", "teamName")) or _DEFAULT_META.team_name,
        season_label=as_non_empty_str(_lookup(data, "season_label", "seasonLabel")) or _DEFAULT_META.season_label,
        league=as_non_empty_str(data.get("league")) or _DEFAULT_META.league,
        record=normalize_record(data.get("record")),
    )


def validate_stat_line(stats: BattingStats) -> List[str]:
    """Describe integrity problems the stats engine would otherwise mask."""

    problems: List[str] = []
    extra_base = stats.doubles + stats.triples + stats.home_runs
    if extra_base > stats.hits:
        problems.append(f"extra-base hits ({extra_base}) exceed hits ({stats.hits})")
    if stats.hits > stats.at_bats:
        problems.append(f"hits ({stats.hits}) exceed at-bats ({stats.at_bats})")
    return problems
