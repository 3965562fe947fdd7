"""Who is tied for the team lead in each tracked statistic."""

from __future__ import annotations

import math
from typing import Callable, Dict, List, Literal, Sequence

from dugout.models import Player

from .engine import batting_average, on_base_percentage, ops, plate_appearances, slugging


StatKey = Literal["avg", "obp", "slg", "ops", "hits", "at_bats", "rbi", "runs"]
LeadersMap = Dict[str, List[str]]

STAT_KEYS: tuple[str, ...] = ("avg", "obp", "slg", "ops", "hits", "at_bats", "rbi", "runs")
RATE_KEYS: frozenset[str] = frozenset({"avg", "obp", "slg", "ops"})

# Half a point at three-decimal display precision.
RATE_TOLERANCE = 0.0005

_STAT_VALUE: dict[str, Callable[[Player], float]] = {
    "avg": batting_average,
    "obp": on_base_percentage,
    "slg": slugging,
    "ops": ops,
    "hits": lambda p: p.stats.hits,
    "at_bats": lambda p: p.stats.at_bats,
    "rbi": lambda p: p.stats.rbi,
    "runs": lambda p: p.stats.runs,
}


def stat_value(p: Player, key: str) -> float:
    try:
        getter = _STAT_VALUE[key]
    except KeyError:
        raise KeyError(f"Unknown stat key {key!r}") from None
    return getter(p)


def is_rate(key: str) -> bool:
    return key in RATE_KEYS


def is_eligible(p: Player, key: str) -> bool:
    """Rate stats need a non-zero denominator; counting stats take everyone."""

    if key == "obp":
        return plate_appearances(p) > 0
    if key in RATE_KEYS:
        return p.stats.at_bats > 0
    return True


def leaders_for(players: Sequence[Player], key: str) -> List[str]:
    eligible = [p for p in players if is_eligible(p, key)]
    if not eligible:
        return []

    values = [(p, stat_value(p, key)) for p in eligible]
    best = max(value for _, value in values)
    # A zero never leads; an all-zero roster has no leaders.
    if best <= 0:
        return []

    if is_rate(key):
        return [p.id for p, value in values if math.isclose(value, best, rel_tol=0.0, abs_tol=RATE_TOLERANCE)]
    return [p.id for p, value in values if value == best]


def compute_leaders(players: Sequence[Player]) -> LeadersMap:
    """Map every tracked stat key to the ids tied for the lead."""

    return {key: leaders_for(players, key) for key in STAT_KEYS}


def leader_keys_for(player_id: str, leaders: LeadersMap) -> List[str]:
    return [key for key in STAT_KEYS if player_id in leaders.get(key, [])]
