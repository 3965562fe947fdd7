"""Display order for the roster list."""

from __future__ import annotations

from typing import List, Sequence

from dugout.models import Player
from dugout.stats import batting_average, has_any_recorded_stats


def last_name(name: str) -> str:
    parts = name.split()
    return parts[-1] if parts else ""


def any_stats_recorded(players: Sequence[Player]) -> bool:
    return any(has_any_recorded_stats(p) for p in players)


def sort_roster(players: Sequence[Player]) -> List[Player]:
    """Alphabetical by last name before opening day, by AVG once games count."""

    if not any_stats_recorded(players):
        return sorted(players, key=lambda p: (last_name(p.name).casefold(), p.name.casefold(), p.name))
    return sorted(
        players,
        key=lambda p: (-batting_average(p), -p.stats.hits, -p.stats.rbi, p.name.casefold(), p.name),
    )
