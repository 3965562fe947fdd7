"""Rate statistics derived from a player's counting stats.

Every function here is total: a zero denominator yields ``0`` rather than an
error, so callers that care about eligibility must check the counters
themselves.
"""

from __future__ import annotations

from dugout.models import Player, StatLine


CORE_BATTING_COUNTERS: tuple[str, ...] = (
    "at_bats",
    "hits",
    "doubles",
    "triples",
    "home_runs",
    "runs",
    "rbi",
    "walks",
    "hit_by_pitch",
)


def plate_appearances(p: Player) -> int:
    """AB + BB + HBP, the OBP denominator."""

    s = p.stats
    return s.at_bats + s.walks + s.hit_by_pitch


def times_on_base(p: Player) -> int:
    s = p.stats
    return s.hits + s.walks + s.hit_by_pitch


def batting_average(p: Player) -> float:
    ab = p.stats.at_bats
    if ab <= 0:
        return 0
    return p.stats.hits / ab


def on_base_percentage(p: Player) -> float:
    denom = plate_appearances(p)
    if denom <= 0:
        return 0
    return times_on_base(p) / denom


def total_bases(p: Player) -> int:
    s = p.stats
    # Extra-base hits above total hits would make singles negative.
    singles = max(0, s.hits - s.doubles - s.triples - s.home_runs)
    return singles + s.doubles * 2 + s.triples * 3 + s.home_runs * 4


def slugging(p: Player) -> float:
    ab = p.stats.at_bats
    if ab <= 0:
        return 0
    return total_bases(p) / ab


def ops(p: Player) -> float:
    return on_base_percentage(p) + slugging(p)


def fmt3(n: float) -> str:
    """Format a rate the baseball way: ``0.321`` -> ``.321``."""

    text = f"{n:.3f}"
    return text[1:] if text.startswith("0") else text


def stat_line(p: Player) -> StatLine:
    return StatLine(
        avg=batting_average(p),
        obp=on_base_percentage(p),
        slg=slugging(p),
        ops=ops(p),
    )


def has_any_recorded_stats(p: Player) -> bool:
    s = p.stats
    return any(getattr(s, name) != 0 for name in CORE_BATTING_COUNTERS)
