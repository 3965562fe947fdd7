"""The fixed, priority-ordered trophy catalog.

Rate-based awards come first so the prestige trophies resolve before the
counting-stat ones. Each entry is plain data consumed by
:func:`dugout.trophies.allocator.allocate_trophies`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple

from dugout.models import Player
from dugout.stats import (
    batting_average,
    fmt3,
    on_base_percentage,
    ops,
    plate_appearances,
    slugging,
    times_on_base,
)


MIN_QUALIFIER = 10

Accessor = Callable[[Player], float]
Formatter = Callable[[Player], Tuple[str, Optional[str]]]


@dataclass(frozen=True)
class TrophyDefinition:
    key: str
    title: str
    subtitle: str
    score: Accessor
    tie_breaks: Tuple[Accessor, Accessor, Accessor]
    format_value: Formatter
    qualifies: Optional[Callable[[Player], bool]] = None


def _at_bats(p: Player) -> int:
    return p.stats.at_bats


def _games(p: Player) -> int:
    return p.stats.games


def _hits(p: Player) -> int:
    return p.stats.hits


def _min_at_bats(p: Player) -> bool:
    return p.stats.at_bats >= MIN_QUALIFIER


def _min_plate_appearances(p: Player) -> bool:
    return plate_appearances(p) >= MIN_QUALIFIER


def _counter(field: str, sub: str) -> tuple[Accessor, Formatter]:
    def score(p: Player) -> int:
        return getattr(p.stats, field)

    def format_value(p: Player) -> tuple[str, Optional[str]]:
        return str(getattr(p.stats, field)), sub

    return score, format_value


_rbi, _rbi_label = _counter("rbi", "Runs batted in")
_runs, _runs_label = _counter("runs", "Runs scored")
_hits_score, _hits_label = _counter("hits", "Total hits")
_games_score, _games_label = _counter("games", "Games played")
_put_outs, _put_outs_label = _counter("put_outs", "Put outs (PO)")
_assists, _assists_label = _counter("assists", "Assists (A)")
_walks, _walks_label = _counter("walks", "Walks (BB)")
_hbp, _hbp_label = _counter("hit_by_pitch", "Hit by pitch (HBP)")


TROPHY_CATALOG: Tuple[TrophyDefinition, ...] = (
    TrophyDefinition(
        key="batting_champ",
        title="Batting Champ",
        subtitle=f"Highest batting average (min {MIN_QUALIFIER} AB)",
        score=batting_average,
        tie_breaks=(_at_bats, plate_appearances, _games),
        format_value=lambda p: (fmt3(batting_average(p)), f"{p.stats.hits} H / {p.stats.at_bats} AB"),
        qualifies=_min_at_bats,
    ),
    TrophyDefinition(
        key="on_base_king",
        title="On-Base King",
        subtitle=f"Highest OBP (min {MIN_QUALIFIER} PA)",
        score=on_base_percentage,
        tie_breaks=(plate_appearances, times_on_base, _games),
        format_value=lambda p: (
            fmt3(on_base_percentage(p)),
            f"{times_on_base(p)} on base / {plate_appearances(p)} PA",
        ),
        qualifies=_min_plate_appearances,
    ),
    TrophyDefinition(
        key="slugger",
        title="Slugger",
        subtitle=f"Highest slugging (min {MIN_QUALIFIER} AB)",
        score=slugging,
        tie_breaks=(_at_bats, _hits, _games),
        format_value=lambda p: (
            fmt3(slugging(p)),
            f"2B {p.stats.doubles} • 3B {p.stats.triples} • HR {p.stats.home_runs}",
        ),
        qualifies=_min_at_bats,
    ),
    TrophyDefinition(
        key="ops_star",
        title="OPS Star",
        subtitle=f"Best all-around hitter (min {MIN_QUALIFIER} PA)",
        score=ops,
        tie_breaks=(plate_appearances, _at_bats, _games),
        format_value=lambda p: (
            fmt3(ops(p)),
            f"OBP {fmt3(on_base_percentage(p))} + SLG {fmt3(slugging(p))}",
        ),
        qualifies=_min_plate_appearances,
    ),
    TrophyDefinition(
        key="rbi_producer",
        title="RBI Producer",
        subtitle="Most RBIs",
        score=_rbi,
        tie_breaks=(_hits, plate_appearances, _games),
        format_value=_rbi_label,
    ),
    TrophyDefinition(
        key="run_machine",
        title="Run Machine",
        subtitle="Most runs scored",
        score=_runs,
        tie_breaks=(times_on_base, plate_appearances, _games),
        format_value=_runs_label,
    ),
    TrophyDefinition(
        key="hit_leader",
        title="Hit Leader",
        subtitle="Most hits",
        score=_hits_score,
        tie_breaks=(_at_bats, lambda p: p.stats.runs, _games),
        format_value=_hits_label,
    ),
    TrophyDefinition(
        key="iron_tiger",
        title="Iron Tiger",
        subtitle="Most games played",
        score=_games_score,
        tie_breaks=(plate_appearances, _at_bats, _hits),
        format_value=_games_label,
    ),
    TrophyDefinition(
        key="gold_glove",
        title="Gold Glove",
        subtitle="Most put outs (PO)",
        score=_put_outs,
        tie_breaks=(lambda p: p.stats.assists, _games, plate_appearances),
        format_value=_put_outs_label,
    ),
    TrophyDefinition(
        key="cannon_arm",
        title="Cannon Arm",
        subtitle="Most assists (A)",
        score=_assists,
        tie_breaks=(lambda p: p.stats.put_outs, _games, plate_appearances),
        format_value=_assists_label,
    ),
    TrophyDefinition(
        key="walk_wizard",
        title="Walk Wizard",
        subtitle="Most walks (BB)",
        score=_walks,
        tie_breaks=(plate_appearances, _hits, _games),
        format_value=_walks_label,
    ),
    TrophyDefinition(
        key="brick_wall",
        title="The Brick Wall",
        subtitle="Most hit by pitch (HBP)",
        score=_hbp,
        tie_breaks=(plate_appearances, _games, lambda p: p.stats.walks),
        format_value=_hbp_label,
    ),
)

_CATALOG_BY_KEY = {trophy.key: trophy for trophy in TROPHY_CATALOG}


def iter_trophies() -> Iterable[TrophyDefinition]:
    """Return the catalog in allocation order."""

    return iter(TROPHY_CATALOG)


def get_trophy(key: str) -> TrophyDefinition:
    """Fetch a catalog entry, raising KeyError if missing."""

    if key not in _CATALOG_BY_KEY:
        raise KeyError(f"No trophy configured for key={key!r}")
    return _CATALOG_BY_KEY[key]
