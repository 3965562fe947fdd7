"""Assign the trophy catalog to unique winners."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Set

from dugout.models import Player

from .catalog import TROPHY_CATALOG, TrophyDefinition


logger = logging.getLogger(__name__)

# Score given to players below a trophy's minimum; they stay in the list
# so they can still surface as a runner-up.
UNQUALIFIED_SCORE = -1.0


@dataclass(frozen=True)
class Candidate:
    player: Player
    score: float
    t1: float
    t2: float
    t3: float


@dataclass(frozen=True)
class TrophyAward:
    trophy: TrophyDefinition
    winner: Player
    runner_up: Optional[Player]
    value_label: str
    value_sub: Optional[str] = None


def _safe(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def build_candidate(trophy: TrophyDefinition, player: Player) -> Candidate:
    if trophy.qualifies is not None and not trophy.qualifies(player):
        score = UNQUALIFIED_SCORE
    else:
        score = _safe(trophy.score(player))
    t1, t2, t3 = (_safe(tie_break(player)) for tie_break in trophy.tie_breaks)
    return Candidate(player=player, score=score, t1=t1, t2=t2, t3=t3)


def rank_candidates(trophy: TrophyDefinition, players: Iterable[Player]) -> List[Candidate]:
    """Best first: score, then t1..t3 descending, then name ascending."""

    candidates = [build_candidate(trophy, player) for player in players]
    return sorted(
        candidates,
        key=lambda c: (-c.score, -c.t1, -c.t2, -c.t3, c.player.name.casefold(), c.player.name),
    )


def pick_unique_winner(
    trophy: TrophyDefinition,
    players: Sequence[Player],
    already_won: Set[str],
) -> Optional[TrophyAward]:
    """Award ``trophy`` to the best player not in ``already_won``.

    ``already_won`` is updated in place with the winner's id. Returns ``None``
    when every player has already won something.
    """

    ranked = rank_candidates(trophy, players)

    winner = next((c for c in ranked if c.player.id not in already_won), None)
    if winner is None:
        return None
    already_won.add(winner.player.id)

    others = [c for c in ranked if c.player.id != winner.player.id]
    runner_up = next((c for c in others if c.player.id not in already_won), None)
    if runner_up is None and others:
        runner_up = others[0]

    value_label, value_sub = trophy.format_value(winner.player)
    return TrophyAward(
        trophy=trophy,
        winner=winner.player,
        runner_up=runner_up.player if runner_up is not None else None,
        value_label=value_label,
        value_sub=value_sub,
    )


def allocate_trophies(
    players: Sequence[Player],
    catalog: Sequence[TrophyDefinition] = TROPHY_CATALOG,
) -> List[TrophyAward]:
    """Resolve ``catalog`` in order, giving each player at most one trophy.

    Trophies left over once every player has won are dropped, so a roster
    smaller than the catalog gets fewer awards.
    """

    roster = sorted(players, key=lambda p: (p.name.casefold(), p.name))
    if not roster:
        return []

    won: Set[str] = set()
    awards: List[TrophyAward] = []
    for trophy in catalog:
        award = pick_unique_winner(trophy, roster, won)
        if award is None:
            logger.debug("No remaining winner for trophy %s", trophy.key)
            continue
        awards.append(award)
    return awards


def compute_trophies(players: Sequence[Player]) -> List[TrophyAward]:
    return allocate_trophies(players, TROPHY_CATALOG)
