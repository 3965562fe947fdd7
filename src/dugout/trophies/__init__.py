"""Trophy catalog and unique-winner allocation."""

from .allocator import (
    Candidate,
    TrophyAward,
    allocate_trophies,
    build_candidate,
    compute_trophies,
    pick_unique_winner,
    rank_candidates,
)
from .catalog import MIN_QUALIFIER, TROPHY_CATALOG, TrophyDefinition, get_trophy, iter_trophies

__all__ = [
    "MIN_QUALIFIER",
    "TROPHY_CATALOG",
    "Candidate",
    "TrophyAward",
    "TrophyDefinition",
    "allocate_trophies",
    "build_candidate",
    "compute_trophies",
    "get_trophy",
    "iter_trophies",
    "pick_unique_winner",
    "rank_candidates",
]
