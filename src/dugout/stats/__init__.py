"""Derived batting statistics and leaderboards."""

from .engine import (
    CORE_BATTING_COUNTERS,
    batting_average,
    fmt3,
    has_any_recorded_stats,
    on_base_percentage,
    ops,
    plate_appearances,
    slugging,
    stat_line,
    times_on_base,
    total_bases,
)
from .leaders import (
    RATE_TOLERANCE,
    STAT_KEYS,
    LeadersMap,
    StatKey,
    compute_leaders,
    is_eligible,
    leader_keys_for,
    leaders_for,
    stat_value,
)

__all__ = [
    "CORE_BATTING_COUNTERS",
    "RATE_TOLERANCE",
    "STAT_KEYS",
    "LeadersMap",
    "StatKey",
    "batting_average",
    "compute_leaders",
    "fmt3",
    "has_any_recorded_stats",
    "is_eligible",
    "leader_keys_for",
    "leaders_for",
    "on_base_percentage",
    "ops",
    "plate_appearances",
    "slugging",
    "stat_line",
    "stat_value",
    "times_on_base",
    "total_bases",
]
