"""Admin console operations: roster builder, player edits, game entry."""

from .actions import (
    AdminActionError,
    build_roster,
    check_allowlist,
    rebuild_roster,
    save_game_and_apply_deltas,
    save_player_edits,
    switch_season,
)
from .helpers import (
    GameResult,
    LineDelta,
    LineState,
    PlayerEdit,
    any_non_zero,
    game_id_for,
    num,
    parse_optional_int,
    player_id_from_draft,
    slugify,
    today_iso,
)

__all__ = [
    "AdminActionError",
    "GameResult",
    "LineDelta",
    "LineState",
    "PlayerEdit",
    "any_non_zero",
    "build_roster",
    "check_allowlist",
    "game_id_for",
    "num",
    "parse_optional_int",
    "player_id_from_draft",
    "rebuild_roster",
    "save_game_and_apply_deltas",
    "save_player_edits",
    "slugify",
    "switch_season",
    "today_iso",
]
