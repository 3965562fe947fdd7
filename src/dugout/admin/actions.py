"""Coach-facing write operations against the season store."""

from __future__ import annotations

import logging
import time
from datetime import date as date_cls, datetime, timezone
from typing import Mapping, Sequence

from dugout.ingest.roster_csv import DraftPlayer
from dugout.models import BattingStats, Player
from dugout.persistence import GameLine, GameRecord, SeasonStore

from .helpers import (
    GameResult,
    LineState,
    PlayerEdit,
    any_non_zero,
    game_id_for,
    num,
    parse_optional_int,
    player_id_from_draft,
)


logger = logging.getLogger("uvicorn.error")


class AdminActionError(ValueError):
    """Raised with a message suitable for showing the coach."""


def check_allowlist(store: SeasonStore, uid: str) -> bool:
    return store.is_admin(uid)


def switch_season(
    store: SeasonStore,
    next_season_id: str,
    *,
    team_name: str = "",
    season_label: str = "",
    league: str = "",
    fallback_team_name: str = "",
) -> str:
    next_id = next_season_id.strip()
    if not next_id:
        raise AdminActionError("Season id is required.")

    patch = {
        "teamName": team_name.strip() or fallback_team_name or "Team",
        "seasonLabel": season_label.strip() or "Season",
        "record": {"wins": 0, "losses": 0, "ties": 0},
    }
    if league.strip():
        patch["league"] = league.strip()
    store.upsert_season(next_id, patch)
    store.set_current_season_id(next_id)
    logger.info("Switched current season to %s", next_id)
    return next_id


def save_player_edits(
    store: SeasonStore,
    season_id: str,
    players: Sequence[Player],
    edits: Mapping[str, PlayerEdit],
) -> int:
    if not players:
        raise AdminActionError("No players in roster.")

    updates: dict[str, dict] = {}
    for player in players:
        edit = edits.get(player.id)
        if edit is None or not edit.dirty:
            continue
        name = edit.name.strip()
        if not name:
            raise AdminActionError("Player name cannot be empty.")
        shirt_size = edit.shirt_size.strip()
        updates[player.id] = {
            "name": name,
            "number": parse_optional_int(edit.number),
            "shirtSize": shirt_size or None,
        }

    if not updates:
        raise AdminActionError("No changes to save.")

    return store.update_players(season_id, updates)


def build_roster(draft: Sequence[DraftPlayer]) -> list[Player]:
    """Turn roster-builder rows into fresh players with empty stats."""

    cleaned = [
        DraftPlayer(name=d.name.strip(), number=d.number.strip(), primary_pos=d.primary_pos.strip())
        for d in draft
    ]
    cleaned = [d for d in cleaned if d.name]
    if not cleaned:
        raise AdminActionError("Add at least one player name.")

    players: list[Player] = []
    seen: set[str] = set()
    for idx, d in enumerate(cleaned):
        base_id = player_id_from_draft(d, idx)
        player_id = base_id
        suffix = idx + 1
        while player_id in seen:
            player_id = f"{base_id}-{suffix}"
            suffix += 1
        seen.add(player_id)
        players.append(
            Player(
                id=player_id,
                name=d.name,
                number=parse_optional_int(d.number),
                primary_pos=d.primary_pos or None,
                stats=BattingStats(),
            )
        )
    return players


def rebuild_roster(store: SeasonStore, season_id: str, draft: Sequence[DraftPlayer]) -> int:
    players = build_roster(draft)
    store.replace_roster(season_id, players)
    return len(players)


def save_game_and_apply_deltas(
    store: SeasonStore,
    season_id: str,
    *,
    date: str,
    opponent: str,
    result: GameResult,
    score_us: str,
    score_them: str,
    players: Sequence[Player],
    lines: Mapping[str, LineState],
    now_ms: int | None = None,
) -> tuple[int, str]:
    opp = opponent.strip()
    if not opp:
        raise AdminActionError("Opponent is required.")
    try:
        date_cls.fromisoformat(date)
    except ValueError:
        raise AdminActionError(f"Invalid game date {date!r}; expected YYYY-MM-DD.") from None
    if result not in ("W", "L", "T"):
        raise AdminActionError(f"Unknown game result {result!r}.")

    game_lines: list[GameLine] = []
    for player in players:
        line = lines.get(player.id)
        if line is None or line.hidden or not any_non_zero(line.delta):
            continue
        game_lines.append(
            GameLine(
                player_id=player.id,
                name=player.name,
                number=player.number,
                delta=line.delta.model_dump(),
            )
        )

    if not game_lines:
        raise AdminActionError("No player stats were entered (everything is zero).")

    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    game = GameRecord(
        game_id=game_id_for(date, opp, stamp),
        season_id=season_id,
        date=date,
        opponent=opp,
        result=result,
        score_us=int(num(score_us)),
        score_them=int(num(score_them)),
        created_at=datetime.now(timezone.utc),
        lines=game_lines,
    )
    store.record_game(game)
    return len(game_lines), opp
