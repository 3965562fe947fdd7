"""Persistence layer for seasons, rosters, games and the admin allowlist."""

from __future__ import annotations

import json
import logging
import os
import sqlite3
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator, List, Mapping, Optional, Sequence

from dugout.ingest.normalize import (
    STAT_FIELD_ALIASES,
    as_count,
    normalize_meta,
    normalize_players,
    stats_to_document,
)
from dugout.models import Player, SeasonMeta


logger = logging.getLogger(__name__)

DELTA_FIELDS: tuple[str, ...] = (
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

GAME_RESULTS = {"W": "wins", "L": "losses", "T": "ties"}


@dataclass
class GameLine:
    player_id: str
    name: str
    number: int
    delta: dict


@dataclass
class GameRecord:
    game_id: str
    season_id: str
    date: str
    opponent: str
    result: str
    score_us: int
    score_them: int
    created_at: datetime
    lines: List[GameLine] = field(default_factory=list)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SeasonStore:
    """SQLite-backed document store for the team site.

    Player and season documents are kept as JSON in the same camelCase shape
    the hosted store used, and every read goes back through
    :mod:`dugout.ingest.normalize`.
    """

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        env_db = os.getenv("DUGOUT_DB_PATH")
        if env_db:
            if env_db.startswith("file:"):
                self.db_path = env_db
                self._use_uri = True
            else:
                self.db_path = Path(env_db)
        elif isinstance(db_path, str) and db_path.startswith("file:"):
            self.db_path = db_path
            self._use_uri = True
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        try:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                conn = sqlite3.connect(self.db_path)
            else:
                conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        except sqlite3.OperationalError:
            fallback_dir = Path(tempfile.gettempdir()) / "dugout-runtime"
            fallback_dir.mkdir(parents=True, exist_ok=True)
            fallback = fallback_dir / "dugout.sqlite"
            logger.warning("Could not open %s; falling back to %s", self.db_path, fallback)
            conn = sqlite3.connect(fallback)
            self.db_path = fallback
            self._use_uri = False
            self._create_schema(conn)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _session(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection inside a transaction and close it afterwards."""

        conn = self._connect()
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._session() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS app_config (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS seasons (
                id TEXT PRIMARY KEY,
                doc_json TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS players (
                season_id TEXT NOT NULL,
                id TEXT NOT NULL,
                doc_json TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                PRIMARY KEY (season_id, id)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS games (
                season_id TEXT NOT NULL,
                id TEXT NOT NULL,
                date TEXT NOT NULL,
                opponent TEXT NOT NULL,
                result TEXT NOT NULL,
                score_us INTEGER NOT NULL,
                score_them INTEGER NOT NULL,
                created_at TEXT NOT NULL,
                PRIMARY KEY (season_id, id)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS game_lines (
                season_id TEXT NOT NULL,
                game_id TEXT NOT NULL,
                player_id TEXT NOT NULL,
                name TEXT NOT NULL,
                number INTEGER NOT NULL,
                delta_json TEXT NOT NULL,
                PRIMARY KEY (season_id, game_id, player_id)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS admins (
                uid TEXT PRIMARY KEY,
                email TEXT,
                created_at TEXT NOT NULL
            )
            """
        )
        conn.commit()

    # -- app config -------------------------------------------------------

    def get_current_season_id(self) -> Optional[str]:
        with self._session() as conn:
            row = conn.execute(
                "SELECT value FROM app_config WHERE key = 'currentSeasonId'"
            ).fetchone()
        if row is None:
            return None
        value = str(row["value"]).strip()
        return value or None

    def set_current_season_id(self, season_id: str) -> None:
        sid = season_id.strip()
        if not sid:
            raise ValueError("seasonId is required")
        with self._session() as conn:
            conn.execute(
                """
                INSERT INTO app_config (key, value, updated_at) VALUES ('currentSeasonId', ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (sid, _now().isoformat()),
            )
            conn.commit()

    # -- seasons ----------------------------------------------------------

    def _load_season_doc(self, conn: sqlite3.Connection, season_id: str) -> Optional[dict]:
        row = conn.execute("SELECT doc_json FROM seasons WHERE id = ?", (season_id,)).fetchone()
        if row is None:
            return None
        try:
            data = json.loads(row["doc_json"])
        except json.JSONDecodeError:
            logger.warning("Season %s has an unreadable document", season_id)
            return {}
        return data if isinstance(data, dict) else {}

    def _write_season_doc(self, conn: sqlite3.Connection, season_id: str, doc: Mapping[str, Any]) -> None:
        now = _now().isoformat()
        conn.execute(
            """
            INSERT INTO seasons (id, doc_json, created_at, updated_at) VALUES (?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET doc_json = excluded.doc_json, updated_at = excluded.updated_at
            """,
            (season_id, json.dumps(dict(doc)), now, now),
        )

    def get_meta(self, season_id: str) -> SeasonMeta:
        with self._session() as conn:
            doc = self._load_season_doc(conn, season_id)
        return normalize_meta(doc)

    def season_exists(self, season_id: str) -> bool:
        with self._session() as conn:
            row = conn.execute("SELECT 1 FROM seasons WHERE id = ?", (season_id,)).fetchone()
        return row is not None

    def upsert_season(self, season_id: str, patch: Mapping[str, Any]) -> None:
        """Merge ``patch`` into the season document, creating it if needed."""

        with self._session() as conn:
            doc = self._load_season_doc(conn, season_id) or {}
            doc.update(patch)
            self._write_season_doc(conn, season_id, doc)
            conn.commit()

    # -- players ----------------------------------------------------------

    def _player_docs(self, conn: sqlite3.Connection, season_id: str) -> dict[str, Any]:
        rows = conn.execute(
            "SELECT id, doc_json FROM players WHERE season_id = ? ORDER BY id",
            (season_id,),
        ).fetchall()
        docs: dict[str, Any] = {}
        for row in rows:
            try:
                docs[row["id"]] = json.loads(row["doc_json"])
            except json.JSONDecodeError:
                docs[row["id"]] = None
        return docs

    def _write_player_doc(self, conn: sqlite3.Connection, season_id: str, player_id: str, doc: Mapping[str, Any]) -> None:
        now = _now().isoformat()
        conn.execute(
            """
            INSERT INTO players (season_id, id, doc_json, created_at, updated_at) VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(season_id, id) DO UPDATE SET doc_json = excluded.doc_json, updated_at = excluded.updated_at
            """,
            (season_id, player_id, json.dumps(dict(doc)), now, now),
        )

    def list_players(self, season_id: str) -> List[Player]:
        with self._session() as conn:
            docs = self._player_docs(conn, season_id)
        return normalize_players(docs)

    def get_player(self, season_id: str, player_id: str) -> Optional[Player]:
        return next((p for p in self.list_players(season_id) if p.id == player_id), None)

    def replace_roster(self, season_id: str, players: Sequence[Player]) -> None:
        """Delete every player in the season, insert ``players`` and reset the record."""

        with self._session() as conn:
            conn.execute("DELETE FROM players WHERE season_id = ?", (season_id,))
            for player in players:
                self._write_player_doc(conn, season_id, player.id, player_to_document(player))
            doc = self._load_season_doc(conn, season_id) or {}
            doc["record"] = {"wins": 0, "losses": 0, "ties": 0}
            self._write_season_doc(conn, season_id, doc)
            conn.commit()
        logger.info("Rebuilt roster for %s with %d players", season_id, len(players))

    def update_players(self, season_id: str, updates: Mapping[str, Mapping[str, Any]]) -> int:
        """Merge field updates into existing player documents; returns rows written."""

        wrote = 0
        with self._session() as conn:
            docs = self._player_docs(conn, season_id)
            for player_id, patch in updates.items():
                doc = docs.get(player_id)
                if not isinstance(doc, dict):
                    raise KeyError(f"Player {player_id!r} not found in season {season_id!r}")
                doc.update(patch)
                self._write_player_doc(conn, season_id, player_id, doc)
                wrote += 1
            conn.commit()
        return wrote

    # -- games ------------------------------------------------------------

    def record_game(self, game: GameRecord) -> None:
        """Store a game, bump the season record and add each line's deltas.

        All writes share one transaction so a failure leaves nothing behind.
        """

        record_field = GAME_RESULTS.get(game.result)
        if record_field is None:
            raise ValueError(f"Unknown game result {game.result!r}")

        with self._session() as conn:
            conn.execute(
                """
                INSERT INTO games (season_id, id, date, opponent, result, score_us, score_them, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    game.season_id,
                    game.game_id,
                    game.date,
                    game.opponent,
                    game.result,
                    game.score_us,
                    game.score_them,
                    game.created_at.isoformat(),
                ),
            )

            season_doc = self._load_season_doc(conn, game.season_id) or {}
            record = dict(season_doc.get("record") or {})
            record[record_field] = as_count(record.get(record_field)) + 1
            season_doc["record"] = record
            self._write_season_doc(conn, game.season_id, season_doc)

            docs = self._player_docs(conn, game.season_id)
            for line in game.lines:
                conn.execute(
                    """
                    INSERT INTO game_lines (season_id, game_id, player_id, name, number, delta_json)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (game.season_id, game.game_id, line.player_id, line.name, line.number, json.dumps(line.delta)),
                )
                doc = docs.get(line.player_id)
                if not isinstance(doc, dict):
                    logger.warning("Game %s has a line for unknown player %s", game.game_id, line.player_id)
                    continue
                doc["stats"] = apply_delta(doc.get("stats"), line.delta)
                self._write_player_doc(conn, game.season_id, line.player_id, doc)
            conn.commit()
        logger.info(
            "Recorded game %s (%s vs %s) with %d lines",
            game.game_id,
            game.result,
            game.opponent,
            len(game.lines),
        )

    def list_games(self, season_id: str, limit: int = 50) -> List[GameRecord]:
        with self._session() as conn:
            rows = conn.execute(
                "SELECT * FROM games WHERE season_id = ? ORDER BY date DESC, datetime(created_at) DESC LIMIT ?",
                (season_id, limit),
            ).fetchall()
            return [self._row_to_game(conn, row) for row in rows]

    def get_game(self, season_id: str, game_id: str) -> Optional[GameRecord]:
        with self._session() as conn:
            row = conn.execute(
                "SELECT * FROM games WHERE season_id = ? AND id = ?",
                (season_id, game_id),
            ).fetchone()
            if row is None:
                return None
            return self._row_to_game(conn, row)

    def _row_to_game(self, conn: sqlite3.Connection, row: sqlite3.Row) -> GameRecord:
        line_rows = conn.execute(
            "SELECT * FROM game_lines WHERE season_id = ? AND game_id = ? ORDER BY player_id",
            (row["season_id"], row["id"]),
        ).fetchall()
        return GameRecord(
            game_id=row["id"],
            season_id=row["season_id"],
            date=row["date"],
            opponent=row["opponent"],
            result=row["result"],
            score_us=row["score_us"],
            score_them=row["score_them"],
            created_at=datetime.fromisoformat(row["created_at"]),
            lines=[
                GameLine(
                    player_id=line["player_id"],
                    name=line["name"],
                    number=line["number"],
                    delta=json.loads(line["delta_json"]),
                )
                for line in line_rows
            ],
        )

    # -- admins -----------------------------------------------------------

    def is_admin(self, uid: str) -> bool:
        if not uid:
            return False
        with self._session() as conn:
            row = conn.execute("SELECT 1 FROM admins WHERE uid = ?", (uid,)).fetchone()
        return row is not None

    def add_admin(self, uid: str, email: Optional[str] = None) -> None:
        uid = uid.strip()
        if not uid:
            raise ValueError("uid is required")
        with self._session() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO admins (uid, email, created_at) VALUES (?, ?, ?)",
                (uid, email, _now().isoformat()),
            )
            conn.commit()

    def remove_admin(self, uid: str) -> bool:
        with self._session() as conn:
            cur = conn.execute("DELETE FROM admins WHERE uid = ?", (uid,))
            conn.commit()
            return cur.rowcount > 0

    def list_admins(self) -> List[str]:
        with self._session() as conn:
            rows = conn.execute("SELECT uid FROM admins ORDER BY uid").fetchall()
        return [row["uid"] for row in rows]


def player_to_document(player: Player) -> dict[str, Any]:
    doc: dict[str, Any] = {
        "id": player.id,
        "name": player.name,
        "number": player.number,
        "stats": stats_to_document(player.stats),
    }
    if player.primary_pos:
        doc["primaryPos"] = player.primary_pos
    if player.shirt_size:
        doc["shirtSize"] = player.shirt_size
    return doc


def apply_delta(stats_doc: Any, delta: Mapping[str, Any]) -> dict[str, int]:
    """Add a game line to a stored stats document.

    A line counts as one game played and adds AB + BB + HBP to plate
    appearances.
    """

    stats = dict(stats_doc) if isinstance(stats_doc, Mapping) else {}
    for name in DELTA_FIELDS:
        alias = STAT_FIELD_ALIASES[name]
        stats[alias] = as_count(stats.get(alias)) + as_count(delta.get(name))
    stats["games"] = as_count(stats.get("games")) + 1
    stats["plateAppearances"] = as_count(stats.get("plateAppearances")) + sum(
        as_count(delta.get(name)) for name in ("at_bats", "walks", "hit_by_pitch")
    )
    return stats


__all__ = [
    "DELTA_FIELDS",
    "GAME_RESULTS",
    "GameLine",
    "GameRecord",
    "SeasonStore",
    "apply_delta",
    "player_to_document",
]
