"""REST API and server-rendered pages for the team site."""

from __future__ import annotations

import logging
from html import escape
from pathlib import Path
from typing import Optional, Sequence

from fastapi import Depends, FastAPI, Header, HTTPException, Query
from fastapi.responses import HTMLResponse

from dugout.admin import (
    AdminActionError,
    rebuild_roster,
    save_game_and_apply_deltas,
    save_player_edits,
    switch_season,
)
from dugout.api.schemas import (
    AdminResult,
    GameEntryRequest,
    GameLineResponse,
    GameResponse,
    PlayerEditsRequest,
    PlayerResponse,
    RosterRebuildRequest,
    RosterResponse,
    SeasonSwitchRequest,
    StatLineResponse,
    TrophyListResponse,
    TrophyPlayer,
    TrophyResponse,
)
from dugout.config import AppSettings, load_settings
from dugout.models import Player, SeasonMeta
from dugout.persistence import GameRecord, SeasonStore
from dugout.roster import any_stats_recorded, sort_roster
from dugout.stats import LeadersMap, compute_leaders, fmt3, leader_keys_for, stat_line
from dugout.trophies import TROPHY_CATALOG, TrophyAward, compute_trophies


logger = logging.getLogger("uvicorn.error")

STAT_LABELS: dict[str, str] = {
    "avg": "AVG",
    "obp": "OBP",
    "slg": "SLG",
    "ops": "OPS",
    "hits": "H",
    "at_bats": "AB",
    "rbi": "RBI",
    "runs": "R",
}


def _player_response(player: Player, leaders: LeadersMap) -> PlayerResponse:
    line = stat_line(player)
    return PlayerResponse(
        id=player.id,
        name=player.name,
        number=player.number,
        primary_pos=player.primary_pos,
        shirt_size=player.shirt_size,
        stats=player.stats,
        line=StatLineResponse(
            avg=line.avg,
            obp=line.obp,
            slg=line.slg,
            ops=line.ops,
            avg_display=fmt3(line.avg),
            obp_display=fmt3(line.obp),
            slg_display=fmt3(line.slg),
            ops_display=fmt3(line.ops),
        ),
        leader_keys=leader_keys_for(player.id, leaders),
    )


def _trophy_player(player: Player) -> TrophyPlayer:
    return TrophyPlayer(id=player.id, name=player.name, number=player.number)


def _award_response(award: TrophyAward) -> TrophyResponse:
    return TrophyResponse(
        key=award.trophy.key,
        title=award.trophy.title,
        subtitle=award.trophy.subtitle,
        winner=_trophy_player(award.winner),
        runner_up=_trophy_player(award.runner_up) if award.runner_up is not None else None,
        value_label=award.value_label,
        value_sub=award.value_sub,
    )


def _game_response(game: GameRecord) -> GameResponse:
    return GameResponse(
        game_id=game.game_id,
        date=game.date,
        opponent=game.opponent,
        result=game.result,
        score_us=game.score_us,
        score_them=game.score_them,
        lines=[
            GameLineResponse(player_id=line.player_id, name=line.name, number=line.number, delta=line.delta)
            for line in game.lines
        ],
    )


def _render_page(body: str, *, title: str) -> str:
    return f"""<!DOCTYPE html>
<html lang=\"en\">
<head>
    <meta charset=\"utf-8\">
    <title>{escape(title)}</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 2rem; background: #f5f7fa; }}
        main {{ background: #fff; padding: 2rem; border-radius: 12px; box-shadow: 0 2px 6px rgba(0,0,0,0.08); }}
        nav a {{ margin-right: 1rem; color: #ea580c; text-decoration: none; }}
        table {{ border-collapse: collapse; width: 100%; margin-top: 1rem; }}
        th, td {{ padding: 0.5rem; border: 1px solid #e2e8f0; text-align: left; }}
        td.leader {{ background: #fff7ed; font-weight: 700; }}
        .hint {{ color: #475569; margin: 0; }}
        .trophies {{ display: grid; grid-template-columns: repeat(auto-fill, minmax(240px, 1fr)); gap: 1rem; }}
        .trophy {{ border: 1px solid #e2e8f0; padding: 1rem; border-radius: 8px; background: #f8fafc; }}
        .trophy h3 {{ margin: 0 0 0.25rem; }}
        .trophy .value {{ font-size: 1.6rem; font-weight: 700; }}
    </style>
</head>
<body>
    <nav><a href=\"/ui\">Roster</a><a href=\"/ui/trophies\">Trophies</a></nav>
    <main>{body}</main>
</body>
</html>"""


def _record_label(meta: SeasonMeta) -> str:
    record = meta.record
    label = f"{record.wins}-{record.losses}"
    if record.ties:
        label += f"-{record.ties}"
    return label


def _render_roster_page(meta: SeasonMeta, players: Sequence[Player], leaders: LeadersMap) -> str:
    stat_keys = list(STAT_LABELS)
    header = "".join(f"<th>{label}</th>" for label in STAT_LABELS.values())
    rows = []
    for player in players:
        line = stat_line(player)
        values = {
            "avg": fmt3(line.avg),
            "obp": fmt3(line.obp),
            "slg": fmt3(line.slg),
            "ops": fmt3(line.ops),
            "hits": str(player.stats.hits),
            "at_bats": str(player.stats.at_bats),
            "rbi": str(player.stats.rbi),
            "runs": str(player.stats.runs),
        }
        cells = "".join(
            f"<td class=\"leader\">{values[key]}</td>" if player.id in leaders[key] else f"<td>{values[key]}</td>"
            for key in stat_keys
        )
        rows.append(
            f"<tr><td>#{player.number}</td>"
            f"<td><a href=\"/ui/players/{escape(player.id)}\">{escape(player.name)}</a></td>"
            f"<td>{escape(player.primary_pos or '')}</td>{cells}</tr>"
        )
    if not rows:
        rows.append(f"<tr><td colspan=\"{len(stat_keys) + 3}\">No players on the roster yet.</td></tr>")
    return f"""
    <h1>{escape(meta.team_name)}</h1>
    <p class=\"hint\">{escape(meta.season_label)} · {escape(meta.league)} · Record {escape(_record_label(meta))}</p>
    <table>
        <thead><tr><th>#</th><th>Player</th><th>Pos</th>{header}</tr></thead>
        <tbody>{''.join(rows)}</tbody>
    </table>
    """


def _render_player_page(player: Player, leaders: LeadersMap) -> str:
    line = stat_line(player)
    s = player.stats
    counting = [
        ("G", s.games),
        ("PA", s.plate_appearances),
        ("AB", s.at_bats),
        ("H", s.hits),
        ("2B", s.doubles),
        ("3B", s.triples),
        ("HR", s.home_runs),
        ("R", s.runs),
        ("RBI", s.rbi),
        ("BB", s.walks),
        ("SO", s.strikeouts),
        ("HBP", s.hit_by_pitch),
        ("PO", s.put_outs),
        ("A", s.assists),
    ]
    badges = ", ".join(STAT_LABELS[key] for key in leader_keys_for(player.id, leaders))
    counting_rows = "".join(f"<tr><th>{label}</th><td>{value}</td></tr>" for label, value in counting)
    return f"""
    <h1>#{player.number} {escape(player.name)}</h1>
    <p class=\"hint\">{escape(player.primary_pos or 'Utility')}{' · Team leader in ' + escape(badges) if badges else ''}</p>
    <table>
        <thead><tr><th>AVG</th><th>OBP</th><th>SLG</th><th>OPS</th></tr></thead>
        <tbody><tr><td>{fmt3(line.avg)}</td><td>{fmt3(line.obp)}</td><td>{fmt3(line.slg)}</td><td>{fmt3(line.ops)}</td></tr></tbody>
    </table>
    <table>{counting_rows}</table>
    """


def _render_trophies_page(meta: SeasonMeta, awards: Sequence[TrophyAward], player_count: int) -> str:
    cards = "".join(
        f"""
        <section class=\"trophy\">
            <h3>{escape(award.trophy.title)}</h3>
            <p class=\"hint\">{escape(award.trophy.subtitle)}</p>
            <p><strong>{escape(award.winner.name)}</strong> #{award.winner.number}</p>
            <p class=\"value\">{escape(award.value_label)}</p>
            <p class=\"hint\">{escape(award.value_sub or '')}</p>
            <p class=\"hint\">Runner-up: {escape(award.runner_up.name) if award.runner_up else '-'}</p>
        </section>
        """
        for award in awards
    )
    note = ""
    if player_count < len(TROPHY_CATALOG):
        note = (
            f"<p class=\"hint\">{player_count} players for {len(TROPHY_CATALOG)} trophies; "
            "trophies are awarded until every player has one.</p>"
        )
    return f"""
    <h1>{escape(meta.team_name)} Trophy Case</h1>
    <p class=\"hint\">Every player earns one unique award. {escape(meta.season_label)}</p>
    {note}
    <div class=\"trophies\">{cards or '<p>No trophies yet.</p>'}</div>
    """


def create_app(store: SeasonStore | None = None, settings: AppSettings | None = None) -> FastAPI:
    settings = settings or load_settings()
    app = FastAPI(title="dugout team site")
    store = store or SeasonStore(Path(settings.db_path))
    app.state.season_store = store
    app.state.settings = settings

    def resolve_season(season: Optional[str] = Query(None)) -> str:
        if season and season.strip():
            return season.strip()
        return store.get_current_season_id() or settings.default_season_id

    def require_admin(x_admin_uid: Optional[str] = Header(None)) -> str:
        if not x_admin_uid:
            raise HTTPException(status_code=401, detail="Sign in required")
        if not store.is_admin(x_admin_uid):
            logger.warning("Rejected admin request from uid %s", x_admin_uid)
            raise HTTPException(status_code=403, detail="Not authorized")
        return x_admin_uid

    def load_roster(season_id: str) -> tuple[SeasonMeta, list[Player], LeadersMap]:
        meta = store.get_meta(season_id)
        players = sort_roster(store.list_players(season_id))
        return meta, players, compute_leaders(players)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/roster", response_model=RosterResponse)
    async def roster(season_id: str = Depends(resolve_season)):
        meta, players, leaders = load_roster(season_id)
        return RosterResponse(
            season_id=season_id,
            meta=meta,
            stats_started=any_stats_recorded(players),
            players=[_player_response(player, leaders) for player in players],
            leaders=leaders,
        )

    @app.get("/players/{player_id}", response_model=PlayerResponse)
    async def player_detail(player_id: str, season_id: str = Depends(resolve_season)):
        _, players, leaders = load_roster(season_id)
        player = next((p for p in players if p.id == player_id), None)
        if player is None:
            raise HTTPException(status_code=404, detail="Player not found")
        return _player_response(player, leaders)

    @app.get("/trophies", response_model=TrophyListResponse)
    async def trophies(season_id: str = Depends(resolve_season)):
        players = store.list_players(season_id)
        awards = compute_trophies(players)
        return TrophyListResponse(
            season_id=season_id,
            player_count=len(players),
            catalog_size=len(TROPHY_CATALOG),
            awards=[_award_response(award) for award in awards],
        )

    @app.get("/games", response_model=list[GameResponse])
    async def games(season_id: str = Depends(resolve_season), limit: int = Query(20, ge=1, le=200)):
        limit = min(limit, settings.games_limit)
        return [_game_response(game) for game in store.list_games(season_id, limit=limit)]

    @app.post("/admin/season", response_model=AdminResult)
    async def admin_switch_season(payload: SeasonSwitchRequest, uid: str = Depends(require_admin)):
        try:
            season_id = switch_season(
                store,
                payload.season_id,
                team_name=payload.team_name,
                season_label=payload.season_label,
                league=payload.league,
                fallback_team_name=settings.team_name,
            )
        except AdminActionError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return AdminResult(season_id=season_id, message=f"Now tracking season {season_id}.")

    @app.post("/admin/roster", response_model=AdminResult)
    async def admin_rebuild_roster(
        payload: RosterRebuildRequest,
        season_id: str = Depends(resolve_season),
        uid: str = Depends(require_admin),
    ):
        try:
            count = rebuild_roster(store, season_id, payload.players)
        except AdminActionError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        logger.info("Admin %s rebuilt roster for %s", uid, season_id)
        return AdminResult(season_id=season_id, message=f"Roster rebuilt with {count} players.", count=count)

    @app.patch("/admin/players", response_model=AdminResult)
    async def admin_edit_players(
        payload: PlayerEditsRequest,
        season_id: str = Depends(resolve_season),
        uid: str = Depends(require_admin),
    ):
        players = store.list_players(season_id)
        try:
            wrote = save_player_edits(store, season_id, players, payload.edits)
        except AdminActionError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return AdminResult(season_id=season_id, message=f"Saved {wrote} player(s).", count=wrote)

    @app.post("/admin/games", response_model=AdminResult)
    async def admin_save_game(
        payload: GameEntryRequest,
        season_id: str = Depends(resolve_season),
        uid: str = Depends(require_admin),
    ):
        players = store.list_players(season_id)
        try:
            wrote_lines, opponent = save_game_and_apply_deltas(
                store,
                season_id,
                date=payload.date,
                opponent=payload.opponent,
                result=payload.result,
                score_us=payload.score_us,
                score_them=payload.score_them,
                players=players,
                lines=payload.lines,
            )
        except AdminActionError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return AdminResult(
            season_id=season_id,
            message=f"Saved game vs {opponent}. Updated {wrote_lines} player(s).",
            count=wrote_lines,
        )

    @app.get("/ui", response_class=HTMLResponse)
    async def ui_roster(season_id: str = Depends(resolve_season)):
        meta, players, leaders = load_roster(season_id)
        content = _render_roster_page(meta, players, leaders)
        return HTMLResponse(_render_page(content, title=f"{meta.team_name} Roster"))

    @app.get("/ui/players/{player_id}", response_class=HTMLResponse)
    async def ui_player(player_id: str, season_id: str = Depends(resolve_season)):
        _, players, leaders = load_roster(season_id)
        player = next((p for p in players if p.id == player_id), None)
        if player is None:
            raise HTTPException(status_code=404, detail="Player not found")
        return HTMLResponse(_render_page(_render_player_page(player, leaders), title=player.name))

    @app.get("/ui/trophies", response_class=HTMLResponse)
    async def ui_trophies(season_id: str = Depends(resolve_season)):
        meta = store.get_meta(season_id)
        players = store.list_players(season_id)
        awards = compute_trophies(players)
        content = _render_trophies_page(meta, awards, len(players))
        return HTMLResponse(_render_page(content, title=f"{meta.team_name} Trophies"))

    return app
