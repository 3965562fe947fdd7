import pytest

from dugout.admin import (
    AdminActionError,
    LineDelta,
    LineState,
    PlayerEdit,
    any_non_zero,
    build_roster,
    game_id_for,
    num,
    parse_optional_int,
    player_id_from_draft,
    rebuild_roster,
    save_game_and_apply_deltas,
    save_player_edits,
    slugify,
    switch_season,
)
from dugout.ingest import DraftPlayer
from dugout.persistence import SeasonStore


SEASON = "tigers-2026"


@pytest.mark.parametrize(
    ("text", "expected"),
    [("", 0), ("  ", 0), ("7", 7), ("3.9", 3), ("-4", 0), ("abc", 0), ("inf", 0)],
)
def test_parse_optional_int(text, expected):
    assert parse_optional_int(text) == expected


def test_num_handles_blank_and_junk():
    assert num(" 12 ") == 12
    assert num("") == 0
    assert num("nan") == 0


def test_slugify():
    assert slugify("  St. Mary's Eagles!! ") == "st-marys-eagles"
    assert slugify("!!!") == ""


def test_player_id_from_draft():
    assert player_id_from_draft(DraftPlayer(name="Amy Adams", number="7"), 0) == "07-amy-adams"
    assert player_id_from_draft(DraftPlayer(name="Amy Adams", number="21"), 4) == "21-amy-adams"
    assert player_id_from_draft(DraftPlayer(name="Amy Adams", number="x"), 2) == "p03-amy-adams"
    assert player_id_from_draft(DraftPlayer(name="???"), 0) == "p01-player-1"


def test_game_id_for():
    assert game_id_for("2026-04-12", "St. Mary's Eagles", 123) == "20260412-st-marys-eagles-123"


def test_any_non_zero():
    assert not any_non_zero(LineDelta())
    assert any_non_zero(LineDelta(walks=1))
    assert any_non_zero({"rbi": 2})


def test_rebuild_roster_cleans_draft(store: SeasonStore):
    draft = [
        DraftPlayer(name=" Amy Adams ", number="7", primary_pos="SS "),
        DraftPlayer(name="   ", number="9"),
        DraftPlayer(name="Zed Young"),
        DraftPlayer(name="Amy Adams", number="07"),
    ]
    count = rebuild_roster(store, SEASON, draft)
    assert count == 3
    assert len(store.list_players(SEASON)) == count

    players = {p.id: p for p in store.list_players(SEASON)}
    assert set(players) == {"07-amy-adams", "p02-zed-young", "07-amy-adams-3"}
    assert players["07-amy-adams"].primary_pos == "SS"
    assert players["p02-zed-young"].number == 0
    assert players["p02-zed-young"].primary_pos is None


def test_rebuild_roster_suffixed_id_never_reuses_an_earlier_id(store: SeasonStore):
    draft = [
        DraftPlayer(name="Joe 3", number="7"),
        DraftPlayer(name="Joe", number="7"),
        DraftPlayer(name="Joe", number="7"),
    ]
    ids = [p.id for p in build_roster(draft)]
    assert ids == ["07-joe-3", "07-joe", "07-joe-4"]

    count = rebuild_roster(store, SEASON, draft)
    stored = store.list_players(SEASON)
    assert count == len(stored) == 3
    assert sorted(p.name for p in stored) == ["Joe", "Joe", "Joe 3"]


def test_rebuild_roster_requires_a_name(store: SeasonStore):
    with pytest.raises(AdminActionError, match="Add at least one player name."):
        rebuild_roster(store, SEASON, [DraftPlayer(name=" ")])


def test_save_player_edits(store: SeasonStore):
    rebuild_roster(store, SEASON, [DraftPlayer(name="Amy Adams", number="7"), DraftPlayer(name="Zed Young")])
    players = store.list_players(SEASON)

    with pytest.raises(AdminActionError, match="No changes to save."):
        save_player_edits(store, SEASON, players, {"07-amy-adams": PlayerEdit(name="Amy", dirty=False)})
    with pytest.raises(AdminActionError, match="cannot be empty"):
        save_player_edits(store, SEASON, players, {"07-amy-adams": PlayerEdit(name="  ")})
    with pytest.raises(AdminActionError, match="No players in roster."):
        save_player_edits(store, SEASON, [], {})

    wrote = save_player_edits(
        store,
        SEASON,
        players,
        {"07-amy-adams": PlayerEdit(name=" Amy A. ", number="8", shirt_size="AS")},
    )
    assert wrote == 1
    amy = store.get_player(SEASON, "07-amy-adams")
    assert (amy.name, amy.number, amy.shirt_size) == ("Amy A.", 8, "AS")


def test_save_game_applies_visible_non_zero_lines(store: SeasonStore):
    rebuild_roster(
        store,
        SEASON,
        [DraftPlayer(name="Amy Adams", number="7"), DraftPlayer(name="Zed Young", number="9"), DraftPlayer(name="Bo Baker")],
    )
    players = store.list_players(SEASON)
    lines = {
        "07-amy-adams": LineState(delta=LineDelta(at_bats=3, hits=2, rbi=1)),
        "09-zed-young": LineState(hidden=True, delta=LineDelta(at_bats=4, hits=4)),
        "p03-bo-baker": LineState(),
    }

    wrote, opponent = save_game_and_apply_deltas(
        store,
        SEASON,
        date="2026-04-12",
        opponent="  Eagles ",
        result="L",
        score_us="3",
        score_them="5",
        players=players,
        lines=lines,
        now_ms=42,
    )
    assert (wrote, opponent) == (1, "Eagles")

    amy = store.get_player(SEASON, "07-amy-adams")
    assert (amy.stats.at_bats, amy.stats.hits, amy.stats.rbi, amy.stats.games) == (3, 2, 1, 1)
    assert store.get_player(SEASON, "09-zed-young").stats.at_bats == 0
    assert store.get_meta(SEASON).record.losses == 1

    game = store.get_game(SEASON, "20260412-eagles-42")
    assert game is not None
    assert (game.score_us, game.score_them) == (3, 5)


def test_save_game_validation(store: SeasonStore):
    rebuild_roster(store, SEASON, [DraftPlayer(name="Amy Adams", number="7")])
    players = store.list_players(SEASON)
    common = dict(result="W", score_us="1", score_them="0", players=players)

    with pytest.raises(AdminActionError, match="Opponent is required."):
        save_game_and_apply_deltas(store, SEASON, date="2026-04-12", opponent=" ", lines={}, **common)
    with pytest.raises(AdminActionError, match="everything is zero"):
        save_game_and_apply_deltas(
            store,
            SEASON,
            date="2026-04-12",
            opponent="Eagles",
            lines={"07-amy-adams": LineState()},
            **common,
        )
    with pytest.raises(AdminActionError, match="Invalid game date"):
        save_game_and_apply_deltas(
            store,
            SEASON,
            date="April 12",
            opponent="Eagles",
            lines={"07-amy-adams": LineState(delta=LineDelta(hits=1))},
            **common,
        )
    assert store.list_games(SEASON) == []
    assert store.get_meta(SEASON).record.wins == 0


def test_switch_season(store: SeasonStore):
    with pytest.raises(AdminActionError, match="Season id is required."):
        switch_season(store, "  ")

    sid = switch_season(store, " tigers-2027 ", season_label="Fall 2027", fallback_team_name="Tigers")
    assert sid == "tigers-2027"
    assert store.get_current_season_id() == "tigers-2027"
    meta = store.get_meta("tigers-2027")
    assert (meta.team_name, meta.season_label) == ("Tigers", "Fall 2027")
    assert meta.record.ties == 0
