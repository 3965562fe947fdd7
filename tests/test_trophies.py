import pytest

from dugout.models import BattingStats, Player
from dugout.trophies import (
    MIN_QUALIFIER,
    TROPHY_CATALOG,
    allocate_trophies,
    build_candidate,
    compute_trophies,
    get_trophy,
    iter_trophies,
    rank_candidates,
)


def _player(player_id: str, name: str, **stats) -> Player:
    return Player(id=player_id, name=name, number=int(player_id[1:]), stats=BattingStats(**stats))


def _season_roster() -> list[Player]:
    players = []
    for idx in range(14):
        players.append(
            _player(
                f"p{idx + 1}",
                f"Kid Number{idx + 1:02d}",
                games=10 + idx % 3,
                at_bats=12 + idx,
                hits=3 + (idx * 7) % 9,
                doubles=idx % 3,
                triples=idx % 2,
                home_runs=1 if idx in (4, 9) else 0,
                runs=(idx * 5) % 11,
                rbi=(idx * 3) % 10,
                walks=(idx * 2) % 7,
                hit_by_pitch=idx % 4,
                put_outs=(idx * 4) % 13,
                assists=(idx * 6) % 11,
            )
        )
    return players


def test_catalog_order_and_keys():
    keys = [trophy.key for trophy in iter_trophies()]
    assert keys == [
        "batting_champ",
        "on_base_king",
        "slugger",
        "ops_star",
        "rbi_producer",
        "run_machine",
        "hit_leader",
        "iron_tiger",
        "gold_glove",
        "cannon_arm",
        "walk_wizard",
        "brick_wall",
    ]
    assert get_trophy("brick_wall").title == "The Brick Wall"
    with pytest.raises(KeyError):
        get_trophy("cy_young")


def test_unqualified_player_scores_negative_one():
    trophy = get_trophy("batting_champ")
    short = _player("p1", "Short Sample", at_bats=MIN_QUALIFIER - 1, hits=9)
    candidate = build_candidate(trophy, short)
    assert candidate.score == -1
    assert candidate.t1 == MIN_QUALIFIER - 1


def test_rank_breaks_ties_on_at_bats_then_name():
    trophy = get_trophy("batting_champ")
    a = _player("p1", "Zed Young", at_bats=20, hits=8)
    b = _player("p2", "Amy Adams", at_bats=15, hits=6)
    c = _player("p3", "Bo Baker", at_bats=20, hits=8)

    ranked = rank_candidates(trophy, [a, b, c])
    assert [cand.player.id for cand in ranked] == ["p3", "p1", "p2"]


def test_winner_skips_players_who_already_won():
    a = _player("p1", "Amy Adams", at_bats=20, hits=10, walks=5)
    b = _player("p2", "Ben Brown", at_bats=20, hits=8, walks=2)
    c = _player("p3", "Cal Cruz", at_bats=5, hits=5)

    awards = compute_trophies([a, b, c])
    assert [award.trophy.key for award in awards] == ["batting_champ", "on_base_king", "slugger"]

    champ, obp_king, slugger = awards
    assert champ.winner.id == "p1"
    assert champ.runner_up is not None and champ.runner_up.id == "p2"
    assert champ.value_label == ".500"
    assert champ.value_sub == "10 H / 20 AB"

    # Amy has the best OBP but already won.
    assert obp_king.winner.id == "p2"
    assert obp_king.runner_up is not None and obp_king.runner_up.id == "p3"

    # Cal never qualifies but is the only player left.
    assert slugger.winner.id == "p3"
    assert slugger.runner_up is not None and slugger.runner_up.id == "p1"


def test_full_roster_gets_twelve_unique_winners():
    players = _season_roster()
    awards = compute_trophies(players)

    assert len(awards) == len(TROPHY_CATALOG) == 12
    winners = [award.winner.id for award in awards]
    assert len(set(winners)) == 12
    assert [award.trophy.key for award in awards] == [trophy.key for trophy in TROPHY_CATALOG]
    for award in awards:
        assert award.runner_up is not None
        assert award.runner_up.id != award.winner.id


def test_distinct_winners_capped_by_roster_size():
    players = _season_roster()[:5]
    awards = compute_trophies(players)
    assert len(awards) == 5
    assert len({award.winner.id for award in awards}) == 5


def test_allocation_is_deterministic_and_order_independent():
    players = _season_roster()
    first = compute_trophies(players)
    second = compute_trophies(list(reversed(players)))

    def summary(awards):
        return [
            (a.trophy.key, a.winner.id, a.runner_up.id if a.runner_up else None, a.value_label, a.value_sub)
            for a in awards
        ]

    assert summary(first) == summary(second)


def test_all_zero_roster_still_allocates_by_name():
    players = [_player(f"p{i}", name) for i, name in enumerate(["Cy Cole", "Al Ames", "Bea Bell"], start=1)]
    awards = compute_trophies(players)
    assert [a.winner.name for a in awards] == ["Al Ames", "Bea Bell", "Cy Cole"]
    assert awards[0].value_label == ".000"


def test_empty_roster_and_single_player():
    assert compute_trophies([]) == []

    solo = _player("p1", "Solo Star", at_bats=3, hits=1)
    awards = compute_trophies([solo])
    assert len(awards) == 1
    assert awards[0].winner.id == "p1"
    assert awards[0].runner_up is None


def test_custom_catalog_subset():
    players = _season_roster()
    catalog = [get_trophy("gold_glove"), get_trophy("cannon_arm")]
    awards = allocate_trophies(players, catalog)
    best_glove = max(players, key=lambda p: (p.stats.put_outs, p.stats.assists, p.stats.games))
    assert awards[0].winner.id == best_glove.id
    assert awards[0].value_sub == "Put outs (PO)"
    assert awards[1].winner.id != best_glove.id


def test_counting_trophy_labels():
    p = _player("p1", "Rbi Guy", rbi=7, hits=2, at_bats=5)
    awards = allocate_trophies([p], [get_trophy("rbi_producer")])
    assert awards[0].value_label == "7"
    assert awards[0].value_sub == "Runs batted in"


def test_name_fallback_ignores_case():
    players = [_player("p1", "Bob Young"), _player("p2", "amy Zed")]
    awards = compute_trophies(players)
    assert [a.winner.id for a in awards] == ["p2", "p1"]
    assert awards[0].runner_up is not None and awards[0].runner_up.id == "p1"
