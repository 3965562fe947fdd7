import pytest

from dugout.models import BattingStats, Player
from dugout.stats import STAT_KEYS, compute_leaders, leader_keys_for, stat_value


def _player(player_id: str, **stats) -> Player:
    return Player(id=player_id, name=f"Player {player_id}", stats=BattingStats(**stats))


def test_rate_ties_grouped_within_tolerance():
    a = _player("a", at_bats=20, hits=8)
    b = _player("b", at_bats=15, hits=6)
    c = _player("c", at_bats=10, hits=3)

    leaders = compute_leaders([a, b, c])
    assert sorted(leaders["avg"]) == ["a", "b"]
    assert leaders["at_bats"] == ["a"]
    assert leaders["hits"] == ["a"]


def test_near_equal_rates_share_the_lead():
    # .3333 vs .3330: within half a point at three decimals
    a = _player("a", at_bats=3, hits=1)
    b = _player("b", at_bats=1000, hits=333)
    leaders = compute_leaders([a, b])
    assert sorted(leaders["avg"]) == ["a", "b"]


def test_ineligible_players_never_lead_rate_stats():
    walker = _player("w", walks=3)
    hitter = _player("h", at_bats=4, hits=1)
    leaders = compute_leaders([walker, hitter])

    assert leaders["avg"] == ["h"]
    assert leaders["slg"] == ["h"]
    # the walker has a perfect OBP with no at-bats
    assert leaders["obp"] == ["w"]
    assert "w" not in leaders["ops"]


def test_zero_max_means_no_leaders():
    players = [_player("a"), _player("b"), _player("c", at_bats=5)]
    leaders = compute_leaders(players)
    assert set(leaders) == set(STAT_KEYS)
    assert leaders["avg"] == []
    assert leaders["hits"] == []
    assert leaders["rbi"] == []
    assert leaders["at_bats"] == ["c"]


def test_counting_stats_require_exact_equality():
    a = _player("a", rbi=4, runs=2)
    b = _player("b", rbi=4, runs=1)
    leaders = compute_leaders([a, b])
    assert sorted(leaders["rbi"]) == ["a", "b"]
    assert leaders["runs"] == ["a"]


def test_empty_roster():
    assert compute_leaders([]) == {key: [] for key in STAT_KEYS}


def test_leader_keys_for_player():
    a = _player("a", at_bats=4, hits=2, rbi=3)
    b = _player("b", at_bats=4, hits=1, runs=2)
    leaders = compute_leaders([a, b])
    assert leader_keys_for("a", leaders) == ["avg", "obp", "slg", "ops", "hits", "at_bats", "rbi"]
    assert leader_keys_for("b", leaders) == ["at_bats", "runs"]


def test_stat_value_unknown_key():
    with pytest.raises(KeyError):
        stat_value(_player("a"), "era")
