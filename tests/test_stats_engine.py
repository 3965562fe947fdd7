import pytest

from dugout.models import BattingStats, Player
from dugout.stats import (
    batting_average,
    fmt3,
    has_any_recorded_stats,
    on_base_percentage,
    ops,
    plate_appearances,
    slugging,
    stat_line,
    total_bases,
)


def _player(**stats) -> Player:
    return Player(id="p1", name="Test Player", number=4, stats=BattingStats(**stats))


def test_zero_at_bats_gives_zero_rates():
    p = _player(walks=2, hit_by_pitch=1)
    assert batting_average(p) == 0
    assert slugging(p) == 0
    assert on_base_percentage(p) == pytest.approx(1.0)

    empty = _player()
    assert on_base_percentage(empty) == 0
    assert ops(empty) == 0


def test_batting_average_and_obp():
    p = _player(at_bats=10, hits=4, walks=3, hit_by_pitch=1)
    assert batting_average(p) == pytest.approx(0.4)
    assert plate_appearances(p) == 14
    assert on_base_percentage(p) == pytest.approx(8 / 14)


def test_slugging_counts_total_bases():
    p = _player(at_bats=10, hits=3, doubles=1, triples=0, home_runs=1)
    assert total_bases(p) == 7
    assert slugging(p) == pytest.approx(0.7)


def test_slugging_clamps_negative_singles():
    p = _player(at_bats=4, hits=1, doubles=1, home_runs=1)
    # singles clamp at 0, so 2 + 4 total bases
    assert total_bases(p) == 6
    assert slugging(p) == pytest.approx(1.5)


def test_ops_is_exact_sum():
    p = _player(at_bats=13, hits=5, doubles=2, triples=1, walks=4, hit_by_pitch=2)
    assert ops(p) == on_base_percentage(p) + slugging(p)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.321, ".321"), (1.05, "1.050"), (0, ".000"), (0.4, ".400"), (2.5, "2.500")],
)
def test_fmt3(value, expected):
    assert fmt3(value) == expected


def test_stat_line_bundles_rates():
    p = _player(at_bats=8, hits=2, walks=2)
    line = stat_line(p)
    assert line.avg == pytest.approx(0.25)
    assert line.obp == pytest.approx(0.4)
    assert line.ops == pytest.approx(line.obp + line.slg)


def test_has_any_recorded_stats_ignores_defensive_and_games():
    assert not has_any_recorded_stats(_player(games=3, put_outs=4, assists=1, strikeouts=2))
    assert has_any_recorded_stats(_player(walks=1))
