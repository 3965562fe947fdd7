import pytest
from pydantic import ValidationError

from dugout.models import BattingStats, Player, SeasonMeta


def test_player_is_frozen():
    player = Player(id="07-amy-adams", name="Amy Adams", number=7, primary_pos="SS")

    assert player.id == "07-amy-adams"
    assert player.stats == BattingStats()

    with pytest.raises((TypeError, ValidationError)):
        player.name = "Someone Else"  # type: ignore[misc]


def test_stats_reject_negative_counts():
    with pytest.raises(ValidationError):
        BattingStats(hits=-1)


def test_player_rejects_blank_name_and_unknown_shirt_size():
    with pytest.raises(ValidationError):
        Player(id="p1", name="")
    with pytest.raises(ValidationError):
        Player(id="p1", name="Amy Adams", shirt_size="XXXL")


def test_season_meta_defaults():
    meta = SeasonMeta()
    assert (meta.team_name, meta.season_label, meta.league) == ("Tigers", "Spring 2026", "Mustang")
    assert meta.record.ties is None
