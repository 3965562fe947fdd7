from pathlib import Path

import pytest

from dugout.persistence import SeasonStore


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch):
    for name in (
        "DUGOUT_DB_PATH",
        "DUGOUT_DEFAULT_SEASON",
        "DUGOUT_TEAM_NAME",
        "DUGOUT_SEASON_LABEL",
        "DUGOUT_LEAGUE",
        "DUGOUT_GAMES_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def store(tmp_path: Path) -> SeasonStore:
    return SeasonStore(tmp_path / "dugout.sqlite")
