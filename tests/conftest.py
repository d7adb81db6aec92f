from __future__ import annotations

import json
from pathlib import Path

import pytest

from nbacomps.index import build_index


CAREER_RECS = {
    " 1 ": [
        {"playerId": 2, "score": 0.9},
        {"playerId": 999, "score": 0.8},
        {"playerId": 5, "score": 0.7},
    ],
    "2": [{"PlayerId": 1, "Score": 0.95}],
}

SEASON_RECS = {
    "1_2001": [
        {"playerId": 2, "season": 2003, "score": 0.88},
        {"playerId": 999, "season": 2001, "score": 0.5},
        {"playerId": 2, "season": 1999, "score": 0.4},
    ],
}

STATS_CSV = """playerid,player,season,team,PTS,AST
1,James Smith,2001,BOS,10,5
1,James Smith,2002,NYK,20,
2,Tom Jameson,1999,CHI,12,3
2,Tom Jameson,2003,,14,4
2,Tom Jameson,2001,CHI,16,abc
abc,Broken Row,2001,BOS,1,1
3,,2001,BOS,1,1
4,Ghost Season,20x1,BOS,1,1
5,Zed Adams,2010,LAL,8,2
"""


def write_artifacts(
    directory: Path,
    *,
    career: dict | None = None,
    season: dict | None = None,
    stats: str | None = None,
) -> tuple[Path, Path, Path]:
    career_path = directory / "career_recommendations.json"
    season_path = directory / "season_recommendations.json"
    stats_path = directory / "player_dataset_CLEANED.csv"
    career_path.write_text(json.dumps(CAREER_RECS if career is None else career), encoding="utf-8")
    season_path.write_text(json.dumps(SEASON_RECS if season is None else season), encoding="utf-8")
    stats_path.write_text(STATS_CSV if stats is None else stats, encoding="utf-8")
    return career_path, season_path, stats_path


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def make_artifacts(tmp_path: Path):
    def _make(**kwargs) -> tuple[Path, Path, Path]:
        return write_artifacts(tmp_path, **kwargs)

    return _make


@pytest.fixture
def artifact_paths(make_artifacts) -> tuple[Path, Path, Path]:
    return make_artifacts()


@pytest.fixture
def index(artifact_paths):
    return build_index(*artifact_paths)
