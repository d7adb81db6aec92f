from pathlib import Path

import pytest

from nbacomps.ingest import IndexLoadError, ParsedRow, SkippedRow, StatsScan, iter_stats_rows, parse_stats_row
from nbacomps.ingest.stats import SKIP_BAD_PLAYER_ID, SKIP_BAD_SEASON, SKIP_BLANK_NAME


def _row(**kwargs):
    row = {"playerid": "1", "player": "Test Player", "season": "2001", "team": "BOS"}
    row.update(kwargs)
    return row


def test_parse_row_splits_identity_and_stats():
    result = parse_stats_row(_row(PTS="21.5", AST=" 4 "), line_number=2)

    assert isinstance(result, ParsedRow)
    assert result.player_id == 1
    assert result.season == 2001
    assert result.team == "BOS"
    assert result.stats == {"PTS": 21.5, "AST": 4.0}
    assert result.skipped_fields == ()


@pytest.mark.parametrize(
    "overrides, reason",
    [
        ({"playerid": "abc"}, SKIP_BAD_PLAYER_ID),
        ({"playerid": None}, SKIP_BAD_PLAYER_ID),
        ({"season": "2001.5"}, SKIP_BAD_SEASON),
        ({"player": "   "}, SKIP_BLANK_NAME),
    ],
)
def test_parse_row_skips_unusable_rows(overrides, reason):
    result = parse_stats_row(_row(**overrides), line_number=5)
    assert result == SkippedRow(5, reason)


def test_parse_row_drops_bad_stat_values_only():
    result = parse_stats_row(_row(PTS="12", AST="n/a", REB="", BLK="nan", STL="1.5"), line_number=3)

    assert isinstance(result, ParsedRow)
    assert result.stats == {"PTS": 12.0, "STL": 1.5}
    assert set(result.skipped_fields) == {"AST", "REB", "BLK"}


def test_blank_team_is_kept_empty():
    result = parse_stats_row(_row(team="  "), line_number=2)
    assert isinstance(result, ParsedRow)
    assert result.team == ""


def test_iter_stats_rows_streams_results(tmp_path: Path):
    path = tmp_path / "stats.csv"
    path.write_text(
        " playerid ,player,season,team,PTS\n1,A Player,2001,BOS,10\nx,B Player,2001,BOS,3\n",
        encoding="utf-8",
    )

    results = list(iter_stats_rows(path))

    assert isinstance(results[0], ParsedRow)
    assert results[0].stats == {"PTS": 10.0}
    assert isinstance(results[1], SkippedRow)
    assert results[1].reason == SKIP_BAD_PLAYER_ID


def test_scan_counts_rows_and_fields(tmp_path: Path):
    path = tmp_path / "stats.csv"
    path.write_text(
        "playerid,player,season,team,PTS,AST\n"
        "1,A Player,2001,BOS,10,\n"
        "2,,2001,BOS,1,1\n"
        "3,C Player,bad,BOS,1,1\n"
        "4,D Player,2002,LAL,4,2\n",
        encoding="utf-8",
    )

    scan = StatsScan()
    for result in iter_stats_rows(path):
        scan.record(result)

    assert scan.total_rows == 4
    assert scan.loaded_rows == 2
    assert scan.skipped_rows == 2
    assert scan.skipped_fields == 1
    assert scan.skip_reasons == {SKIP_BLANK_NAME: 1, SKIP_BAD_SEASON: 1}


def test_missing_required_column_is_fatal(tmp_path: Path):
    path = tmp_path / "stats.csv"
    path.write_text("playerid,player,season,PTS\n1,A Player,2001,10\n", encoding="utf-8")

    with pytest.raises(IndexLoadError, match="team"):
        list(iter_stats_rows(path))


def test_empty_file_is_fatal(tmp_path: Path):
    path = tmp_path / "stats.csv"
    path.write_text("", encoding="utf-8")

    with pytest.raises(IndexLoadError, match="no header"):
        list(iter_stats_rows(path))


def test_missing_file_is_fatal(tmp_path: Path):
    with pytest.raises(IndexLoadError):
        list(iter_stats_rows(tmp_path / "missing.csv"))


@pytest.mark.parametrize(
    "overrides, reason",
    [
        ({"playerid": "1_0"}, SKIP_BAD_PLAYER_ID),
        ({"season": "2_001"}, SKIP_BAD_SEASON),
        ({"season": "٢٠٠١"}, SKIP_BAD_SEASON),
    ],
)
def test_parse_row_rejects_separators_and_non_ascii_digits(overrides, reason):
    assert parse_stats_row(_row(**overrides), line_number=4) == SkippedRow(4, reason)


def test_stat_values_with_separators_are_dropped():
    result = parse_stats_row(_row(PTS="1_0", AST="٤", REB="7"), line_number=2)

    assert isinstance(result, ParsedRow)
    assert result.stats == {"REB": 7.0}
    assert set(result.skipped_fields) == {"PTS", "AST"}
