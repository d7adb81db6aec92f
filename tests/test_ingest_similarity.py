import json
from pathlib import Path

import pytest

from nbacomps.ingest import (
    IndexLoadError,
    SimilarityOrderError,
    check_ordering,
    load_career_similarity,
    load_season_similarity,
    season_label,
)


def _write(tmp_path: Path, payload, name: str = "recs.json") -> Path:
    path = tmp_path / name
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return path


def test_career_keys_are_trimmed_and_order_kept(tmp_path: Path):
    path = _write(
        tmp_path,
        {" 12 ": [{"playerId": 3, "score": 0.7}, {"playerId": 4, "score": 0.9}]},
    )

    mapping = load_career_similarity(path)

    assert list(mapping) == ["12"]
    assert [entry.player_id for entry in mapping["12"]] == [3, 4]


def test_season_entries_carry_target_season(tmp_path: Path):
    path = _write(tmp_path, {"12_2001": [{"playerId": 3, "season": 1998, "score": 0.7}]})

    mapping = load_season_similarity(path)

    entry = mapping[season_label(12, 2001)][0]
    assert (entry.player_id, entry.season, entry.score) == (3, 1998, 0.7)


@pytest.mark.parametrize(
    "payload",
    [
        "{not json",
        "[1, 2, 3]",
        {"1": {"playerId": 3, "score": 0.1}},
        {"1": [{"score": 0.1}]},
    ],
)
def test_malformed_files_are_fatal(tmp_path: Path, payload):
    path = _write(tmp_path, payload)

    with pytest.raises(IndexLoadError):
        load_career_similarity(path)


def test_missing_file_is_fatal(tmp_path: Path):
    with pytest.raises(IndexLoadError):
        load_season_similarity(tmp_path / "missing.json")


def test_check_ordering_reports_unsorted_lists(tmp_path: Path):
    path = _write(
        tmp_path,
        {
            "1": [{"playerId": 2, "score": 0.9}, {"playerId": 3, "score": 0.9}, {"playerId": 4, "score": 0.1}],
            "2": [{"playerId": 1, "score": 0.2}, {"playerId": 3, "score": 0.8}],
        },
    )
    mapping = load_career_similarity(path)

    assert check_ordering(mapping, source="career") == ["2"]

    with pytest.raises(SimilarityOrderError, match="'2'"):
        check_ordering(mapping, source="career", strict=True)


def test_byte_order_mark_is_accepted(tmp_path: Path):
    path = tmp_path / "recs.json"
    path.write_bytes(b"\xef\xbb\xbf" + json.dumps({"1": [{"playerId": 2, "score": 0.5}]}).encode("utf-8"))

    mapping = load_career_similarity(path)

    assert mapping["1"][0].player_id == 2


def test_invalid_utf8_is_fatal(tmp_path: Path):
    path = tmp_path / "recs.json"
    path.write_bytes(b'{"1": [{"playerId": 2, "score": 0.5}], "\xff": []}')

    with pytest.raises(IndexLoadError, match="UTF-8"):
        load_season_similarity(path)
