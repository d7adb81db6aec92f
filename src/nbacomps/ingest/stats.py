"""Stream the flat per-season statistics CSV into parsed or skipped rows."""

from __future__ import annotations

import csv
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

from .errors import IndexLoadError


logger = logging.getLogger(__name__)

IDENTITY_COLUMNS = ("player", "team", "season", "playerid")
REQUIRED_COLUMNS = ("playerid", "player", "season", "team")

SKIP_BAD_PLAYER_ID = "invalid playerid"
SKIP_BAD_SEASON = "invalid season"
SKIP_BLANK_NAME = "blank player name"


@dataclass(frozen=True)
class ParsedRow:
    line_number: int
    player_id: int
    name: str
    season: int
    team: str
    stats: Dict[str, float]
    skipped_fields: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SkippedRow:
    line_number: int
    reason: str


RowResult = Union[ParsedRow, SkippedRow]


def _is_plain_number(text: str) -> bool:
    # int()/float() also accept digit separators and non-ASCII digits.
    return text.isascii() and "_" not in text


def _parse_int(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    text = raw.strip()
    if not _is_plain_number(text):
        return None
    try:
        return int(text)
    except ValueError:
        return None


def _parse_stat(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    text = raw.strip()
    if not text or not _is_plain_number(text):
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_stats_row(row: Mapping[str, Optional[str]], line_number: int) -> RowResult:
    """Split one CSV row into identity columns and numeric stats.

    Rows without an integer ``playerid``/``season`` or with a blank name are
    skipped; individual stat values that are not finite numbers are dropped
    from the row while the rest of it is kept.
    """

    player_id = _parse_int(row.get("playerid"))
    if player_id is None:
        return SkippedRow(line_number, SKIP_BAD_PLAYER_ID)
    season = _parse_int(row.get("season"))
    if season is None:
        return SkippedRow(line_number, SKIP_BAD_SEASON)
    name = (row.get("player") or "").strip()
    if not name:
        return SkippedRow(line_number, SKIP_BLANK_NAME)

    stats: Dict[str, float] = {}
    skipped: List[str] = []
    for column, raw in row.items():
        if column is None or column in IDENTITY_COLUMNS:
            continue
        value = _parse_stat(raw)
        if value is None:
            skipped.append(column)
            continue
        stats[column] = value

    return ParsedRow(
        line_number=line_number,
        player_id=player_id,
        name=name,
        season=season,
        team=(row.get("team") or "").strip(),
        stats=stats,
        skipped_fields=tuple(skipped),
    )


def _check_header(path: Path, fieldnames: Optional[List[str]]) -> None:
    if not fieldnames:
        raise IndexLoadError(f"Stats file {path} has no header row")
    missing = [column for column in REQUIRED_COLUMNS if column not in fieldnames]
    if missing:
        raise IndexLoadError(f"Stats file {path} is missing required columns: {', '.join(missing)}")


def iter_stats_rows(path: Path) -> Iterator[RowResult]:
    """Yield one result per data row; file-level problems raise ``IndexLoadError``."""

    try:
        with path.open(newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f)
            # DictReader keeps whitespace around header names.
            reader.fieldnames = [name.strip() for name in reader.fieldnames or []]
            _check_header(path, reader.fieldnames)
            for row in reader:
                yield parse_stats_row(row, reader.line_num)
    except OSError as exc:
        raise IndexLoadError(f"Unable to read stats file {path}: {exc}") from exc
    except (csv.Error, UnicodeDecodeError) as exc:
        raise IndexLoadError(f"Malformed stats file {path}: {exc}") from exc


@dataclass
class StatsScan:
    """Running counters for a pass over the stats table."""

    total_rows: int = 0
    loaded_rows: int = 0
    skipped_fields: int = 0
    skip_reasons: Dict[str, int] = field(default_factory=dict)

    @property
    def skipped_rows(self) -> int:
        return sum(self.skip_reasons.values())

    def record(self, result: RowResult) -> None:
        self.total_rows += 1
        if isinstance(result, SkippedRow):
            self.skip_reasons[result.reason] = self.skip_reasons.get(result.reason, 0) + 1
            logger.debug("Skipping stats row %d: %s", result.line_number, result.reason)
            return
        self.loaded_rows += 1
        self.skipped_fields += len(result.skipped_fields)
