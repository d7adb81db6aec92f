"""Build the recommendation index from the three source artifacts."""

from __future__ import annotations

import logging
from pathlib import Path
from statistics import fmean
from typing import Dict, Iterable, List, Mapping, Sequence

from nbacomps.ingest import (
    ParsedRow,
    StatsScan,
    check_ordering,
    iter_stats_rows,
    load_career_similarity,
    load_season_similarity,
)
from nbacomps.ingest.stats import RowResult
from nbacomps.models import PlayerRecord, SeasonKey

from .service import LoadReport, RecommendationIndex


logger = logging.getLogger(__name__)

YEARS_SEPARATOR = "–"


def format_years(seasons: Iterable[int]) -> str:
    values = list(seasons)
    if not values:
        return ""
    return f"{min(values)}{YEARS_SEPARATOR}{max(values)}"


def average_stats(season_stats: Sequence[Mapping[str, float]]) -> Dict[str, float]:
    """Mean of each stat over the seasons that define it; missing keys are not zero-filled."""

    collected: Dict[str, List[float]] = {}
    for stats in season_stats:
        for key, value in stats.items():
            collected.setdefault(key, []).append(value)
    return {key: fmean(values) for key, values in collected.items()}


class _TableBuilder:
    """Accumulates the per-player tables during a single pass over the stats rows."""

    def __init__(self) -> None:
        self.players: Dict[int, PlayerRecord] = {}
        self.seasons: Dict[int, List[int]] = {}
        self.teams: Dict[int, List[str]] = {}
        self.season_stats: Dict[SeasonKey, Dict[str, float]] = {}
        self.season_teams: Dict[SeasonKey, str] = {}
        self.duplicate_seasons = 0

    def add(self, row: ParsedRow) -> None:
        player_seasons = self.seasons.setdefault(row.player_id, [])
        if row.season not in player_seasons:
            player_seasons.append(row.season)

        player_teams = self.teams.setdefault(row.player_id, [])
        if row.team and row.team not in player_teams:
            player_teams.append(row.team)

        if row.player_id not in self.players:
            self.players[row.player_id] = PlayerRecord(player_id=row.player_id, name=row.name)

        key = (row.player_id, row.season)
        if key in self.season_stats:
            # Last row for a repeated (player, season) wins.
            self.duplicate_seasons += 1
            logger.debug("Duplicate season %s_%s at line %d", row.player_id, row.season, row.line_number)
        self.season_stats[key] = dict(row.stats)
        if row.team:
            self.season_teams[key] = row.team

    def finalize_players(self) -> Dict[int, PlayerRecord]:
        return {
            player_id: record.model_copy(update={"years": format_years(self.seasons.get(player_id, ()))})
            for player_id, record in self.players.items()
        }

    def career_stats(self) -> Dict[int, Dict[str, float]]:
        return {
            player_id: average_stats([self.season_stats[(player_id, year)] for year in years])
            for player_id, years in self.seasons.items()
        }


def index_stats_rows(rows: Iterable[RowResult]) -> tuple[_TableBuilder, StatsScan]:
    tables = _TableBuilder()
    scan = StatsScan()
    for result in rows:
        scan.record(result)
        if isinstance(result, ParsedRow):
            tables.add(result)
    return tables, scan


def build_index(
    career_path: Path,
    season_path: Path,
    stats_path: Path,
    *,
    strict_ordering: bool = False,
) -> RecommendationIndex:
    """Load all three artifacts and return a fully built index.

    Any file-level failure raises :class:`nbacomps.ingest.IndexLoadError`;
    malformed rows and stat values are skipped and counted in the report.
    """

    career_recs = load_career_similarity(career_path)
    season_recs = load_season_similarity(season_path)
    unordered_career = check_ordering(career_recs, source=str(career_path), strict=strict_ordering)
    unordered_season = check_ordering(season_recs, source=str(season_path), strict=strict_ordering)

    tables, scan = index_stats_rows(iter_stats_rows(stats_path))
    players = tables.finalize_players()
    career_stats = tables.career_stats()

    if tables.duplicate_seasons:
        logger.warning(
            "%s: %d rows repeated an existing player season; later rows replaced earlier ones",
            stats_path,
            tables.duplicate_seasons,
        )

    report = LoadReport(
        total_rows=scan.total_rows,
        loaded_rows=scan.loaded_rows,
        skipped_rows=scan.skipped_rows,
        skip_reasons=dict(scan.skip_reasons),
        skipped_fields=scan.skipped_fields,
        duplicate_seasons=tables.duplicate_seasons,
        players=len(players),
        career_keys=len(career_recs),
        season_keys=len(season_recs),
        unordered_career_lists=len(unordered_career),
        unordered_season_lists=len(unordered_season),
    )
    logger.info(
        "Recommendation index ready: %d players, %d/%d rows loaded (%d skipped), %d career and %d season lists",
        report.players,
        report.loaded_rows,
        report.total_rows,
        report.skipped_rows,
        report.career_keys,
        report.season_keys,
    )

    return RecommendationIndex(
        players=players,
        seasons={player_id: tuple(years) for player_id, years in tables.seasons.items()},
        teams={player_id: tuple(teams) for player_id, teams in tables.teams.items()},
        season_stats=tables.season_stats,
        season_teams=tables.season_teams,
        career_stats=career_stats,
        career_recs=career_recs,
        season_recs=season_recs,
        report=report,
    )
