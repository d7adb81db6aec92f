"""CSV export helpers for query results."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Dict, Iterable, List, Sequence

from nbacomps.index import PlayerProfile


BASE_COLUMNS = ("player_id", "name", "years", "teams", "similarity_score")


def _profile_stats(profile: PlayerProfile) -> Dict[str, float]:
    if profile.season_stats is not None:
        return profile.season_stats
    return profile.career_stats or {}


def _stat_columns(profiles: Sequence[PlayerProfile]) -> List[str]:
    columns: set[str] = set()
    for profile in profiles:
        columns.update(_profile_stats(profile))
    return sorted(columns)


def export_players_to_csv(profiles: Iterable[PlayerProfile]) -> str:
    """Render profiles one per row; stat columns come from season or career stats."""

    rows = list(profiles)
    stat_columns = _stat_columns(rows)
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow([*BASE_COLUMNS, *stat_columns])
    for profile in rows:
        stats = _profile_stats(profile)
        writer.writerow([
            profile.player_id,
            profile.name,
            profile.years,
            "/".join(profile.teams or ()),
            "" if profile.similarity_score is None else f"{profile.similarity_score:.4f}",
            *("" if stats.get(column) is None else stats[column] for column in stat_columns),
        ])
    return buffer.getvalue()
