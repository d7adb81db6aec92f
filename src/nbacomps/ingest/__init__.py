"""Input adapters that parse the offline similarity and statistics artifacts."""

from .errors import IndexLoadError, SimilarityOrderError
from .similarity import (
    check_ordering,
    is_descending,
    load_career_similarity,
    load_season_similarity,
    season_label,
)
from .stats import (
    IDENTITY_COLUMNS,
    ParsedRow,
    SkippedRow,
    StatsScan,
    iter_stats_rows,
    parse_stats_row,
)

__all__ = [
    "IDENTITY_COLUMNS",
    "IndexLoadError",
    "ParsedRow",
    "SimilarityOrderError",
    "SkippedRow",
    "StatsScan",
    "check_ordering",
    "is_descending",
    "iter_stats_rows",
    "load_career_similarity",
    "load_season_similarity",
    "parse_stats_row",
    "season_label",
]
