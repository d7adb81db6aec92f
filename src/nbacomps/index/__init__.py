"""In-memory recommendation index: load, join and query."""

from .builder import average_stats, build_index, format_years
from .service import LoadReport, PlayerProfile, RecommendationIndex, SeasonLine

__all__ = [
    "LoadReport",
    "PlayerProfile",
    "RecommendationIndex",
    "SeasonLine",
    "average_stats",
    "build_index",
    "format_years",
]
