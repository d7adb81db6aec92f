"""Configuration helpers for data sources and service limits."""

from .settings import CAREER_FILENAME, SEASON_FILENAME, STATS_FILENAME, Settings

__all__ = [
    "CAREER_FILENAME",
    "SEASON_FILENAME",
    "STATS_FILENAME",
    "Settings",
]
