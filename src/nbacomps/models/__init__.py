"""Shared data models."""

from .player import PlayerRecord, SeasonKey, SeasonSimilarityEntry, SimilarityEntry

__all__ = ["PlayerRecord", "SeasonKey", "SeasonSimilarityEntry", "SimilarityEntry"]
