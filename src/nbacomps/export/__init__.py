"""Export helpers for query results."""

from .players import export_players_to_csv

__all__ = ["export_players_to_csv"]
