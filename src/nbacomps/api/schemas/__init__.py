"""Pydantic models for API I/O."""

from .health import HealthResponse, LoadReportResponse
from .player import PlayerResponse, SeasonResponse

__all__ = [
    "HealthResponse",
    "LoadReportResponse",
    "PlayerResponse",
    "SeasonResponse",
]
