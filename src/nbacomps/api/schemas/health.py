from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, Field


class LoadReportResponse(BaseModel):
    total_rows: int
    loaded_rows: int
    skipped_rows: int
    skip_reasons: Dict[str, int] = Field(default_factory=dict)
    skipped_fields: int
    duplicate_seasons: int
    players: int
    career_keys: int
    season_keys: int
    unordered_career_lists: int
    unordered_season_lists: int


class HealthResponse(BaseModel):
    status: str
    report: LoadReportResponse
