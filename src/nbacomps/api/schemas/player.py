from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SeasonResponse(_CamelModel):
    year: int
    team: str = ""
    stats: Dict[str, float] = Field(default_factory=dict)


class PlayerResponse(_CamelModel):
    player_id: int
    name: str
    years: str = ""
    teams: List[str] | None = None
    career_stats: Dict[str, float] | None = None
    season_stats: Dict[str, float] | None = None
    seasons: List[SeasonResponse] | None = None
    similarity_score: float | None = None
