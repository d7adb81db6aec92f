"""Canonical player and similarity models shared across ingestion and index layers."""

from __future__ import annotations

from typing import Any, Dict, Tuple

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict


SeasonKey = Tuple[int, int]

_ENTRY_FIELD_ALIASES = {
    "playerid": "player_id",
    "season": "season",
    "year": "season",
    "score": "score",
}


def _normalize_entry_keys(data: Any) -> Any:
    if not isinstance(data, dict):
        return data
    normalized: Dict[str, Any] = {}
    for key, value in data.items():
        token = str(key).replace("_", "").strip().lower()
        normalized[_ENTRY_FIELD_ALIASES.get(token, key)] = value
    return normalized


class PlayerRecord(BaseModel):
    """Identity of a player as first seen in the stats table."""

    player_id: int
    name: str = Field(..., min_length=1)
    years: str = ""

    model_config = ConfigDict(frozen=True)


class SimilarityEntry(BaseModel):
    """Career-scoped neighbour produced by the offline model."""

    player_id: int
    score: float

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _accept_any_case(cls, data: Any) -> Any:
        return _normalize_entry_keys(data)


class SeasonSimilarityEntry(BaseModel):
    """Season-scoped neighbour: a target player in one specific season."""

    player_id: int
    season: int
    score: float

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _accept_any_case(cls, data: Any) -> Any:
        return _normalize_entry_keys(data)
