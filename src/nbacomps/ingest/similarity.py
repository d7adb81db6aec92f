"""Load the offline similarity artifacts (career and season JSON files)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from nbacomps.models import SeasonSimilarityEntry, SimilarityEntry

from .errors import IndexLoadError, SimilarityOrderError


logger = logging.getLogger(__name__)

EntryT = TypeVar("EntryT", bound=BaseModel)


def season_label(player_id: int, season: int) -> str:
    return f"{player_id}_{season}"


def _read_json_object(path: Path) -> dict:
    try:
        text = path.read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise IndexLoadError(f"Unable to read similarity file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise IndexLoadError(f"Similarity file {path} is not valid UTF-8: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise IndexLoadError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise IndexLoadError(f"{path} must contain a JSON object keyed by player")
    return data


def _load_mapping(path: Path, entry_type: Type[EntryT]) -> Dict[str, List[EntryT]]:
    data = _read_json_object(path)
    mapping: Dict[str, List[EntryT]] = {}
    for raw_key, raw_entries in data.items():
        key = str(raw_key).strip()
        if not isinstance(raw_entries, list):
            raise IndexLoadError(f"{path}: value for key '{key}' is not a list")
        try:
            mapping[key] = [entry_type.model_validate(item) for item in raw_entries]
        except ValidationError as exc:
            raise IndexLoadError(f"{path}: invalid entry under key '{key}': {exc}") from exc
    logger.debug("Loaded %d similarity lists from %s", len(mapping), path)
    return mapping


def load_career_similarity(path: Path) -> Dict[str, List[SimilarityEntry]]:
    return _load_mapping(path, SimilarityEntry)


def load_season_similarity(path: Path) -> Dict[str, List[SeasonSimilarityEntry]]:
    return _load_mapping(path, SeasonSimilarityEntry)


def is_descending(entries: Sequence[SimilarityEntry | SeasonSimilarityEntry]) -> bool:
    return all(prev.score >= cur.score for prev, cur in zip(entries, entries[1:]))


def check_ordering(
    mapping: Dict[str, List[SimilarityEntry]] | Dict[str, List[SeasonSimilarityEntry]],
    *,
    source: str,
    strict: bool = False,
) -> List[str]:
    """Return keys whose lists are not sorted by descending score.

    Lists are served in stored order either way; ``strict`` turns the first
    offending key into a load failure.
    """

    unordered = [key for key, entries in mapping.items() if not is_descending(entries)]
    if unordered and strict:
        raise SimilarityOrderError(
            f"{source}: {len(unordered)} similarity lists are not sorted by descending score "
            f"(first: '{unordered[0]}')"
        )
    if unordered:
        logger.warning(
            "%s: %d similarity lists are not sorted by descending score; serving stored order",
            source,
            len(unordered),
        )
    return unordered
