"""Runtime settings resolved from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Tuple


logger = logging.getLogger(__name__)

_DATA_DIR_ENV = "NBACOMPS_DATA_DIR"
_CAREER_PATH_ENV = "NBACOMPS_CAREER_PATH"
_SEASON_PATH_ENV = "NBACOMPS_SEASON_PATH"
_STATS_PATH_ENV = "NBACOMPS_STATS_PATH"
_MAX_QUERY_LENGTH_ENV = "NBACOMPS_MAX_QUERY_LENGTH"
_STRICT_ORDERING_ENV = "NBACOMPS_STRICT_ORDERING"
_CORS_ORIGINS_ENV = "NBACOMPS_CORS_ORIGINS"
_LOG_LEVEL_ENV = "NBACOMPS_LOG_LEVEL"

CAREER_FILENAME = "career_recommendations.json"
SEASON_FILENAME = "season_recommendations.json"
STATS_FILENAME = "player_dataset_CLEANED.csv"

_MAX_QUERY_LENGTH_DEFAULT = 100
_CORS_ORIGINS_DEFAULT = ("http://localhost:3000",)
_LOG_LEVEL_DEFAULT = "INFO"


def _env_int(env: Mapping[str, str], name: str, default: int, *, min_value: int | None = None) -> int:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("%s below minimum %d: %s; using default %d", name, min_value, raw, default)
        return default
    return value


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    text = raw.strip().lower()
    if text in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if text in {"0", "false", "f", "no", "n", "off", ""}:
        return False
    logger.warning("Invalid flag for %s: %s; using default %s", name, raw, default)
    return default


def _env_log_level(env: Mapping[str, str], name: str, default: str) -> str:
    raw = env.get(name)
    if raw is None:
        return default
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Invalid log level for %s: %s; using default %s", name, raw, default)
        return default
    return level


def _env_list(env: Mapping[str, str], name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = env.get(name)
    if raw is None:
        return default
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    career_path: Path
    season_path: Path
    stats_path: Path
    max_query_length: int = _MAX_QUERY_LENGTH_DEFAULT
    strict_ordering: bool = False
    cors_origins: Tuple[str, ...] = _CORS_ORIGINS_DEFAULT
    log_level: str = _LOG_LEVEL_DEFAULT

    @classmethod
    def for_data_dir(cls, data_dir: Path, **overrides) -> "Settings":
        return cls(
            career_path=data_dir / CAREER_FILENAME,
            season_path=data_dir / SEASON_FILENAME,
            stats_path=data_dir / STATS_FILENAME,
            **overrides,
        )

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if env is None else env
        data_dir = Path(env.get(_DATA_DIR_ENV, "data"))
        return cls(
            career_path=Path(env.get(_CAREER_PATH_ENV, data_dir / CAREER_FILENAME)),
            season_path=Path(env.get(_SEASON_PATH_ENV, data_dir / SEASON_FILENAME)),
            stats_path=Path(env.get(_STATS_PATH_ENV, data_dir / STATS_FILENAME)),
            max_query_length=_env_int(env, _MAX_QUERY_LENGTH_ENV, _MAX_QUERY_LENGTH_DEFAULT, min_value=1),
            strict_ordering=_env_bool(env, _STRICT_ORDERING_ENV, False),
            cors_origins=_env_list(env, _CORS_ORIGINS_ENV, _CORS_ORIGINS_DEFAULT),
            log_level=_env_log_level(env, _LOG_LEVEL_ENV, _LOG_LEVEL_DEFAULT),
        )

    def with_paths(
        self,
        *,
        career_path: Path | None = None,
        season_path: Path | None = None,
        stats_path: Path | None = None,
    ) -> "Settings":
        return replace(
            self,
            career_path=career_path or self.career_path,
            season_path=season_path or self.season_path,
            stats_path=stats_path or self.stats_path,
        )
