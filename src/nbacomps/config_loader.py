"""Persist and load CLI data source profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class SourceProfile:
    career_path: Optional[Path] = None
    season_path: Optional[Path] = None
    stats_path: Optional[Path] = None

    @classmethod
    def load(cls, path: Path) -> "SourceProfile":
        data = json.loads(path.read_text(encoding="utf-8"))

        def _path(key: str) -> Optional[Path]:
            value = data.get(key)
            return Path(value) if value else None

        return cls(
            career_path=_path("career_path"),
            season_path=_path("season_path"),
            stats_path=_path("stats_path"),
        )

    def save(self, path: Path) -> None:
        payload = {
            "career_path": str(self.career_path) if self.career_path else None,
            "season_path": str(self.season_path) if self.season_path else None,
            "stats_path": str(self.stats_path) if self.stats_path else None,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
