"""Read-only query layer over the joined similarity and statistics tables."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Optional, Tuple

from nbacomps.ingest.similarity import season_label
from nbacomps.models import PlayerRecord, SeasonKey, SeasonSimilarityEntry, SimilarityEntry


@dataclass(frozen=True)
class SeasonLine:
    year: int
    team: str
    stats: Dict[str, float]


@dataclass(frozen=True)
class PlayerProfile:
    """Player view returned by every query; unset sections stay ``None``."""

    player_id: int
    name: str
    years: str
    teams: Optional[Tuple[str, ...]] = None
    career_stats: Optional[Dict[str, float]] = None
    season_stats: Optional[Dict[str, float]] = None
    seasons: Optional[Tuple[SeasonLine, ...]] = None
    similarity_score: Optional[float] = None


@dataclass(frozen=True)
class LoadReport:
    total_rows: int = 0
    loaded_rows: int = 0
    skipped_rows: int = 0
    skip_reasons: Dict[str, int] = field(default_factory=dict)
    skipped_fields: int = 0
    duplicate_seasons: int = 0
    players: int = 0
    career_keys: int = 0
    season_keys: int = 0
    unordered_career_lists: int = 0
    unordered_season_lists: int = 0


@dataclass(frozen=True)
class RecommendationIndex:
    """Immutable lookup tables built once at startup.

    Nothing mutates these mappings after :func:`nbacomps.index.build_index`
    returns, so one instance can be shared by concurrent request handlers.
    """

    players: Mapping[int, PlayerRecord]
    seasons: Mapping[int, Tuple[int, ...]]
    teams: Mapping[int, Tuple[str, ...]]
    season_stats: Mapping[SeasonKey, Dict[str, float]]
    season_teams: Mapping[SeasonKey, str]
    career_stats: Mapping[int, Dict[str, float]]
    career_recs: Mapping[str, List[SimilarityEntry]]
    season_recs: Mapping[str, List[SeasonSimilarityEntry]]
    report: LoadReport = field(default_factory=LoadReport)

    def _team_for_season(self, player_id: int, year: int) -> str:
        team = self.season_teams.get((player_id, year))
        if team:
            return team
        teams = self.teams.get(player_id) or ()
        return teams[0] if teams else ""

    def _season_lines(self, player_id: int) -> Tuple[SeasonLine, ...]:
        return tuple(
            SeasonLine(
                year=year,
                team=self._team_for_season(player_id, year),
                stats=dict(self.season_stats.get((player_id, year), {})),
            )
            for year in self.seasons.get(player_id, ())
        )

    def _profile(self, player: PlayerRecord) -> PlayerProfile:
        career = self.career_stats.get(player.player_id)
        return PlayerProfile(
            player_id=player.player_id,
            name=player.name,
            years=player.years,
            teams=self.teams.get(player.player_id, ()),
            career_stats=dict(career) if career is not None else None,
            seasons=self._season_lines(player.player_id),
        )

    def get_player(self, player_id: int) -> Optional[PlayerProfile]:
        player = self.players.get(player_id)
        if player is None:
            return None
        return self._profile(player)

    def search_players(self, query: str) -> List[PlayerProfile]:
        """Case-insensitive substring match on names, sorted by name."""

        needle = query.casefold()
        matches = [player for player in self.players.values() if needle in player.name.casefold()]
        matches.sort(key=lambda player: (player.name.casefold(), player.name))
        return [self._profile(player) for player in matches]

    def career_recommendations(self, player_id: int) -> List[PlayerProfile]:
        entries = self.career_recs.get(str(player_id))
        if not entries:
            return []
        results: List[PlayerProfile] = []
        for entry in entries:
            target = self.players.get(entry.player_id)
            if target is None:
                continue
            results.append(replace(self._profile(target), similarity_score=entry.score))
        return results

    def season_recommendations(self, player_id: int, season: int) -> List[PlayerProfile]:
        """Neighbours of one player-season, each shown for its own matched season."""

        entries = self.season_recs.get(season_label(player_id, season))
        if not entries:
            return []
        results: List[PlayerProfile] = []
        for entry in entries:
            target = self.players.get(entry.player_id)
            if target is None:
                continue
            stats = self.season_stats.get((entry.player_id, entry.season))
            results.append(
                PlayerProfile(
                    player_id=target.player_id,
                    name=target.name,
                    years=str(entry.season),
                    teams=(self._team_for_season(entry.player_id, entry.season),),
                    season_stats=dict(stats) if stats is not None else None,
                    similarity_score=entry.score,
                )
            )
        return results

    def seasons_for_player(self, player_id: int) -> List[int]:
        return sorted(set(self.seasons.get(player_id, ())), reverse=True)
